"""
CRUD operations for the application.

Every function takes an AsyncSession first and returns a StoreResult.
"""
from medlink.crud import profile
from medlink.crud import post
from medlink.crud import connection
from medlink.crud import follow
from medlink.crud import career
from medlink.crud import institution
from medlink.crud import job
from medlink.crud import event

__all__ = ["profile", "post", "connection", "follow", "career", "institution", "job", "event"]
