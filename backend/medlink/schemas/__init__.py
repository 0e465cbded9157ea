"""
Pydantic schemas for the application.
"""
from medlink.schemas import common
from medlink.schemas import profile
from medlink.schemas import post
from medlink.schemas import network
from medlink.schemas import career
from medlink.schemas import organization
from medlink.schemas import api

__all__ = ["common", "profile", "post", "network", "career", "organization", "api"]
