"""
Version 1 API routers.
"""
from medlink.api.v1 import connections, events, follows, institutions, jobs, posts, profiles

routers = [
    profiles.router,
    posts.router,
    connections.router,
    follows.router,
    institutions.router,
    jobs.router,
    events.router,
]

__all__ = ["routers"]
