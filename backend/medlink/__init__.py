"""
MedLink: data-access layer and API for a healthcare-professional network.
"""
from medlink.__version__ import __version__

__all__ = ["__version__"]
