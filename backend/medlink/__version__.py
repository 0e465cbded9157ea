"""
Version of the MedLink data API.
"""

__version__ = "0.3.0"
