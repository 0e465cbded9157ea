"""
Core configuration and logging.
"""
