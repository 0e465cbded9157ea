"""
Database engine, session and models.
"""
