"""
Domain models loaded from the database.
"""
