"""
Core infrastructure: database, clock, security and errors.
"""
