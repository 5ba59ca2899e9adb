"""Core layer: statistics computation, value types, errors and logging.

Modules here must not import the persistence or service layers at import
time.
"""
