"""Persistence layer for computed latency statistics.

``interfaces`` holds the backend-agnostic contracts; ``sqlite`` the durable
implementation; ``memory`` an in-process store for tests and dry runs.
"""
