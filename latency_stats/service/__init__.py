"""Service layer: persisting statistics and the command-line surface.

Modules here orchestrate ``base`` (computation, logging) and ``persistence``
(metric stores). Nothing is executed at import time.
"""
