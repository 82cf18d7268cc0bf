"""
API layer for the user service.

Exposes the HTTP endpoints, the JSON envelopes they answer with, the
application-level exception handlers and the request middleware.
"""
