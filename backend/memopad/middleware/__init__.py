# Middleware package init
"""
MemoPad — Middleware Package
=============================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Access Log] → [CORS] → Route Handler

    The request ID is assigned first so the access log line carries it.
"""
