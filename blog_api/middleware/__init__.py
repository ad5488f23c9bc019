# Middleware package init
"""
Blog API: Middleware Package
==============================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters):
    Request → [Request ID] → [Access Log] → [GZip] → [CORS] → Route Handler

    Responses travel back through the chain in reverse, so the access log
    sees the final status code and the request ID header is set last.
"""
