# Middleware package init
"""
Document Store Gateway — Middleware Package
=============================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    Responses travel back in reverse, so the logging middleware sees the
    final status and the request id header is added last.
"""
