# Middleware package init
"""
Hiring Notifier Backend — Middleware Package
=============================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID runs first so the access log line can carry the id
    - Logging sees the final status code and measures the full duration
"""
