"""
PostBoard Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Access Log] → [CORS] → Route Handler

    - Request ID runs first so the access log line carries the id
    - CORS answers preflight OPTIONS requests and adds headers to responses
"""
