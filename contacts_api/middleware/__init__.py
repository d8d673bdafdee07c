"""
Contacts API — Middleware Package
===================================

Middleware Chain:
    Request → [Request ID] → [Access Logging] → [CORS] → Route Handler

The request ID is set before the access log line is written, so every log
entry for a request carries the same correlation ID.
"""
