# Middleware package init
"""
Taskboard Backend — Middleware Package
========================================

Execution order for an incoming request (see create_app for registration):

    Request → [Rate Limit] → [Request ID] → [Access Log] → [GZip] → [CORS] → Route

Rate limiting runs first so rejected clients cost nothing; the request ID is
assigned before the access logger needs it.
"""
