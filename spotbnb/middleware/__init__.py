# Middleware package init
"""
SpotBnB Backend — Middleware Package
======================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: Accepts or generates X-Request-ID for log correlation
    2. Logging: One access line per request with status and duration
"""
