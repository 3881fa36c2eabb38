"""
PetClinic Backend — Middleware Package
========================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: correlation id stored in a ContextVar and echoed back
    2. Logging: method, path, status and duration with that id
"""
