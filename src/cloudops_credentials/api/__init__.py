"""
cloudops_credentials.api

HTTP API layer (FastAPI).

Responsibilities:
- App factory and startup/shutdown hooks.
- Routers exposing the credential Provider operations.
"""
