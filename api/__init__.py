"""
Clipvault API package.

Provides the FastAPI application for the Clipvault audio upload service.
The application instance lives in ``api.app``.
"""
