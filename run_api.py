#!/usr/bin/env python
"""
Run the Clipvault API server.

Usage:
    python run_api.py
    python run_api.py --reload  # Development mode
    python run_api.py --in-memory  # No Supabase or S3 needed
"""

import argparse
import os

import uvicorn

from shared.config import get_settings


def main():
    parser = argparse.ArgumentParser(description="Run Clipvault API server")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--host", type=str, help="Host to bind to")
    parser.add_argument("--port", type=int, help="Port to bind to")
    parser.add_argument(
        "--in-memory",
        action="store_true",
        help="Keep users, uploads and objects in process memory",
    )
    args = parser.parse_args()

    if args.in_memory:
        # Read by the worker process when it loads settings
        os.environ["USE_IN_MEMORY_BACKENDS"] = "true"
        get_settings.cache_clear()

    settings = get_settings()

    uvicorn.run(
        "api.app:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload or settings.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
