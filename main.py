#!/usr/bin/env python3
"""
AuthDemo -- user registration, login and JWT-gated access.

Usage:
  python main.py
  python main.py --port 8080
  python main.py --host 0.0.0.0 --port 8080
  python main.py --reload

Environment variables:
  JWT_SECRET   Required. HS256 signing key for session tokens.
  PORT         Listen port (default 5001). --port overrides it.
  HOST         Bind address (default 127.0.0.1). --host overrides it.

Values can also be placed in a .env file in the working directory.
"""

import argparse
import logging
import sys

import uvicorn
from pydantic import ValidationError

from core.config import get_settings

logger = logging.getLogger("authdemo.server")


def main() -> int:
    parser = argparse.ArgumentParser(
        prog="authdemo",
        description="Run the AuthDemo API server.",
    )
    parser.add_argument("--host", help="bind address (overrides HOST)")
    parser.add_argument("--port", type=int, help="listen port (overrides PORT)")
    parser.add_argument("--reload", action="store_true", help="restart on code changes (development)")
    args = parser.parse_args()

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"  [!] Invalid configuration:\n{e}", file=sys.stderr)
        return 1

    host = args.host if args.host is not None else settings.host
    port = args.port if args.port is not None else settings.port

    # Imported late so logging.basicConfig in api.main runs after config loads.
    from api.main import create_app

    logger.info("Starting server on %s:%d", host, port)
    if args.reload:
        # uvicorn needs an import string to reload; asgi.py re-reads settings.
        uvicorn.run("asgi:app", host=host, port=port, reload=True)
    else:
        uvicorn.run(create_app(settings), host=host, port=port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
