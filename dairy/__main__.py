"""Run the API with uvicorn: ``python -m dairy --port 8000``."""
from __future__ import annotations

import argparse

import uvicorn

from dairy.core.log import shutdown_logging


def main() -> None:
    parser = argparse.ArgumentParser(description="Dairy payments API server")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true", help="Development auto-reload")
    args = parser.parse_args()

    try:
        uvicorn.run("dairy.main:app", host=args.host, port=args.port, reload=args.reload)
    finally:
        shutdown_logging()


if __name__ == "__main__":
    main()
