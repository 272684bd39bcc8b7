"""
Design-to-Code API entrypoint.

Usage:
    python -m designbridge
"""

import uvicorn

from .config import API_HOST, API_PORT


def main() -> int:
    uvicorn.run("app.main:app", host=API_HOST, port=API_PORT)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
