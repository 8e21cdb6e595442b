#!/usr/bin/env python3
"""Run the transport optimization API locally."""

import os

import uvicorn

# The optimizer itself listens on 8000 by default.
DEFAULT_PORT = 8080


def main() -> None:
    port = int(os.environ.get("PORT", DEFAULT_PORT))
    uvicorn.run(
        "app.main:app",
        app_dir=os.path.join(os.path.dirname(os.path.abspath(__file__)), "src"),
        host=os.environ.get("HOST", "127.0.0.1"),
        port=port,
        reload=os.environ.get("RELOAD", "").lower() in ("1", "true", "yes"),
    )


if __name__ == "__main__":
    main()
