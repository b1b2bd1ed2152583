from __future__ import annotations

import argparse
import logging

import uvicorn

from app.config import settings
from app.logging_setup import configure_logging


def main() -> None:
    parser = argparse.ArgumentParser(description="Serve the lead intake webhook locally.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true")
    args = parser.parse_args()

    configure_logging(settings.LOG_LEVEL)
    logging.getLogger(__name__).info("Serving intake on %s:%d env=%s", args.host, args.port, settings.ENV)

    uvicorn.run("app.main:app", host=args.host, port=args.port, reload=args.reload, log_config=None)


if __name__ == "__main__":
    main()
