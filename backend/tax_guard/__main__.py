"""Run the dashboard with uvicorn: ``python -m backend.tax_guard``."""

from __future__ import annotations

import logging

import uvicorn

from .config import load_config


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = load_config()
    logging.getLogger(__name__).info(
        "Student Tax Guard is running at %s:%s", config.host, config.port
    )
    uvicorn.run("backend.tax_guard.main:app", host=config.host, port=config.port)


if __name__ == "__main__":
    main()
