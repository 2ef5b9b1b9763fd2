"""Run the API with uvicorn: python -m src.api"""

from __future__ import annotations

import logging

import uvicorn

from src.config import get_settings


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("src.api.main:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
