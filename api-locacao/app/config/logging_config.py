# app/config/logging_config.py
import logging

from app.config.settings import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
    )
    # SQL echo fica no logger do sqlalchemy, controlado por DEBUG
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
