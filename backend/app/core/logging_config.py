"""
Configuration du logging selon ENVIRONMENT : JSON sur stdout en production,
texte lisible sinon, fichier tournant en developpement.
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import List

from pythonjsonlogger import jsonlogger

from app.core.settings import Settings

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
JSON_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
# Bibliotheques trop bavardes en production
NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine")


def _stdout_handler(production: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    if production:
        handler.setFormatter(jsonlogger.JsonFormatter(
            JSON_FORMAT,
            rename_fields={"asctime": "timestamp", "levelname": "level"},
        ))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    return handler


def configure_logging(settings: Settings, log_file: str = "app.log") -> None:
    production = settings.ENVIRONMENT == "production"
    handlers: List[logging.Handler] = [_stdout_handler(production)]
    if settings.ENVIRONMENT == "development":
        file_handler = RotatingFileHandler(log_file, maxBytes=5_000_000, backupCount=3)
        file_handler.setFormatter(logging.Formatter(TEXT_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        handlers=handlers,
    )

    if production:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
