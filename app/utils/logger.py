import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path


def setup_logger(name: str = "app", log_level: str | int | None = None) -> logging.Logger:
    """
    Configura el logger de la aplicación con salida por consola y, si `LOG_FILE`
    está definido, también a un fichero rotativo.
    """
    logger = logging.getLogger(name)
    logger.setLevel(log_level or os.getenv("LOG_LEVEL", "INFO").upper())

    # Evita duplicar handlers si el logger ya está configurado (recargas de uvicorn)
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_file = os.getenv("LOG_FILE")
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"  # 5 MB
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
