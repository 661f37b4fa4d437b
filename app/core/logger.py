import logging
import os
from logging.handlers import RotatingFileHandler

from app.core.config import settings

# Каталог логов может отсутствовать при первом запуске
os.makedirs(settings.LOG_DIR, exist_ok=True)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format=settings.LOG_FORMAT,
    handlers=[
        RotatingFileHandler(
            os.path.join(settings.LOG_DIR, settings.LOG_FILE),
            maxBytes=settings.LOG_MAX_BYTES,
            backupCount=settings.LOG_BACKUP_COUNT,
            encoding="utf-8",
        ),
        logging.StreamHandler(),
    ],
)

# pdfminer (внутри pdfplumber) пишет по сообщению на каждый объект страницы
for noisy_logger in ("pdfminer", "pdfplumber"):
    logging.getLogger(noisy_logger).setLevel(logging.WARNING)

logger = logging.getLogger("app")
