# mockapi/storage/factory.py
import logging
from pathlib import Path

from mockapi.core.config import Settings
from mockapi.storage.base import Storage
from mockapi.storage.file import FileStorage
from mockapi.storage.sql import SQLStorage

logger = logging.getLogger(__name__)

DATA_FILE_NAME = "data.json"


def create_storage(config: Settings) -> Storage:
    """Pick the backend once at startup: SQL when DATABASE_URL is set, else the JSON file."""
    if config.DATABASE_URL:
        logger.info("Using SQL storage")
        return SQLStorage(config.DATABASE_URL)

    if not config.DATA_PATH:
        logger.info("DATA_PATH is empty, using in-memory storage")
        return FileStorage()

    file_path = Path(config.DATA_PATH) / DATA_FILE_NAME
    logger.info(f"Using file storage at {file_path}")
    return FileStorage(str(file_path))
