import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"


def setup_logger(name: str, level: str = "WARNING", log_file: Optional[str] = None) -> logging.Logger:
    handlers = [logging.FileHandler(log_file)] if log_file else None
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.WARNING),
        format=LOG_FORMAT,
        handlers=handlers,
    )
    logger = logging.getLogger(name)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    return logger
