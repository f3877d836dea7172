import os
import sys
from typing import List, Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def setup_logging(debug_mode: bool = True, log_dir: Optional[str] = None, replace_handlers: bool = True) -> List[int]:
    """
    Configures Loguru sinks for the collection engine.

    The engine itself only ever calls ``logger``; hosts that want console or
    file output call this once at start-up.

    Args:
        debug_mode: Console level DEBUG instead of INFO
        log_dir: Directory for a rotating file sink holding only collectionkit records
        replace_handlers: Remove existing sinks first (including loguru's default one)

    Returns:
        Handler ids, so a host can ``logger.remove(id)`` them again
    """
    if replace_handlers:
        logger.remove()

    level = "DEBUG" if debug_mode else "INFO"
    handler_ids = [logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)]

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handler_ids.append(logger.add(
            os.path.join(log_dir, "collection_{time}.log"),
            rotation="10 MB",
            retention="1 week",
            level="DEBUG",
            filter="collectionkit",
        ))

    logger.info("Logging initialized.")
    return handler_ids
