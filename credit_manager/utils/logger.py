import os
import sys

from loguru import logger

from config.settings import settings

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
    "<level>{message}</level>"
)


def setup_logger(
    *,
    json_logs: bool | None = None,
    level: str | None = None,
    log_dir: str | None = "logs",
) -> None:
    """Configure loguru sinks and turn on credit manager events.

    Defaults come from settings (JSON_LOGS, LOG_LEVEL); an explicit LOG_LEVEL
    env var still wins for the console. Balance/TTL traces go to a DEBUG file
    under ``log_dir`` unless it is None.
    """
    if json_logs is None:
        json_logs = settings.json_logs
    console_level = os.getenv("LOG_LEVEL", level or settings.log_level).upper()
    logger.remove()

    if json_logs:
        logger.add(sys.stdout, serialize=True, level=console_level)
    else:
        logger.add(sys.stdout, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    if log_dir is not None:
        logger.add(
            f"{log_dir}/credits_{{time:YYYY-MM-DD}}.log",
            rotation="20 MB",
            retention="7 days",
            compression="gz",
            level="DEBUG",
            serialize=json_logs,
        )

    # The package disables itself on import (library convention)
    logger.enable("credit_manager")
