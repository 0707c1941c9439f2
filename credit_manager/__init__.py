"""Distributed per-minute credit limiter backed by Redis."""

from loguru import logger

# Library events stay silent until the application calls setup_logger()
# or logger.enable("credit_manager").
logger.disable("credit_manager")
