"""Centralized logger configuration.

Usage:
    from hyrule_compendium.utils.logger import get_logger
    logger = get_logger(__name__)

Streamlit re-executes the app script on every interaction, so handlers are
installed once; calling setup_logging() again only adjusts the level.
"""
import logging
import os

DEFAULT_LEVEL = os.getenv("COMPENDIUM_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = DEFAULT_LEVEL) -> None:
    resolved = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logging.getLogger().setLevel(resolved)


def get_logger(name: str) -> logging.Logger:
    if not logging.getLogger().handlers:
        setup_logging()
    return logging.getLogger(name)
