"""Logging utility for CSS Linter."""

import logging
import os
from typing import Optional, Union

import cssutils

from .config import LOG_FORMAT, LOG_DATE_FORMAT, LOG_LEVEL


def setup_logging(log_level: Union[int, str] = LOG_LEVEL, log_file: Optional[str] = None) -> None:
    """Set up logging configuration.

    Args:
        log_level: Level name or number
        log_file: Optional file to mirror log records into
    """
    handlers = [logging.StreamHandler()]
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=handlers,
        force=True,
    )
    silence_cssutils()


def silence_cssutils() -> None:
    """Keep cssutils' own validation chatter out of the lint output."""
    cssutils.log.setLevel(logging.CRITICAL)


# Exported functions
__all__ = ['setup_logging', 'silence_cssutils']
