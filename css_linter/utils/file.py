"""File utility for CSS Linter."""

import os
import logging
from typing import List

import chardet

from .config import CSS_EXTENSIONS
from .error import FileOperationError

logger = logging.getLogger(__name__)


def detect_encoding(raw_data: bytes) -> str:
    """Detect the encoding of raw file content.

    Args:
        raw_data: File content

    Returns:
        Encoding name, utf-8 when detection is inconclusive
    """
    if raw_data.startswith(b'\xef\xbb\xbf'):
        return 'utf-8-sig'
    result = chardet.detect(raw_data)
    return result['encoding'] or 'utf-8'


def safe_read_file(file_path: str) -> str:
    """Safely read a stylesheet from disk.

    Args:
        file_path: Path to the file

    Returns:
        File content

    Raises:
        FileOperationError: If file read fails
    """
    try:
        with open(file_path, 'rb') as f:
            raw_data = f.read()
    except OSError as e:
        raise FileOperationError(f"Failed to read file {file_path}: {e}")

    encoding = detect_encoding(raw_data)
    logger.debug(f"Reading {file_path} as {encoding}")
    try:
        return raw_data.decode(encoding)
    except (UnicodeDecodeError, LookupError) as e:
        raise FileOperationError(f"Failed to decode file {file_path} as {encoding}: {e}")


def collect_css_files(paths: List[str]) -> List[str]:
    """Expand directories into the stylesheets they contain.

    Args:
        paths: Files and directories given on the command line

    Returns:
        File paths in the given order, directories expanded recursively
    """
    files = []
    for path in paths:
        if os.path.isdir(path):
            for root, dirs, names in os.walk(path):
                dirs.sort()
                for name in sorted(names):
                    if os.path.splitext(name)[1].lower() in CSS_EXTENSIONS:
                        files.append(os.path.join(root, name))
        else:
            files.append(path)
    return list(dict.fromkeys(files))


# Exported functions
__all__ = ['detect_encoding', 'safe_read_file', 'collect_css_files']
