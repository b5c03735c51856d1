"""
STL variant detection.

Reads the second line of the file as text and looks for ``facet``. The
first-line ``solid`` convention is not trusted: plenty of binary exporters
start their 80-byte header with ``solid`` too.
"""

import logging
from pathlib import Path
from typing import Union

from .constants import (
    ASCII_FACET_TOKEN,
    DEFAULT_TEXT_ENCODING,
    DETECT_LINE_LIMIT,
    FORMAT_ASCII,
    FORMAT_BINARY,
)
from .exceptions import raise_load_error

logger = logging.getLogger(__name__)


def detect_format(path: Union[str, Path], encoding: str = DEFAULT_TEXT_ENCODING) -> str:
    """
    Classify a file as ASCII or binary STL.

    The probe uses its own file handle; nothing is left open or positioned
    for the decoder that runs afterwards. Lines are read at most
    DETECT_LINE_LIMIT characters at a time; a first line that long is
    classified binary without reading further.

    Args:
        path: Path to the STL file
        encoding: Text encoding for the probe (undecodable bytes are replaced)

    Returns:
        "ascii" or "binary"

    Raises:
        LoadError: If the file cannot be opened or read
    """
    try:
        with open(path, 'r', encoding=encoding, errors='replace') as f:
            first = f.readline(DETECT_LINE_LIMIT)
            if len(first) >= DETECT_LINE_LIMIT and not first.endswith('\n'):
                second = ""
            else:
                second = f.readline(DETECT_LINE_LIMIT)
    except (OSError, LookupError) as e:
        raise_load_error(f"Error importing file [{path}]", path=path, cause=e)

    kind = FORMAT_ASCII if ASCII_FACET_TOKEN in second.lower() else FORMAT_BINARY
    logger.debug(f"Detected {kind} STL: {path}")
    return kind
