"""
Utility functions for stl_mesh.

Strict value checks used when reading configuration, and formatting
helpers used by the CLI summary.
"""

from typing import Any

_TRUE_WORDS = ('true', '1', 'yes', 'on')
_FALSE_WORDS = ('false', '0', 'no', 'off')


def require_positive_int(val: Any, param_name: str) -> int:
    """
    Check that a configuration value is a positive integer.

    Booleans, floats (even integral ones such as ``2.0``) and numeric
    strings are rejected; JSON integers are the only accepted form.

    Args:
        val: Value to check
        param_name: Parameter name for error messages

    Returns:
        int: The value unchanged

    Raises:
        ValueError: If the value is not an int or is not positive

    Examples:
        >>> require_positive_int(128, "chunk_triangles")
        128
        >>> require_positive_int(2.5, "chunk_triangles")
        Traceback (most recent call last):
        ...
        ValueError: chunk_triangles must be a positive integer, got 2.5
    """
    if isinstance(val, bool) or not isinstance(val, int) or val <= 0:
        raise ValueError(f"{param_name} must be a positive integer, got {val!r}")
    return val


def parse_bool(val: Any, param_name: str) -> bool:
    """
    Read a boolean flag, accepting JSON booleans and the usual words.

    Raises:
        ValueError: For anything that is not clearly true or false

    Examples:
        >>> parse_bool(True, "flag")
        True
        >>> parse_bool("off", "flag")
        False
    """
    if isinstance(val, bool):
        return val
    if isinstance(val, str):
        word = val.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    raise ValueError(f"{param_name} must be a boolean, got {val!r}")


def format_memory_size(bytes_count: int) -> str:
    """
    Format a file size in human-readable form.

    Args:
        bytes_count: Size in bytes

    Returns:
        Formatted string (e.g., "1.5 GB", "256.0 MB")
    """
    size = float(bytes_count)
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size < 1024.0:
            return f"{size:.1f} {unit}"
        size /= 1024.0
    return f"{size:.1f} PB"
