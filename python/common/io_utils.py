"""
I/O utilities for SQL-to-Graph.
Safe path helpers shared by the script loader and the report writer.
"""
from pathlib import Path
from typing import Union


def safe_path(path: Union[str, Path]) -> Path:
    """
    Convert a path string to a Path object and expand user/home.

    Args:
        path: Path string or Path object.

    Returns:
        Path object with expanded user directory.
    """
    return Path(path).expanduser().resolve()


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path.

    Returns:
        Path object pointing to the directory.
    """
    dir_path = safe_path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path
