"""
File Utilities - Safe file operations for exports
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def ensure_parent_exists(path: Path) -> Path:
    """
    Ensure parent directory of path exists.

    Args:
        path: File path

    Returns:
        The same path (for chaining)
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def get_unique_path(path: Path, max_attempts: int = 10000) -> Path:
    """
    Get a unique path by appending a number if path exists.

    Args:
        path: Desired path
        max_attempts: Upper bound on numbered candidates

    Returns:
        Unique path (original if doesn't exist, or with _2, _3, etc.)

    Raises:
        FileExistsError: If no free name is found

    Examples:
        >>> get_unique_path(Path("drawer_20241215_120000.png"))
        Path('drawer_20241215_120000.png')  # if doesn't exist
        >>> get_unique_path(Path("drawer_20241215_120000.png"))
        Path('drawer_20241215_120000_2.png')  # if it exists
    """
    if not path.exists():
        return path

    stem = path.stem
    suffix = path.suffix
    parent = path.parent

    for counter in range(2, max_attempts + 2):
        new_path = parent / f"{stem}_{counter}{suffix}"
        if not new_path.exists():
            return new_path

    logger.error(f"No unique name available for {path}")
    raise FileExistsError(f"Could not find unique name for {path}")


__all__ = ['ensure_parent_exists', 'get_unique_path']
