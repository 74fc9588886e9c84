"""
Path validation for names that end up on disk.

Playlist names come straight from the shell, so they are checked before
being turned into file names.
"""

from pathlib import Path


class UnsafeNameError(ValueError):
    """A user-supplied name cannot be used as a file name."""

    pass


def is_path_within(path: Path, root: Path) -> bool:
    """Whether ``path`` resolves to ``root`` itself or somewhere below it.

    Symlinks and ``..`` are resolved first, so neither can escape ``root``.
    """
    try:
        path.resolve().relative_to(root.resolve())
        return True
    except ValueError:
        return False
    except (OSError, RuntimeError):
        # resolve() raises RuntimeError on symlink loops
        return False


def validate_file_name(name: str) -> str:
    """Return ``name`` if it is usable as a single file name, else raise UnsafeNameError."""
    stripped = name.strip()
    if not stripped:
        raise UnsafeNameError("name must not be empty")
    if "/" in stripped or "\\" in stripped:
        raise UnsafeNameError(f"'{name}' must not contain path separators")
    if stripped in (".", "..") or stripped.startswith("."):
        raise UnsafeNameError(f"'{name}' must not start with '.'")
    if "\x00" in stripped:
        raise UnsafeNameError(f"'{name}' contains a NUL byte")
    return stripped
