# AgentSync Path Utilities
# Path normalization, containment checks and copy primitives

import os
import shutil
from collections.abc import Callable, Iterator
from pathlib import Path

# Filesystem noise never copied into a destination tree
IGNORED_NAMES: frozenset[str] = frozenset({".git", ".DS_Store", ".gitkeep"})


def expand_path(path: str | Path) -> Path:
    """
    Expand ~ and environment variables in path.

    Args:
        path: Path string or Path object.

    Returns:
        Expanded, absolute Path object.
    """
    path_str = str(path).strip()
    path_str = os.path.expanduser(path_str)
    path_str = os.path.expandvars(path_str)
    return Path(os.path.abspath(path_str))


def ensure_dir(path: Path) -> Path:
    """
    Ensure directory exists, creating if necessary.

    Args:
        path: Directory path.

    Returns:
        The path that was ensured.
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def is_within(path: Path, base: Path) -> bool:
    """Check whether path is base itself or lies below it."""
    try:
        path.relative_to(base)
        return True
    except ValueError:
        return False


def relative_posix(path: Path, base: Path) -> str | None:
    """
    Get path relative to base as a forward-slash string.

    Both sides are resolved first so symlinked roots compare equal.

    Returns:
        Relative path string ("." for base itself), or None if path is not below base.
    """
    resolved_path = path.resolve()
    resolved_base = base.resolve()
    try:
        return resolved_path.relative_to(resolved_base).as_posix()
    except ValueError:
        return None


def iter_subdirectories(directory: Path) -> Iterator[Path]:
    """
    Yield visible child directories in name order.

    Hidden entries (leading dot) and unreadable directories are skipped.
    """
    try:
        children = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError:
        return
    for child in children:
        if child.name.startswith("."):
            continue
        if child.is_dir():
            yield child


def remove_path(path: Path) -> None:
    """Remove a file, symlink or directory tree."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def copy_file(source: Path, dest: Path) -> None:
    """
    Copy a single file over dest.

    Writes to a temporary sibling first and renames it into place, so dest
    either keeps its old content or gets the complete new content.
    """
    ensure_dir(dest.parent)
    if dest.is_dir() and not dest.is_symlink():
        shutil.rmtree(dest)

    temp_dest = dest.with_name(f".{dest.name}.tmp.{os.getpid()}")
    try:
        shutil.copy2(source, temp_dest)
        os.replace(temp_dest, dest)
    except OSError:
        if temp_dest.exists():
            temp_dest.unlink()
        raise


def replace_path(source: Path, dest: Path) -> None:
    """
    Replace dest entirely with a copy of source.

    Destructive: anything previously at dest is removed first.
    """
    ensure_dir(dest.parent)
    if dest.exists() or dest.is_symlink():
        remove_path(dest)

    if source.is_dir():
        shutil.copytree(source, dest, ignore=shutil.ignore_patterns(*IGNORED_NAMES))
    else:
        shutil.copy2(source, dest)


def merge_directory(
    source: Path,
    dest: Path,
    check_destination: Callable[[Path], object] | None = None,
) -> int:
    """
    Overlay every file under source onto dest.

    Files present in source are created or overwritten in dest. Files that
    only exist in dest are left untouched. Entries in IGNORED_NAMES are skipped.

    Args:
        source: Source directory.
        dest: Destination directory (created if missing).
        check_destination: Called with every destination entry before it is
            written or descended into; raises to stop the merge.

    Returns:
        Number of files written.
    """
    ensure_dir(dest)
    written = 0

    for child in sorted(source.iterdir(), key=lambda p: p.name):
        if child.name in IGNORED_NAMES:
            continue
        dest_child = dest / child.name
        if check_destination is not None:
            check_destination(dest_child)

        if child.is_dir():
            if dest_child.exists() and not dest_child.is_dir():
                dest_child.unlink()
            written += merge_directory(child, dest_child, check_destination)
        else:
            copy_file(child, dest_child)
            written += 1

    return written
