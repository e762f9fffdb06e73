import logging
import os
from pathlib import Path

from typings_fetcher.models import FileMapping

logger = logging.getLogger(__name__)

# Large directories that never carry typings.
BLACKLISTED_DIRECTORIES: frozenset[str] = frozenset({"__tests__", "aws-sdk"})

# Directories where only declaration files can be trusted as typings.
TYPE_ONLY_DIRECTORIES: frozenset[str] = frozenset({"src"})


def is_typings_candidate(relative_path: str) -> bool:
    """Return whether a file, given relative to the walk root, should be collected."""
    *directories, filename = relative_path.split("/")
    if filename == "package.json":
        return True

    type_only = any(segment in TYPE_ONLY_DIRECTORIES for segment in directories)
    required_ending = ".d.ts" if type_only else ".ts"
    return filename.endswith(required_ending)


def _is_inside(path: Path, root: Path) -> bool:
    try:
        path.resolve().relative_to(root)
    except (OSError, RuntimeError, ValueError):
        return False
    return True


def collect_files(root: str | Path) -> FileMapping:
    """Walk *root* and return every typings-relevant file keyed by absolute path.

    Blacklisted directories are skipped, directory symlinks are never followed,
    and file symlinks are only read when they point back inside *root*.
    """
    base = Path(root)
    resolved_root = base.resolve()
    files: FileMapping = {}

    def _walk(directory: Path) -> None:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)

        for entry in entries:
            full_path = Path(entry.path)
            if entry.is_dir(follow_symlinks=False):
                if entry.name not in BLACKLISTED_DIRECTORIES:
                    _walk(full_path)
                continue

            relative = full_path.relative_to(base).as_posix()
            if not is_typings_candidate(relative):
                continue

            if entry.is_symlink():
                if not _is_inside(full_path, resolved_root):
                    logger.warning("Skipping symlink %s pointing outside %s", full_path, base)
                    continue
                if not full_path.is_file():
                    continue
            elif not entry.is_file(follow_symlinks=False):
                continue

            files[full_path.as_posix()] = full_path.read_text(encoding="utf-8", errors="replace")

    if base.is_dir():
        _walk(base)
    return files


def has_declarations(root: str | Path) -> bool:
    """Return whether any ``.d.ts`` file exists below *root*."""
    for _dirpath, _dirnames, filenames in os.walk(root):
        if any(name.endswith(".d.ts") for name in filenames):
            return True
    return False
