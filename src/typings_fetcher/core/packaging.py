"""Shape collected files into the response envelope and keep it under the size ceiling."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from typings_fetcher.config import DEFAULT_MAX_RESPONSE_BYTES
from typings_fetcher.models import FileMapping, ModuleFiles, PackagedFiles

logger = logging.getLogger(__name__)


def _dumps(value: Any) -> bytes:
    # Same encoding starlette's JSONResponse renders with.
    return json.dumps(value, ensure_ascii=False, allow_nan=False, indent=None, separators=(",", ":")).encode("utf-8")


def strip_prefix(files: FileMapping, prefix: str | Path) -> ModuleFiles:
    """Re-key *files* relative to *prefix* and wrap each body as ``{"module": {"code": ...}}``."""
    prefix_str = Path(prefix).as_posix()
    stripped: ModuleFiles = {}
    for path, code in files.items():
        key = path[len(prefix_str) :] if path.startswith(prefix_str) else path
        stripped[key] = {"module": {"code": code}}
    return stripped


def envelope_size(files: ModuleFiles, dropped_file_count: int | None = None) -> int:
    return len(_dumps(PackagedFiles(files, dropped_file_count).as_envelope()))


def drop_files(files: ModuleFiles, max_bytes: int = DEFAULT_MAX_RESPONSE_BYTES) -> PackagedFiles:
    """Greedily keep entries in order until the next one would reach *max_bytes*.

    Sizes are tracked incrementally; the base envelope is measured with the
    widest possible ``droppedFileCount`` so the final body never exceeds the
    ceiling whatever the actual count turns out to be.
    """
    size = envelope_size({}, dropped_file_count=len(files))
    kept: ModuleFiles = {}

    for path, entry in files.items():
        cost = len(_dumps(path)) + 1 + len(_dumps(entry))
        if kept:
            cost += 1
        if size + cost >= max_bytes:
            break
        kept[path] = entry
        size += cost

    return PackagedFiles(files=kept, dropped_file_count=len(files) - len(kept))


def drop_files_if_needed(files: ModuleFiles, max_bytes: int = DEFAULT_MAX_RESPONSE_BYTES) -> PackagedFiles:
    if envelope_size(files) <= max_bytes:
        return PackagedFiles(files=files)

    packaged = drop_files(files, max_bytes)
    logger.warning(
        "Response exceeded %d bytes, dropped %d of %d file(s)",
        max_bytes,
        packaged.dropped_file_count,
        len(files),
    )
    return packaged
