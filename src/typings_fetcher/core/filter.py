import json
import logging
import posixpath
from pathlib import Path

from typings_fetcher.models import FileMapping

logger = logging.getLogger(__name__)


def declares_typings(manifest_source: str) -> bool:
    """Return whether a ``package.json`` body names a ``typings``/``types`` entry point.

    Malformed manifests count as not declaring one.
    """
    try:
        parsed = json.loads(manifest_source)
    except ValueError:
        logger.debug("Ignoring malformed package.json")
        return False
    if not isinstance(parsed, dict):
        return False
    return bool(parsed.get("typings") or parsed.get("types"))


def clean_files(files: FileMapping, package_path: str | Path) -> FileMapping:
    """Keep every ``.ts`` file and only the ``package.json`` files that help resolve them.

    The root package's manifest is always kept. Any other manifest survives if it
    declares a typings entry point or if a ``.ts`` file lives below its directory.
    """
    root_manifest = posixpath.join(Path(package_path).as_posix(), "package.json")
    ts_paths = [p for p in files if p.endswith(".ts")]

    def _keep_manifest(path: str) -> bool:
        if path == root_manifest:
            return True
        if declares_typings(files[path]):
            return True
        directory = posixpath.dirname(path) + "/"
        return any(p.startswith(directory) for p in ts_paths)

    cleaned: FileMapping = {}
    for path, code in files.items():
        if path.endswith(".ts"):
            cleaned[path] = code
        elif posixpath.basename(path) == "package.json" and _keep_manifest(path):
            cleaned[path] = code
    return cleaned
