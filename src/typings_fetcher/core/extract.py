from __future__ import annotations

import asyncio
import logging
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from typings_fetcher.core.collect import collect_files, has_declarations
from typings_fetcher.core.filter import clean_files
from typings_fetcher.core.installer import new_staging_location
from typings_fetcher.core.packaging import strip_prefix
from typings_fetcher.core.ports.installer import PackageInstaller
from typings_fetcher.core.query import parse_dependency_query
from typings_fetcher.errors import ExtractionError, InstallError
from typings_fetcher.models import DependencySpec, FileMapping, ModuleFiles, StagingLocation

logger = logging.getLogger(__name__)

# Known to pull in huge dependency trees without useful typings.
BLACKLISTED_DEPENDENCIES: frozenset[str] = frozenset({"react-scripts"})


@contextmanager
def staging_directory(spec: DependencySpec, root: str | Path) -> Iterator[StagingLocation]:
    """Create a fresh staging directory and remove it once the block exits, however it exits.

    The directory is created before the cleanup scope starts, so an identifier
    clash raises without touching the directory another request owns.
    """
    staging = new_staging_location(spec, root)
    try:
        staging.path.mkdir(parents=True, exist_ok=False)
    except FileExistsError as exc:
        raise InstallError(staging.identifier, "staging directory already exists") from exc

    try:
        yield staging
    finally:
        logger.info("Cleaning %s", staging.path)
        shutil.rmtree(staging.path, ignore_errors=True)


def extract_files(spec: DependencySpec, staging: StagingLocation) -> FileMapping:
    """Collect and filter the typings of an already installed dependency."""
    package_path = staging.package_path(spec.name)
    if not has_declarations(package_path):
        logger.info("%s ships no declaration files, id: %s", spec, staging.identifier)
    return clean_files(collect_files(staging.modules_path), package_path)


async def download_dependency_typings(
    query: str,
    installer: PackageInstaller,
    staging_root: str | Path,
) -> ModuleFiles:
    """Install the dependency described by *query* and return its typings keyed by package path."""
    spec = parse_dependency_query(query)
    if spec.name in BLACKLISTED_DEPENDENCIES:
        logger.info("Skipping blacklisted dependency %s", spec.name)
        return {}

    with staging_directory(spec, staging_root) as staging:
        await installer.install(spec, staging)
        try:
            files = await asyncio.to_thread(extract_files, spec, staging)
        except OSError as exc:
            raise ExtractionError(staging.identifier, str(exc)) from exc
        return strip_prefix(files, staging.modules_path)
