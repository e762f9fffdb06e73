"""Run the external package installer into an isolated staging directory."""

from __future__ import annotations

import asyncio
import contextlib
import hashlib
import json
import logging
import os
import secrets
from collections.abc import Sequence
from pathlib import Path

from typings_fetcher.errors import InstallError, InvalidDependencyError
from typings_fetcher.models import DependencySpec, StagingLocation

logger = logging.getLogger(__name__)

_READ_CHUNK = 64 * 1024

_STAGING_MANIFEST = {"name": "typings-staging", "version": "1.0.0", "private": True}


def new_staging_location(spec: DependencySpec, root: str | Path) -> StagingLocation:
    """Build a staging identifier unique enough for concurrent requests on the same dependency."""
    digest = hashlib.sha1(str(spec).encode("utf-8")).hexdigest()[:8]
    return StagingLocation(identifier=f"{digest}{secrets.randbelow(100000)}", root=Path(root))


def validate_install_target(spec: DependencySpec) -> str:
    target = spec.install_target
    if not spec.name and not spec.is_url:
        raise InvalidDependencyError("Dependency name must not be empty")
    if any(part.startswith("-") for part in (target, spec.name, spec.version)):
        raise InvalidDependencyError(f"Invalid dependency '{target}'")
    if any(ch.isspace() or not ch.isprintable() for ch in target):
        raise InvalidDependencyError(f"Invalid dependency '{target}'")
    return target


class _OutputOverflow(Exception):
    pass


class YarnInstaller:
    """Install one package and its production dependencies with ``yarn add``.

    Implements the ``PackageInstaller`` protocol.
    """

    def __init__(
        self,
        executable: str = "yarn",
        timeout: float = 120.0,
        max_buffer: int = 1024 * 1000,
    ) -> None:
        self._executable = executable
        self._timeout = timeout
        self._max_buffer = max_buffer

    def command(self, target: str, staging: StagingLocation) -> list[str]:
        return [
            self._executable,
            "add",
            "--no-lockfile",
            "--non-interactive",
            "--no-progress",
            "--prod",
            "--cache-folder",
            str(staging.path / ".yarn-cache"),
            target,
        ]

    async def install(self, spec: DependencySpec, staging: StagingLocation) -> None:
        target = validate_install_target(spec)
        logger.info("Installing %s, id: %s", target, staging.identifier)

        staging.path.mkdir(parents=True, exist_ok=True)
        (staging.path / "package.json").write_text(json.dumps(_STAGING_MANIFEST), encoding="utf-8")

        await self._run(self.command(target, staging), staging)

    async def _run(self, argv: Sequence[str], staging: StagingLocation) -> None:
        env = {**os.environ, "HOME": str(staging.path)}
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                cwd=str(staging.path),
                env=env,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise InstallError(staging.identifier, f"could not start installer: {exc}") from exc

        received = 0
        chunks: list[bytes] = []

        async def _drain(stream: asyncio.StreamReader) -> None:
            nonlocal received
            while chunk := await stream.read(_READ_CHUNK):
                received += len(chunk)
                if received > self._max_buffer:
                    raise _OutputOverflow
                chunks.append(chunk)

        assert proc.stdout is not None and proc.stderr is not None
        try:
            await asyncio.wait_for(
                asyncio.gather(_drain(proc.stdout), _drain(proc.stderr), proc.wait()),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as exc:
            await _kill(proc)
            raise InstallError(staging.identifier, f"installer timed out after {self._timeout:g}s") from exc
        except _OutputOverflow as exc:
            await _kill(proc)
            raise InstallError(
                staging.identifier, f"installer output exceeded {self._max_buffer} bytes"
            ) from exc

        if proc.returncode != 0:
            output = b"".join(chunks).decode("utf-8", errors="replace").strip()
            raise InstallError(
                staging.identifier,
                f"Command failed: {' '.join(argv)} (exit code {proc.returncode})\n{output}",
            )


async def _kill(proc: asyncio.subprocess.Process) -> None:
    with contextlib.suppress(ProcessLookupError):
        proc.kill()
    await proc.wait()
