"""Shared fixtures and helpers for tests."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pytest

from typings_fetcher.config import Settings
from typings_fetcher.errors import InstallError
from typings_fetcher.models import DependencySpec, StagingLocation

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: everything under tests/ runs without external services
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def write_tree(root: Path, files: Mapping[str, str | dict[str, Any]]) -> None:
    """Create *files* below *root*; dict values are written as JSON."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, dict):
            content = json.dumps(content)
        path.write_text(content, encoding="utf-8")


class RecordingInstaller:
    """Stand-in for the external installer that records every call.

    ``tree`` is written below the staging ``node_modules`` directory;
    ``fail_with`` makes the install raise ``InstallError`` after creating the
    staging directory.
    """

    def __init__(
        self,
        tree: Mapping[str, str | dict[str, Any]] | None = None,
        fail_with: str | None = None,
    ) -> None:
        self.tree = dict(tree or {})
        self.fail_with = fail_with
        self.calls: list[tuple[DependencySpec, StagingLocation]] = []

    @property
    def invoked(self) -> bool:
        return bool(self.calls)

    async def install(self, spec: DependencySpec, staging: StagingLocation) -> None:
        self.calls.append((spec, staging))
        staging.path.mkdir(parents=True, exist_ok=True)
        if self.fail_with is not None:
            raise InstallError(staging.identifier, self.fail_with)
        staging.modules_path.mkdir()
        write_tree(staging.modules_path, self.tree)


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def staging_root(tmp_path: Path) -> Path:
    root = tmp_path / "staging"
    root.mkdir()
    return root


@pytest.fixture
def settings(staging_root: Path) -> Settings:
    return Settings(staging_root=staging_root)


@pytest.fixture
def lodash_tree() -> dict[str, str | dict[str, Any]]:
    return {
        "lodash/package.json": {"name": "lodash", "types": "index.d.ts"},
        "lodash/index.d.ts": "export declare function chunk<T>(array: T[], size?: number): T[][];\n",
        "lodash/index.js": "module.exports = {};\n",
    }
