from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import BaseModel

FileMapping = dict[str, str]
ModuleFiles = dict[str, dict[str, dict[str, str]]]


class DependencySpec(BaseModel):
    name: str
    version: str = "latest"

    @property
    def is_url(self) -> bool:
        return self.version.startswith("http")

    @property
    def install_target(self) -> str:
        """Argument handed to the installer: a direct URL or ``name@version``."""
        if self.is_url:
            return self.version
        return f"{self.name}@{self.version}"

    def __str__(self) -> str:
        return f"{self.name}@{self.version}"


@dataclass(frozen=True)
class StagingLocation:
    identifier: str
    root: Path

    @property
    def path(self) -> Path:
        return self.root / self.identifier

    @property
    def modules_path(self) -> Path:
        return self.path / "node_modules"

    def package_path(self, name: str) -> Path:
        return self.modules_path / name


@dataclass
class PackagedFiles:
    files: ModuleFiles = field(default_factory=dict)
    dropped_file_count: int | None = None

    def as_envelope(self) -> dict[str, Any]:
        envelope: dict[str, Any] = {"status": "ok", "files": self.files}
        if self.dropped_file_count is not None:
            envelope["droppedFileCount"] = self.dropped_file_count
        return envelope
