"""Unit tests for settings loading and data models."""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError

from typings_fetcher.api.schemas import ErrorResponse, TypingsResponse
from typings_fetcher.config import DEFAULT_MAX_RESPONSE_BYTES, load_settings
from typings_fetcher.models import DependencySpec, PackagedFiles


class TestLoadSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in (
            "TYPINGS_STAGING_ROOT",
            "TYPINGS_INSTALLER",
            "TYPINGS_INSTALL_TIMEOUT",
            "TYPINGS_MAX_BUFFER",
            "TYPINGS_MAX_RESPONSE_BYTES",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = load_settings()

        assert settings.staging_root == Path(tempfile.gettempdir())
        assert settings.installer == "yarn"
        assert settings.max_buffer == 1024 * 1000
        assert settings.max_response_bytes == DEFAULT_MAX_RESPONSE_BYTES == 6081740

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("TYPINGS_STAGING_ROOT", str(tmp_path))
        monkeypatch.setenv("TYPINGS_INSTALLER", "/opt/yarn/bin/yarn")
        monkeypatch.setenv("TYPINGS_INSTALL_TIMEOUT", "5")
        monkeypatch.setenv("TYPINGS_MAX_BUFFER", "2048")
        monkeypatch.setenv("TYPINGS_MAX_RESPONSE_BYTES", "4096")

        settings = load_settings()

        assert settings.staging_root == tmp_path
        assert settings.installer == "/opt/yarn/bin/yarn"
        assert settings.install_timeout == 5.0
        assert settings.max_buffer == 2048
        assert settings.max_response_bytes == 4096


class TestDependencySpec:
    def test_version_defaults_to_latest(self) -> None:
        assert DependencySpec(name="lodash").version == "latest"

    def test_str(self) -> None:
        assert str(DependencySpec(name="@types/node", version="20")) == "@types/node@20"

    def test_requires_name(self) -> None:
        with pytest.raises(ValidationError):
            DependencySpec()  # type: ignore[call-arg]


class TestEnvelopes:
    def test_packaged_files_envelope_omits_missing_drop_count(self) -> None:
        assert PackagedFiles().as_envelope() == {"status": "ok", "files": {}}

    def test_packaged_files_envelope_with_drop_count(self) -> None:
        envelope = PackagedFiles(files={}, dropped_file_count=3).as_envelope()
        assert envelope == {"status": "ok", "files": {}, "droppedFileCount": 3}

    def test_typings_response_serializes_alias(self) -> None:
        resp = TypingsResponse(files={"/a.d.ts": {"module": {"code": ""}}}, droppedFileCount=2)
        assert resp.model_dump(by_alias=True) == {
            "status": "ok",
            "files": {"/a.d.ts": {"module": {"code": ""}}},
            "droppedFileCount": 2,
        }

    def test_error_response_defaults(self) -> None:
        assert ErrorResponse(error="boom").model_dump() == {
            "status": "error",
            "files": {},
            "error": "boom",
            "stack": None,
        }
