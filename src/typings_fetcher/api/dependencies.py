from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from typings_fetcher.config import Settings, load_settings
from typings_fetcher.core.installer import YarnInstaller
from typings_fetcher.core.ports.installer import PackageInstaller


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Read settings from the environment once per process."""
    return load_settings()


def get_installer(settings: Settings = Depends(get_settings)) -> PackageInstaller:
    return YarnInstaller(
        executable=settings.installer,
        timeout=settings.install_timeout,
        max_buffer=settings.max_buffer,
    )
