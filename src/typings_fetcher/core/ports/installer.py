from typing import Protocol

from typings_fetcher.models import DependencySpec, StagingLocation


class PackageInstaller(Protocol):
    async def install(self, spec: DependencySpec, staging: StagingLocation) -> None: ...
