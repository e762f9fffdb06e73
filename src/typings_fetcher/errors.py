from __future__ import annotations


class TypingsFetcherError(Exception):
    """Base class for failures surfaced to API and CLI callers."""


class RequestError(TypingsFetcherError):
    """The ``depQuery`` parameter is missing or malformed."""


class InvalidDependencyError(RequestError):
    """The parsed dependency is not safe to hand to the installer."""


class StagingError(TypingsFetcherError):
    """A failure tied to one staging location; the message starts with its identifier."""

    def __init__(self, staging_id: str, detail: str) -> None:
        super().__init__(f"{staging_id}: {detail}")
        self.staging_id = staging_id
        self.detail = detail


class InstallError(StagingError):
    """The external installer failed, timed out, or produced too much output."""


class ExtractionError(StagingError):
    """Reading the installed tree failed."""
