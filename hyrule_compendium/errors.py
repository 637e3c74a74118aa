"""Exceptions raised by the compendium client."""

from __future__ import annotations


class CompendiumError(Exception):
    """Base class for every compendium failure."""


class TransportError(CompendiumError):
    """The request never produced a readable envelope (network, timeout, bad JSON)."""

    def __init__(self, url: str, cause: Exception) -> None:
        super().__init__(f"Request to {url} failed: {cause}")
        self.url = url
        self.cause = cause


class ApplicationError(CompendiumError):
    """The API answered, but its envelope status was not 200."""

    def __init__(self, status: int | None, message: str, url: str = "") -> None:
        super().__init__(message or f"Compendium API returned status {status}")
        self.status = status
        self.message = message
        self.url = url


class NotFound(ApplicationError):
    """Envelope status 404: no such entry or category."""
