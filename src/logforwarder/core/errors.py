"""
Error types for the forwarder.

Only configuration problems are raised past the forwarder boundary; every
other failure is turned into a logged outcome.
"""

from __future__ import annotations

from typing import Any


class ForwarderError(Exception):
    """Base class for forwarder errors."""

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class ConfigurationError(ForwarderError):
    """Raised when an environment setting cannot be coerced to its type."""

    def __init__(
        self,
        message: str,
        *,
        settings: list[str] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.settings = list(settings or [])

    @classmethod
    def from_validation_error(cls, exc: Any) -> ConfigurationError:
        """Build from a pydantic ``ValidationError``, naming the bad variables."""
        names: list[str] = []
        details: list[str] = []
        for err in exc.errors():
            loc = ".".join(str(part) for part in err.get("loc", ()))
            names.append(loc)
            details.append(f"{loc}: {err.get('msg')}")
        return cls(
            "Invalid forwarder configuration: " + "; ".join(details),
            settings=names,
            cause=exc,
        )
