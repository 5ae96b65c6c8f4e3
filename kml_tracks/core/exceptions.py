"""Exception taxonomy for KML track loading.

Every domain exception inherits from ``TracksError`` and carries
structured context fields (stage, code, retryable) so that callers can
decide whether to retry a load and what to show the user.

Taxonomy categories
-------------------
- ``ValidationError``: malformed input or configuration, never retryable.
- ``TransientError``: transport failures (unreadable file, HTTP), retryable
  by default. A load that cannot succeed on retry (HTTP 404, no URL
  configured) is raised with ``retryable=False`` and reports "permanent".

Per-placemark data defects (missing coordinates, bad numbers, dangling
style references) are not errors at all; the extractor skips or defaults
them.
"""

from __future__ import annotations


class TracksError(Exception):
    """Base exception for all track-loading errors.

    Attributes:
        message: Human-readable error description.
        stage: Stage where the error occurred (``"parse_kml"``, ``"load_kml"``).
        code: Machine-readable error code (e.g. ``"KML_PARSE_FAILED"``).
        retryable: Whether repeating the same load could succeed.
        source: File path or URL being loaded, when known.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool = False,
        source: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        self.source = source
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category: validation by class, otherwise by retryability."""
        if isinstance(self, ValidationError):
            return "validation"
        return "transient" if self.retryable else "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
            "source": self.source,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(TracksError):
    """Input or configuration validation failure. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class TransientError(TracksError):
    """Temporary failure that may succeed on retry."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Concrete errors
# ---------------------------------------------------------------------------


class KmlParseError(ValidationError):
    """Raised when the document is not well-formed markup."""

    default_stage = "parse_kml"
    default_code = "KML_PARSE_FAILED"


class KmlLoadError(TransientError):
    """Raised when KML bytes cannot be obtained (file or network).

    Attributes:
        status_code: HTTP status for network failures, ``None`` otherwise.
        reason: HTTP reason phrase or OS error text.
    """

    default_stage = "load_kml"
    default_code = "KML_LOAD_FAILED"

    def __init__(
        self,
        message: str = "",
        *,
        status_code: int | None = None,
        reason: str = "",
        **kwargs: object,
    ) -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(message, **kwargs)

    def to_error_dict(self) -> dict[str, object]:
        payload = super().to_error_dict()
        payload["status_code"] = self.status_code
        payload["reason"] = self.reason
        return payload
