"""Unified exception taxonomy.

Provides a shared base exception hierarchy for the legacy-asset upgrade,
the gallery configuration assembler, and the metadata stores. Every
domain exception inherits from ``MediaError`` and carries structured
context fields so callers can choose a recovery strategy without
parsing messages.

Taxonomy categories
-------------------
- ``ValidationError``   — input/contract violations, never retryable.
- ``TransientError``    — temporary failures (network, throttle), retryable.
- ``PermanentError``    — unrecoverable domain failures, not retryable.
- ``ContractError``     — payload/schema drift between components, never retryable.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for logging and alerting.
"""

from __future__ import annotations


class MediaError(Exception):
    """Base exception for all media-domain errors.

    Attributes:
        message: Human-readable error description.
        stage: Component where the error occurred
            (e.g. ``"upgrade_asset"``, ``"gallery_config"``).
        code: Machine-readable error code (e.g. ``"LEGACY_PATH_MALFORMED"``).
        retryable: Whether the caller may retry the operation.
        correlation_id: Request correlation identifier.
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
        correlation_id: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        self.correlation_id = correlation_id
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ContractError):
            return "contract"
        if isinstance(self, ValidationError):
            return "validation"
        if isinstance(self, TransientError):
            return "transient"
        if isinstance(self, PermanentError):
            return "permanent"
        return "transient" if self.retryable else "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
            "correlation_id": self.correlation_id,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(MediaError):
    """Input or domain-model validation failure. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class TransientError(MediaError):
    """Temporary failure that may succeed on retry."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class PermanentError(MediaError):
    """Unrecoverable domain failure. Not retryable by default."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class ContractError(MediaError):
    """Payload or schema drift between components. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Domain kinds
# ---------------------------------------------------------------------------


class MalformedLocatorPath(ValidationError):
    """A legacy delivery path yielded no public identifier.

    Callers are expected to fall back to an already-stored public id.
    """

    default_stage = "upgrade_asset"
    default_code = "LEGACY_PATH_MALFORMED"


class InvalidCustomConfigJson(ValidationError):
    """The user-supplied gallery override is not a JSON object."""

    default_stage = "gallery_config"
    default_code = "CUSTOM_CONFIG_INVALID_JSON"


class LookupFailure(PermanentError):
    """Resolving the cloud identifier failed or returned nothing."""

    default_stage = "gallery_config"
    default_code = "CLOUD_NAME_LOOKUP_FAILED"


class InvalidConfigValue(ValidationError):
    """A settings value cannot be represented in the config document."""

    default_stage = "gallery_config"
    default_code = "CONFIG_VALUE_INVALID"
