"""Custom exception hierarchy for Intent."""

from __future__ import annotations


class IntentError(Exception):
    """Base class for all custom errors raised by Intent."""


# --- Layers ---

class DomainError(IntentError):
    """Base class for domain-level errors."""


class InfrastructureError(IntentError):
    """Base class for infrastructure-level errors."""


# --- Domain errors ---

class FrameValidationError(DomainError):
    """Raised when a crop rectangle violates the bounds or minimum size."""


class ProjectNotFoundError(DomainError):
    """Raised when the requested project cannot be located."""


class FrameNotFoundError(DomainError):
    """Raised when the requested frame does not belong to the project."""


# --- Infrastructure errors ---

class DatabaseError(InfrastructureError):
    """Raised when a database operation fails."""


class ConnectionPoolExhausted(InfrastructureError):
    """Raised when no connections are available in the pool."""


class CollaboratorError(InfrastructureError):
    """Base class for failures reported by the image collaborators."""


class ImageDecodeError(CollaboratorError):
    """Raised when image bytes cannot be decoded."""


class ImageEncodeError(CollaboratorError):
    """Raised when an image cannot be compressed for storage."""


class ImageCropError(CollaboratorError):
    """Raised when a crop does not intersect the image bounds."""


# --- Settings ---

class SettingsError(IntentError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""
