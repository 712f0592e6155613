"""Custom exception hierarchy for fabula."""


class AppError(Exception):
    """Base exception for app-specific failures."""


class CommandError(AppError):
    """Failures surfaced by the runtime command dispatcher."""


class PermissionDenied(CommandError):
    """A debug-only command was issued outside debug mode."""


class CommandFailed(CommandError):
    """A command precondition or collaborator call failed."""


class ConfigError(ValueError, AppError):
    """Manifest/configuration validation errors."""


class StorageError(AppError):
    """Save file read/write failures."""


class ResourceError(AppError):
    """Content loading or lookup failures."""


class AudioError(AppError):
    """Sound channel lookup failures."""
