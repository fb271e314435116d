"""
Core Exceptions
Standardized exceptions for the application.

Each HTTP-facing exception carries the status code it maps to; the handlers
in ``app.main`` render them as ``{"error": message}``.
"""


class CreatorStationError(Exception):
    """Base exception for all application errors."""
    status_code = 500


class ValidationError(CreatorStationError):
    """A required request field is missing or invalid."""
    status_code = 400


class ConfigurationError(CreatorStationError):
    """Required startup configuration is missing or invalid."""
    pass


class ServiceUnavailableError(CreatorStationError):
    """The service started without usable remote clients."""
    status_code = 503


class RemoteCallError(CreatorStationError):
    """A remote provider call failed, timed out or returned an unusable payload.

    The message is the generic, client-visible one; provider details are
    logged server-side only.
    """
    status_code = 500
    public_message = "Remote call failed"

    def __init__(self, message: str = "", *, detail: str = ""):
        super().__init__(message or self.public_message)
        self.detail = detail


class AnalysisFailed(RemoteCallError):
    public_message = "Failed to analyze script"


class ImageGenFailed(RemoteCallError):
    public_message = "Failed to generate image"


class SpeechGenFailed(RemoteCallError):
    public_message = "Failed to generate speech"


class RunConflictError(CreatorStationError):
    """A generation run cannot be started in the current state."""
    status_code = 409


class RunInProgressError(RunConflictError):
    pass


class NoScenesError(RunConflictError):
    pass


class RunNotFoundError(CreatorStationError):
    status_code = 404
