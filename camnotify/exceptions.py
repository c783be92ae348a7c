"""
Exception classes for camera-notifier.

Errors below the handler boundary are logged and absorbed; startup errors
(provider initialization, handler configuration) are reported to the operator.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class CameraNotifierError(Exception):
    """Base exception class for all camera-notifier errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None, context: Optional[dict] = None):
        """
        Initialize camera-notifier error.

        Args:
            message: Error message
            cause: Original exception that caused this error
            context: Additional context information
        """
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.context = context or {}

        logger.debug(f"{self.__class__.__name__}: {message}", extra={
            'cause': str(cause) if cause else None,
            'context': self.context
        })


# Device state provider errors

class ProviderError(CameraNotifierError):
    """Base class for device state provider failures."""

    def __init__(self, message: str, provider: Optional[str] = None, cause: Optional[Exception] = None):
        context = {'provider': provider} if provider else {}
        super().__init__(message, cause, context)


class ProviderInitError(ProviderError):
    """Raised when the provider cannot be created. Fatal at startup."""
    pass


class UnsupportedPlatformError(ProviderInitError):
    """Raised when no provider exists for the current platform."""

    def __init__(self, message: str, platform: Optional[str] = None):
        super().__init__(message)
        if platform:
            self.context['platform'] = platform


class ProviderQueryError(ProviderError):
    """Raised when a single state query fails. Transient."""
    pass


# Handler configuration errors

class HandlerConfigError(CameraNotifierError):
    """Raised when a handler cannot be configured."""

    def __init__(self, message: str, handler: Optional[str] = None, cause: Optional[Exception] = None):
        context = {'handler': handler} if handler else {}
        super().__init__(message, cause, context)
        self.handler = handler


class MissingCredentialError(HandlerConfigError):
    """Raised when a required credential is absent or still a placeholder."""

    def __init__(self, credential: str, handler: Optional[str] = None):
        super().__init__(f"Missing required environment variable: {credential}", handler=handler)
        self.credential = credential
        self.context['credential'] = credential


class NoEligibleDeviceFoundError(HandlerConfigError):
    """Raised when auto-detection finds no device of the control-target category."""
    pass


class DetectionTransportFailure(HandlerConfigError):
    """Raised when the auto-detection request itself fails."""
    pass


# Signed API transport errors

class TransportError(CameraNotifierError):
    """Base class for remote API request failures."""

    def __init__(self, message: str, endpoint: Optional[str] = None, cause: Optional[Exception] = None,
                 context: Optional[dict] = None):
        context = dict(context or {})
        if endpoint:
            context['endpoint'] = endpoint
        super().__init__(message, cause, context)
        self.endpoint = endpoint


class NetworkError(TransportError):
    """Raised when the request could not be delivered (connection, timeout)."""
    pass


class ApiStatusError(TransportError):
    """Raised when the API answers with a non-success status code."""

    def __init__(self, message: str, status_code: int, endpoint: Optional[str] = None,
                 body: Optional[str] = None):
        super().__init__(message, endpoint=endpoint, context={'status_code': status_code})
        self.status_code = status_code
        self.body = body


class MalformedResponseError(TransportError):
    """Raised when the response body cannot be decoded into the expected shape."""
    pass


class ConfigurationError(CameraNotifierError):
    """Raised when process configuration is invalid."""

    def __init__(self, message: str, config_key: Optional[str] = None, cause: Optional[Exception] = None):
        context = {'config_key': config_key} if config_key else {}
        super().__init__(message, cause, context)
