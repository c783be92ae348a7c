"""
Tests for the exception hierarchy and logging configuration.
"""

import io
import logging

import pytest

from camnotify.exceptions import (
    ApiStatusError,
    CameraNotifierError,
    ConfigurationError,
    DetectionTransportFailure,
    HandlerConfigError,
    MalformedResponseError,
    MissingCredentialError,
    NetworkError,
    NoEligibleDeviceFoundError,
    ProviderError,
    ProviderInitError,
    ProviderQueryError,
    TransportError,
    UnsupportedPlatformError,
)
from camnotify.logging_config import NotifierLogger, setup_logging


class TestExceptions:
    """Test exception hierarchy and error context."""

    def test_base_exception_with_context(self):
        """Test base exception with cause and context."""
        cause = ValueError("Original error")
        error = CameraNotifierError("Test error", cause=cause, context={'key': 'value'})

        assert error.message == "Test error"
        assert error.cause is cause
        assert error.context == {'key': 'value'}
        assert str(error) == "Test error"

    @pytest.mark.parametrize("subclass, base", [
        (ProviderInitError, ProviderError),
        (ProviderQueryError, ProviderError),
        (UnsupportedPlatformError, ProviderInitError),
        (MissingCredentialError, HandlerConfigError),
        (NoEligibleDeviceFoundError, HandlerConfigError),
        (DetectionTransportFailure, HandlerConfigError),
        (NetworkError, TransportError),
        (ApiStatusError, TransportError),
        (MalformedResponseError, TransportError),
        (ConfigurationError, CameraNotifierError),
    ])
    def test_hierarchy(self, subclass, base):
        assert issubclass(subclass, base)
        assert issubclass(subclass, CameraNotifierError)

    def test_transport_errors_are_not_config_errors(self):
        """Test that detection failures are the only transport-related config errors."""
        assert not issubclass(TransportError, HandlerConfigError)

    def test_handler_config_error_names_handler(self):
        error = HandlerConfigError("bad", handler="switchbot")

        assert error.handler == "switchbot"
        assert error.context['handler'] == "switchbot"

    def test_missing_credential_message(self):
        error = MissingCredentialError("SWITCHBOT_TOKEN", handler="switchbot")

        assert str(error) == "Missing required environment variable: SWITCHBOT_TOKEN"
        assert error.context == {'handler': "switchbot", 'credential': "SWITCHBOT_TOKEN"}

    def test_api_status_error_context(self):
        error = ApiStatusError("nope", status_code=190, endpoint="devices", body="{}")

        assert error.status_code == 190
        assert error.context == {'status_code': 190, 'endpoint': "devices"}
        assert error.body == "{}"

    def test_provider_error_context(self):
        assert ProviderQueryError("x", provider="linux").context == {'provider': "linux"}


class TestLogging:
    """Test logging configuration."""

    def _configure(self, **kwargs):
        out, err = io.StringIO(), io.StringIO()
        setup_logging(stdout=out, stderr=err, force=True, **kwargs)
        return out, err

    def test_info_to_stdout_errors_to_stderr(self):
        """Test that records are split between the two streams."""
        out, err = self._configure()
        logger = logging.getLogger("camnotify.test")

        logger.info("camera on")
        logger.error("device control failed")

        assert "camera on" in out.getvalue()
        assert "camera on" not in err.getvalue()
        assert "device control failed" in err.getvalue()
        assert "device control failed" not in out.getvalue()

    def test_lines_are_timestamped_with_logger_name(self):
        out, _ = self._configure()

        logging.getLogger("camnotify.handlers.switchbot").info("sending turnOn")

        line = out.getvalue().strip()
        assert line.startswith("[20")
        assert "[INFO] [camnotify.handlers.switchbot] sending turnOn" in line

    def test_debug_only_when_verbose(self):
        out, _ = self._configure()
        logging.getLogger("camnotify.test").debug("hidden")
        assert "hidden" not in out.getvalue()

        out, _ = self._configure(verbose=True)
        logging.getLogger("camnotify.test").debug("shown")
        assert "shown" in out.getvalue()

    def test_log_file(self, tmp_path):
        """Test that a rotating log file receives records."""
        log_file = tmp_path / "logs" / "notifier.log"
        self._configure(log_file=log_file)

        logging.getLogger("camnotify.test").debug("to file")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert NotifierLogger.get_log_file_path() == log_file
        assert "to file" in log_file.read_text()

    def test_configure_once_without_force(self):
        """Test that a second configure call is ignored unless forced."""
        out, _ = self._configure()
        setup_logging(stdout=io.StringIO(), stderr=io.StringIO())

        logging.getLogger("camnotify.test").info("still here")

        assert "still here" in out.getvalue()
