"""
SwitchBot API client with HMAC request signing.

Every request carries a fresh nonce and millisecond timestamp, signed as
``base64(HMAC-SHA256(secret, token + timestamp + nonce))``. Requests are never
retried here.
"""

import base64
import hashlib
import hmac
import logging
import time
import uuid
from typing import Any, Callable, Dict, Optional

import httpx

from .models import CommandResult, DeviceList, PlugCommand, SwitchBotDevice
from .exceptions import ApiStatusError, MalformedResponseError, NetworkError

logger = logging.getLogger(__name__)

BASE_URL = "https://api.switch-bot.com/v1.1"
DEFAULT_TIMEOUT = 10.0
SUCCESS_STATUS = 100


def sign_request(token: str, secret: str, timestamp: int, nonce: str) -> str:
    """
    Compute the request signature.

    Args:
        token: API token
        secret: API secret, used as the HMAC key
        timestamp: Unix time in milliseconds
        nonce: Per-request unique string

    Returns:
        str: Standard base64 encoding of the raw HMAC-SHA256 digest
    """
    string_to_sign = f"{token}{timestamp}{nonce}"
    digest = hmac.new(
        secret.encode("utf-8"), string_to_sign.encode("utf-8"), hashlib.sha256
    ).digest()
    return base64.b64encode(digest).decode("ascii")


class SwitchBotClient:
    """
    Synchronous client for the SwitchBot cloud API.

    ``transport``, ``nonce_factory`` and ``clock`` exist so tests can supply
    an ``httpx.MockTransport`` and fixed signing inputs.
    """

    def __init__(
        self,
        token: str,
        secret: str,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
        nonce_factory: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        self._token = token
        self._secret = secret
        self._nonce_factory = nonce_factory or (lambda: str(uuid.uuid4()))
        self._clock = clock or time.time
        self._client = httpx.Client(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    def build_headers(self) -> Dict[str, str]:
        """Build a freshly signed header set for one request."""
        nonce = self._nonce_factory()
        timestamp = int(self._clock() * 1000)
        return {
            "Authorization": self._token,
            "sign": sign_request(self._token, self._secret, timestamp, nonce),
            "nonce": nonce,
            "t": str(timestamp),
            "Content-Type": "application/json",
        }

    def _request(self, method: str, endpoint: str, json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            resp = self._client.request(method, endpoint, headers=self.build_headers(), json=json)
        except httpx.RequestError as e:
            raise NetworkError(f"Request to {endpoint} failed: {e}", endpoint=endpoint, cause=e)

        if not resp.is_success:
            raise ApiStatusError(
                f"SwitchBot API returned HTTP {resp.status_code}",
                status_code=resp.status_code,
                endpoint=endpoint,
                body=resp.text[:200],
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"Response from {endpoint} is not valid JSON", endpoint=endpoint, cause=e
            )
        if not isinstance(data, dict) or "statusCode" not in data:
            raise MalformedResponseError(f"Response from {endpoint} has no statusCode", endpoint=endpoint)

        if data["statusCode"] != SUCCESS_STATUS:
            raise ApiStatusError(
                f"SwitchBot API error {data['statusCode']}: {data.get('message', '')}",
                status_code=data["statusCode"],
                endpoint=endpoint,
                body=resp.text[:200],
            )
        return data

    def list_devices(self) -> DeviceList:
        """
        Get all devices on the account.

        Returns:
            DeviceList: Physical devices and infrared remotes

        Raises:
            TransportError: On network failure, error status or malformed body
        """
        data = self._request("GET", "devices")
        body = data.get("body")
        if not isinstance(body, dict):
            raise MalformedResponseError("Device list response has no body", endpoint="devices")

        try:
            device_list = DeviceList(
                devices=[SwitchBotDevice.from_api(d) for d in body.get("deviceList", [])],
                infrared_remotes=[SwitchBotDevice.from_api(d) for d in body.get("infraredRemoteList", [])],
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise MalformedResponseError(
                f"Unexpected device entry in response: {e}", endpoint="devices", cause=e
            )

        logger.debug(f"Listed {len(device_list.devices)} devices, "
                     f"{len(device_list.infrared_remotes)} infrared remotes")
        return device_list

    def send_command(self, device_id: str, command: PlugCommand, parameter: str = "default") -> CommandResult:
        """
        Send a control command to a device.

        Raises:
            TransportError: On network failure, error status or malformed body
        """
        endpoint = f"devices/{device_id}/commands"
        payload = {
            "command": command.value,
            "parameter": parameter,
        }
        data = self._request("POST", endpoint, json=payload)

        body = data.get("body")
        return CommandResult(
            status_code=data["statusCode"],
            message=str(data.get("message", "")),
            body=body if isinstance(body, dict) else {},
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
