"""Structured exception classes for the base connector."""

import json
from typing import Any, Dict, Optional

import httpx


class BaseConnectorError(Exception):
    """Base exception for all base connector errors.

    :param message: Human-readable error message
    :param code: Optional error code for programmatic handling
    :param details: Optional dictionary containing additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format.

        :return: Dictionary containing error code, message, and details
        """
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }

    def to_json(self) -> str:
        """Convert exception to JSON string."""
        return json.dumps(self.to_dict())


class ConfigurationError(BaseConnectorError):
    """Raised when the client is constructed with missing or invalid options.

    :param message: Description of the configuration error
    :param setting: Optional name of the problematic option
    """

    def __init__(self, message: str, setting: Optional[str] = None):
        details = {}
        if setting:
            details["setting"] = setting
        super().__init__(message=message, code="CONFIGURATION_ERROR", details=details)
        self.setting = setting


class AuthenticationError(BaseConnectorError):
    """Raised when an authentication provider cannot decorate a request."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="AUTHENTICATION_ERROR", details=details)


class TransportError(BaseConnectorError):
    """Raised when the transport fails to complete an exchange.

    :param message: Description of the failure
    :param request: The request that was being sent, when known
    :param response: The response that was received, when any
    """

    def __init__(
        self,
        message: str,
        request: Optional[httpx.Request] = None,
        response: Optional[httpx.Response] = None,
        code: str = "TRANSPORT_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        details = dict(details or {})
        if request is not None:
            details.setdefault("method", request.method)
            details.setdefault("url", str(request.url))
        super().__init__(message=message, code=code, details=details)
        self.request = request
        self.response = response


class NetworkError(TransportError):
    """Raised when the remote endpoint cannot be reached."""

    def __init__(self, message: str, request: Optional[httpx.Request] = None):
        super().__init__(message, request=request, code="NETWORK_ERROR")


class RequestTimeoutError(NetworkError):
    """Raised when an exchange exceeds the configured timeout."""

    def __init__(self, message: str, request: Optional[httpx.Request] = None):
        super().__init__(message, request=request)
        self.code = "TIMEOUT_ERROR"


class ApiResponseError(TransportError):
    """Raised when the remote API answers with an error status.

    :param message: Formatted description of the failed exchange
    :param request: The request that was sent
    :param response: The error response
    """

    def __init__(
        self,
        message: str,
        request: Optional[httpx.Request] = None,
        response: Optional[httpx.Response] = None,
    ):
        details: Dict[str, Any] = {}
        if response is not None:
            details["status_code"] = response.status_code
        super().__init__(
            message,
            request=request,
            response=response,
            code="API_ERROR",
            details=details,
        )
        self.status_code = response.status_code if response is not None else None


class ClientError(ApiResponseError):
    """Raised for 4xx responses."""


class ServerError(ApiResponseError):
    """Raised for 5xx responses."""
