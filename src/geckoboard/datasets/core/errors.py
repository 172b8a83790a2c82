# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Structured errors raised by the Geckoboard Datasets client.

Every error derives from :class:`GeckoboardError`. Responses classified by the
request pipeline raise a subclass of :class:`HttpError`; failures below HTTP
(DNS, TLS, connection resets, timeouts, cancellation) raise
:class:`TransportError`, which is deliberately not an :class:`HttpError` so the
two stay distinguishable::

    try:
        client.datasets.push_data("sales.by_day", payload)
    except BadCredentialsError:
        ...  # stop and ask for a new key
    except RequestConflictError:
        ...
    except TransportError:
        ...  # safe to retry
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, Optional

from . import _error_codes as ec


class GeckoboardError(Exception):
    """Base structured error for the Geckoboard Datasets client."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
        is_transient: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.subcode = subcode
        self.status_code = status_code
        self.details = details or {}
        self.source = source or "client"
        self.is_transient = is_transient
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "subcode": self.subcode,
            "status_code": self.status_code,
            "details": self.details,
            "source": self.source,
            "is_transient": self.is_transient,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(code={self.code!r}, subcode={self.subcode!r}, message={self.message!r})"


class ValidationError(GeckoboardError):
    """Raised for invalid arguments before any request is sent."""

    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="validation_error", subcode=subcode, details=details, source="client")


class TransportError(GeckoboardError):
    """
    The request never produced a response.

    Wraps :class:`requests.exceptions.RequestException` (chained as ``__cause__``)
    or a cancellation. When raised mid-flight the remote effect is unknown.
    """

    def __init__(
        self,
        message: str,
        *,
        subcode: Optional[str] = ec.TRANSPORT_FAILURE,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message,
            code="transport_error",
            subcode=subcode,
            details=details,
            source="client",
            is_transient=True,
        )


class HttpError(GeckoboardError):
    """Base class for errors derived from an HTTP response."""

    default_message = "request failed"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        status_code: Optional[int] = None,
        subcode: Optional[str] = None,
        content_type: Optional[str] = None,
        body_excerpt: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        d = dict(details or {})
        if content_type is not None:
            d["content_type"] = content_type
        if body_excerpt is not None:
            d["body_excerpt"] = body_excerpt
        if subcode is None and status_code is not None:
            subcode = ec.http_subcode(status_code)
        super().__init__(
            message if message is not None else self.default_message,
            code="http_error",
            subcode=subcode,
            status_code=status_code,
            details=d,
            source="server",
            is_transient=status_code is not None and status_code >= 500,
        )


class InvalidRequestError(HttpError):
    """The service rejected the payload as malformed (HTTP 400)."""

    default_message = "request is invalid: api responded with bad request"


class RequestConflictError(HttpError):
    """The request conflicts with the current state of the resource (HTTP 409)."""

    default_message = "request encountered resource conflict"


class BadCredentialsError(HttpError):
    """The API key was rejected (HTTP 401)."""

    default_message = "request denied due to bad auth credentials"


class InvalidResponseTypeError(HttpError):
    """An error response arrived without a JSON content type."""

    default_message = "invalid response type, expected 'application/json'"


class FailedRequestError(HttpError):
    """Catch-all for responses that carry no usable error message."""

    default_message = "request failed: unknown status response"


class APIError(HttpError):
    """
    A structured error reported by the service.

    ``message`` is the service's own text from ``{"error": {"message": ...}}``.
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, **kwargs: Any) -> None:
        super().__init__(message, status_code=status_code, **kwargs)


__all__ = [
    "GeckoboardError",
    "ValidationError",
    "TransportError",
    "HttpError",
    "InvalidRequestError",
    "RequestConflictError",
    "BadCredentialsError",
    "InvalidResponseTypeError",
    "FailedRequestError",
    "APIError",
]
