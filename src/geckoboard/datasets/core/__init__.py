# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Core infrastructure components for the Geckoboard Datasets client.

This module contains the foundational components including configuration,
the HTTP transport, telemetry and error handling.
"""

from .errors import (
    GeckoboardError,
    ValidationError,
    TransportError,
    HttpError,
    InvalidRequestError,
    RequestConflictError,
    BadCredentialsError,
    InvalidResponseTypeError,
    FailedRequestError,
    APIError,
)

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
