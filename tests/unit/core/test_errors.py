# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import pytest

from geckoboard.datasets.core import _error_codes as ec
from geckoboard.datasets.core.errors import (
    APIError,
    BadCredentialsError,
    FailedRequestError,
    GeckoboardError,
    HttpError,
    InvalidRequestError,
    InvalidResponseTypeError,
    RequestConflictError,
    TransportError,
    ValidationError,
)


def test_http_errors_share_base():
    for cls in (
        InvalidRequestError,
        RequestConflictError,
        BadCredentialsError,
        InvalidResponseTypeError,
        FailedRequestError,
        APIError,
    ):
        assert issubclass(cls, HttpError)
        assert issubclass(cls, GeckoboardError)


def test_transport_error_is_not_http_error():
    assert not issubclass(TransportError, HttpError)
    err = TransportError("boom")
    assert err.code == "transport_error"
    assert err.is_transient is True
    assert err.subcode == ec.TRANSPORT_FAILURE


def test_default_messages():
    assert str(BadCredentialsError(status_code=401)) == "request denied due to bad auth credentials"
    assert str(RequestConflictError(status_code=409)) == "request encountered resource conflict"
    assert str(InvalidResponseTypeError()) == "invalid response type, expected 'application/json'"


def test_api_error_carries_service_message():
    err = APIError("Dataset not found", status_code=404)
    assert err.message == "Dataset not found"
    assert str(err) == "Dataset not found"
    assert err.subcode == "http_404"
    assert err.source == "server"


def test_status_subcodes():
    assert InvalidRequestError(status_code=400).subcode == ec.HTTP_400
    assert BadCredentialsError(status_code=401).subcode == ec.HTTP_401
    assert RequestConflictError(status_code=409).subcode == ec.HTTP_409
    assert ec.http_subcode(418) == "http_418"


def test_server_errors_are_transient():
    assert APIError("down", status_code=503).is_transient is True
    assert InvalidRequestError(status_code=400).is_transient is False


def test_to_dict():
    err = InvalidResponseTypeError(status_code=502, content_type="text/html")
    d = err.to_dict()
    assert d["code"] == "http_error"
    assert d["status_code"] == 502
    assert d["details"]["content_type"] == "text/html"
    assert d["timestamp"]


def test_caller_details_not_mutated():
    details = {"request_id": "r1"}
    err = InvalidResponseTypeError(status_code=502, content_type="text/html", body_excerpt="<h1>", details=details)
    assert details == {"request_id": "r1"}
    assert err.details == {"request_id": "r1", "content_type": "text/html", "body_excerpt": "<h1>"}


def test_validation_error():
    err = ValidationError("dataset_id is required", subcode=ec.VALIDATION_DATASET_ID_EMPTY)
    assert err.code == "validation_error"
    assert err.source == "client"
    with pytest.raises(GeckoboardError):
        raise err
