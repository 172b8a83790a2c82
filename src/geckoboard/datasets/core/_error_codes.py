# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

# HTTP subcode constants
HTTP_400 = "http_400"
HTTP_401 = "http_401"
HTTP_409 = "http_409"

# Response classification subcodes
RESPONSE_INVALID_CONTENT_TYPE = "response_invalid_content_type"
RESPONSE_UNPARSEABLE_ERROR = "response_unparseable_error"
RESPONSE_UNEXPECTED_STATUS = "response_unexpected_status"

# Transport subcodes
TRANSPORT_CANCELLED = "transport_cancelled"
TRANSPORT_TIMEOUT = "transport_timeout"
TRANSPORT_CONNECTION = "transport_connection"
TRANSPORT_FAILURE = "transport_failure"

# Validation subcodes
VALIDATION_DATASET_ID_EMPTY = "validation_dataset_id_empty"
VALIDATION_PAYLOAD_NOT_JSON = "validation_payload_not_json"

_STATUS_SUBCODES = {
    400: HTTP_400,
    401: HTTP_401,
    409: HTTP_409,
}


def http_subcode(status_code: int) -> str:
    """Return the ``http_<status>`` subcode for a response status."""
    return _STATUS_SUBCODES.get(status_code, f"http_{status_code}")
