# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Low-level Datasets API client.

:class:`_DatasetsApiClient` owns the request pipeline shared by every
operation: it builds authenticated requests, dispatches them through the
transport and classifies responses into the errors defined in
:mod:`geckoboard.datasets.core.errors`.
"""

from __future__ import annotations

import json
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests
from requests.auth import HTTPBasicAuth

from ..core import _error_codes as ec
from ..core._http import _HttpClient
from ..core.config import GeckoboardConfig
from ..core.errors import (
    APIError,
    BadCredentialsError,
    FailedRequestError,
    InvalidRequestError,
    InvalidResponseTypeError,
    RequestConflictError,
    TransportError,
    ValidationError,
)
from ..core.telemetry import create_telemetry_manager
from ..models.dataset import DatasetPayload, NewDataset


# Seconds between checks of a cancel event while a request is in flight
_CANCEL_POLL_INTERVAL = 0.05


def _close_abandoned_response(future: Future) -> None:
    if future.cancelled() or future.exception() is not None:
        return
    future.result().close()


def _error_message(body: Any) -> Optional[str]:
    """Extract ``error.message`` from a decoded error envelope, if present."""
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if not isinstance(error, dict):
        return None
    message = error.get("message")
    return message if isinstance(message, str) else None


class _DatasetsApiClient:
    """Geckoboard Datasets API client: authentication, dispatch and response classification."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        config: Optional[GeckoboardConfig] = None,
        *,
        user_agent: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = (base_url or "").rstrip("/")
        if not self.base_url:
            raise ValueError("base_url is required.")
        self._api_key = api_key
        self.user_agent = user_agent or None
        self.config = config or GeckoboardConfig.from_env()
        self._http = _HttpClient(timeout=self.config.http_timeout, session=session)
        self._telemetry = create_telemetry_manager(self.config.telemetry)

    def _headers(self) -> Dict[str, str]:
        """Build standard JSON headers; auth is attached separately as HTTP basic."""
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if self.user_agent:
            headers["User-Agent"] = self.user_agent
        headers.update(self._telemetry.get_additional_headers())
        return headers

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    @staticmethod
    def _dataset_path(dataset_id: str, suffix: str = "") -> str:
        if not isinstance(dataset_id, str) or not dataset_id.strip():
            raise ValidationError("dataset_id is required", subcode=ec.VALIDATION_DATASET_ID_EMPTY)
        return f"datasets/{quote(dataset_id, safe='')}{suffix}"

    def _request(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        body: Optional[Dict[str, Any]] = None,
        dataset_id: Optional[str] = None,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> requests.Response:
        """
        Send one request and return the response if its status is 2xx.

        The response is opened with ``stream=True`` so success bodies are never
        read; callers close it when done.

        :raises ValidationError: If ``body`` cannot be encoded as strict JSON.
        :raises TransportError: If the request is cancelled or fails below HTTP.
        :raises HttpError: If the response status is not 2xx.
        """
        url = self._url(path)
        data = self._encode_body(body, operation) if body is not None else None
        if cancel_event is not None and cancel_event.is_set():
            raise TransportError(f"{operation} cancelled before dispatch", subcode=ec.TRANSPORT_CANCELLED)

        kwargs: Dict[str, Any] = {
            "headers": self._headers(),
            "auth": HTTPBasicAuth(self._api_key, ""),
            "timeout": timeout,
            "stream": True,
        }
        if data is not None:
            kwargs["data"] = data

        with self._telemetry.trace_request(operation, method, url, dataset_id=dataset_id) as ctx:
            try:
                r = self._send(method, url, kwargs, operation, cancel_event)
            except requests.exceptions.Timeout as exc:
                raise TransportError(f"{operation} timed out: {exc}", subcode=ec.TRANSPORT_TIMEOUT) from exc
            except requests.exceptions.ConnectionError as exc:
                raise TransportError(f"{operation} connection failed: {exc}", subcode=ec.TRANSPORT_CONNECTION) from exc
            except requests.exceptions.RequestException as exc:
                raise TransportError(f"{operation} failed: {exc}", subcode=ec.TRANSPORT_FAILURE) from exc

            if cancel_event is not None and cancel_event.is_set():
                r.close()
                raise TransportError(
                    f"{operation} cancelled while in flight; remote effect is unknown",
                    subcode=ec.TRANSPORT_CANCELLED,
                )
            self._telemetry.record_response(ctx, r.status_code, r.headers.get("Content-Type"))

        self._raise_for_status(r)
        return r

    @staticmethod
    def _encode_body(body: Dict[str, Any], operation: str) -> bytes:
        """Serialize a request body, rejecting NaN, infinities and non-JSON values."""
        try:
            return json.dumps(body, allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise ValidationError(
                f"{operation} payload is not valid JSON: {exc}",
                subcode=ec.VALIDATION_PAYLOAD_NOT_JSON,
            ) from exc

    def _send(
        self,
        method: str,
        url: str,
        kwargs: Dict[str, Any],
        operation: str,
        cancel_event: Optional[threading.Event],
    ) -> requests.Response:
        """
        Dispatch through the transport, returning early if ``cancel_event`` fires.

        Without an event the call runs inline. With one, the call runs on a
        single-use worker thread while this thread waits on the event; a response
        arriving after cancellation is closed unread.
        """
        if cancel_event is None:
            return self._http._request(method, url, **kwargs)

        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="geckoboard-request")
        try:
            future = executor.submit(self._http._request, method, url, **kwargs)
        finally:
            executor.shutdown(wait=False)

        while not future.done():
            if cancel_event.wait(_CANCEL_POLL_INTERVAL):
                future.add_done_callback(_close_abandoned_response)
                raise TransportError(
                    f"{operation} cancelled while in flight; remote effect is unknown",
                    subcode=ec.TRANSPORT_CANCELLED,
                )
        return future.result()

    @staticmethod
    def _raise_for_status(r: requests.Response) -> None:
        """
        Classify a response, raising the matching error for anything but 2xx.

        409, 400 and 401 map to fixed errors regardless of body. Other statuses
        of 400 and above need a JSON content type before the body is decoded
        for ``error.message``. 1xx and 3xx responses are treated as failures.
        """
        status = r.status_code
        if 200 <= status < 300:
            return
        try:
            if status == 409:
                raise RequestConflictError(status_code=status)
            if status == 400:
                raise InvalidRequestError(status_code=status)
            if status == 401:
                raise BadCredentialsError(status_code=status)
            if status < 400:
                raise FailedRequestError(
                    f"request failed: unexpected status {status}",
                    status_code=status,
                    subcode=ec.RESPONSE_UNEXPECTED_STATUS,
                )

            content_type = r.headers.get("Content-Type") or ""
            if "application/json" not in content_type.lower():
                raise InvalidResponseTypeError(
                    status_code=status,
                    subcode=ec.RESPONSE_INVALID_CONTENT_TYPE,
                    content_type=content_type,
                )

            try:
                body = r.json()
            except ValueError as exc:
                raise FailedRequestError(status_code=status, subcode=ec.RESPONSE_UNPARSEABLE_ERROR) from exc
            message = _error_message(body)
            if message is None:
                raise FailedRequestError(status_code=status, subcode=ec.RESPONSE_UNPARSEABLE_ERROR)
            raise APIError(message, status_code=status)
        finally:
            r.close()

    # ----------------------------- Datasets --------------------------------
    def _verify(self) -> None:
        """Check the API key against the service root (``GET /``)."""
        self._request("GET", "/", operation="client.verify").close()

    def _create_dataset(
        self,
        dataset_id: str,
        dataset: NewDataset,
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        if not isinstance(dataset, NewDataset):
            raise TypeError("dataset must be a NewDataset")
        path = self._dataset_path(dataset_id)
        r = self._request(
            "PUT",
            path,
            operation="datasets.create",
            body=dataset.to_dict(),
            dataset_id=dataset_id,
            timeout=timeout,
            cancel_event=cancel_event,
        )
        r.close()

    def _push_data(
        self,
        dataset_id: str,
        payload: DatasetPayload,
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        if not isinstance(payload, DatasetPayload):
            raise TypeError("payload must be a DatasetPayload")
        path = self._dataset_path(dataset_id, "/data")
        r = self._request(
            "POST",
            path,
            operation="datasets.push_data",
            body=payload.to_dict(include_delete_by=True),
            dataset_id=dataset_id,
            timeout=timeout,
            cancel_event=cancel_event,
        )
        r.close()

    def _replace_data(
        self,
        dataset_id: str,
        payload: DatasetPayload,
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        if not isinstance(payload, DatasetPayload):
            raise TypeError("payload must be a DatasetPayload")
        path = self._dataset_path(dataset_id, "/data")
        # delete_by only applies to appends
        r = self._request(
            "PUT",
            path,
            operation="datasets.replace_data",
            body=payload.to_dict(include_delete_by=False),
            dataset_id=dataset_id,
            timeout=timeout,
            cancel_event=cancel_event,
        )
        r.close()

    def _delete_dataset(
        self,
        dataset_id: str,
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        path = self._dataset_path(dataset_id)
        r = self._request(
            "DELETE",
            path,
            operation="datasets.delete",
            dataset_id=dataset_id,
            timeout=timeout,
            cancel_event=cancel_event,
        )
        r.close()
