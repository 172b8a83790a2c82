# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared test utilities for unit tests.

Provides fake responses and sessions standing in for ``requests`` so the
request pipeline can be exercised without network access.
"""

import json
import threading
from urllib.parse import unquote, urlsplit

from geckoboard.datasets.data._api import _DatasetsApiClient

JSON = {"Content-Type": "application/json"}
JSON_UTF8 = {"Content-Type": "application/json; charset=utf-8"}
HTML = {"Content-Type": "text/html"}


class FakeResponse:
    """Minimal stand-in for :class:`requests.Response`.

    Records whether the body was decoded and whether the response was closed.
    """

    def __init__(self, status_code, headers=None, body=None):
        self.status_code = status_code
        self.headers = dict(headers or {})
        self._body = body
        self.json_calls = 0
        self.closed = False

    def json(self):
        self.json_calls += 1
        if isinstance(self._body, (dict, list)):
            return self._body
        return json.loads(self._body or "")

    def close(self):
        self.closed = True


class DummySession:
    """Session returning pre-configured responses in order.

    Args:
        responses: ``FakeResponse`` objects, ``(status, headers, body)`` tuples, or
            exceptions to raise.

    Attributes:
        calls: List of (method, url, kwargs) tuples recording all requests made.
    """

    def __init__(self, responses=None):
        self._responses = list(responses or [])
        self.calls = []
        self.returned = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if not self._responses:
            raise AssertionError("No more dummy responses configured")
        item = self._responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        if isinstance(item, tuple):
            item = FakeResponse(*item)
        self.returned.append(item)
        return item

    def close(self):
        pass


def make_api(responses=None, **kwargs):
    """Build a low-level client backed by a ``DummySession``.

    Returns ``(api, session)``.
    """
    session = DummySession(responses)
    api = _DatasetsApiClient("test-key", "https://api.example.com", session=session, **kwargs)
    return api, session


def ok():
    return FakeResponse(200, JSON, {})


def sent_body(kwargs):
    """Decode the JSON body recorded for a request, or None when there was none."""
    data = kwargs.get("data")
    return json.loads(data) if data is not None else None


class FakeGeckoboardService(DummySession):
    """In-memory Datasets API used for end-to-end scenarios.

    Implements create, append with ``unique_by`` merging and ``delete_by``
    pruning, replace and delete. Unknown datasets answer 404 with a JSON
    error envelope.
    """

    def __init__(self, api_key="test-key"):
        super().__init__()
        self.api_key = api_key
        self.datasets = {}
        self._lock = threading.Lock()

    def request(self, method, url, **kwargs):
        with self._lock:
            return self._handle(method, url, **kwargs)

    def _handle(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        auth = kwargs.get("auth")
        if auth is None or auth.username != self.api_key:
            return FakeResponse(401, JSON, {"error": {"message": "Your API key is invalid"}})

        parts = [unquote(p) for p in urlsplit(url).path.split("/") if p]
        body = sent_body(kwargs)

        if method == "GET" and not parts:
            return FakeResponse(200, JSON, {})
        if len(parts) < 2 or parts[0] != "datasets":
            return FakeResponse(404, HTML, "<h1>Not found</h1>")

        dataset_id = parts[1]
        if len(parts) == 2:
            if method == "PUT":
                return self._create(dataset_id, body)
            if method == "DELETE":
                if self.datasets.pop(dataset_id, None) is None:
                    return self._not_found(dataset_id)
                return FakeResponse(200, JSON, {})
        if len(parts) == 3 and parts[2] == "data":
            ds = self.datasets.get(dataset_id)
            if ds is None:
                return self._not_found(dataset_id)
            if method == "POST":
                return self._append(ds, body)
            if method == "PUT":
                ds["data"] = [dict(r) for r in body["data"]]
                return FakeResponse(200, JSON, {})
        return FakeResponse(405, JSON, {"error": {"message": "Method not allowed"}})

    def _not_found(self, dataset_id):
        return FakeResponse(404, JSON, {"error": {"message": f"Dataset not found: {dataset_id}"}})

    def _create(self, dataset_id, body):
        if not body or not body.get("fields"):
            return FakeResponse(400, JSON, {"error": {"message": "Fields are required"}})
        existing = self.datasets.get(dataset_id)
        if existing is not None and existing["schema"] != body:
            return FakeResponse(409, JSON, {"error": {"message": "Fields have changed"}})
        self.datasets[dataset_id] = {"schema": body, "data": existing["data"] if existing else []}
        return FakeResponse(201, JSON, body)

    def _append(self, ds, body):
        unique_by = ds["schema"].get("unique_by") or []
        delete_by = body.get("delete_by") or []
        for record in body["data"]:
            if delete_by:
                ds["data"] = [r for r in ds["data"] if any(r.get(k) != record.get(k) for k in delete_by)]
            if unique_by:
                key = tuple(record.get(k) for k in unique_by)
                ds["data"] = [r for r in ds["data"] if tuple(r.get(k) for k in unique_by) != key]
            ds["data"].append(dict(record))
        return FakeResponse(200, JSON, {})
