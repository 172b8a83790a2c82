# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
HTTP transport with timeout handling and shared session support.

This module provides :class:`~geckoboard.datasets.core._http._HttpClient`, a thin
wrapper around the requests library that applies per-method default timeouts
and dispatches through a :class:`requests.Session`. No retries are performed;
failures are left to the caller.
"""

from __future__ import annotations

import threading
from typing import Any, Optional

import requests

_shared_session: Optional[requests.Session] = None
_shared_session_lock = threading.Lock()


def _get_shared_session() -> requests.Session:
    """
    Return the process-wide session used when no session is injected.

    The session is created on first use and reused by every client in the
    process so connections are pooled across clients.

    :rtype: :class:`requests.Session`
    """
    global _shared_session
    with _shared_session_lock:
        if _shared_session is None:
            _shared_session = requests.Session()
        return _shared_session


class _HttpClient:
    """
    HTTP client with timeout handling over a :class:`requests.Session`.

    :param timeout: Default request timeout in seconds. If None, uses per-method defaults.
    :type timeout: :class:`float` | None
    :param session: Optional session for connection pooling. When omitted the
        process-wide shared session is used.
    :type session: :class:`requests.Session` | None
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.default_timeout: Optional[float] = timeout
        self._session = session

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            return _get_shared_session()
        return self._session

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """
        Execute a single HTTP request with timeout management.

        Applies default timeouts based on HTTP method (120s for writes, 10s for others).

        :param method: HTTP method (GET, POST, PUT, DELETE).
        :type method: :class:`str`
        :param url: Target URL for the request.
        :type url: :class:`str`
        :param kwargs: Additional arguments passed to ``session.request()``,
            including headers, data, auth, etc.
        :return: HTTP response object.
        :rtype: :class:`requests.Response`
        :raises requests.exceptions.RequestException: On any transport failure.
        """
        if kwargs.get("timeout") is None:
            if self.default_timeout is not None:
                kwargs["timeout"] = self.default_timeout
            else:
                m = (method or "").lower()
                kwargs["timeout"] = 120 if m in ("post", "put", "delete") else 10

        return self.session.request(method, url, **kwargs)
