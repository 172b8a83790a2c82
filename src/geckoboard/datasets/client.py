# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from typing import Optional

import requests

from .core.config import DEFAULT_API_URL, GeckoboardConfig
from .data._api import _DatasetsApiClient
from .operations.datasets import DatasetOperations


class GeckoboardClient:
    """
    High-level client for the Geckoboard Datasets API.

    Construction sends one verification request (``GET /``) using the given
    key. If that request fails, the classified error is raised and no client
    is returned, so a constructed client always holds a key the service
    accepted at that time.

    The client keeps no per-call state and may be shared between threads.
    Requests go through a process-wide :class:`requests.Session` unless one
    is injected with ``session``.

    :param api_key: Geckoboard API key, sent as the HTTP basic auth username.
    :type api_key: :class:`str`
    :param user_agent: Optional ``User-Agent`` header sent with every request.
    :type user_agent: :class:`str` or None
    :param base_url: API root. Defaults to ``https://api.geckoboard.com``;
        override to target a test double. Trailing slash is removed.
    :type base_url: :class:`str`
    :param config: Optional timeout and telemetry configuration.
        If not provided, defaults are loaded from :meth:`~geckoboard.datasets.core.config.GeckoboardConfig.from_env`.
    :type config: ~geckoboard.datasets.core.config.GeckoboardConfig or None
    :param session: Optional session used for every request made by this client.
    :type session: :class:`requests.Session` or None

    :raises ValueError: If ``base_url`` is empty after trimming.
    :raises ~geckoboard.datasets.core.errors.BadCredentialsError: If the key is rejected.
    :raises ~geckoboard.datasets.core.errors.TransportError: If the service is unreachable.

    Example::

        from geckoboard.datasets import GeckoboardClient, NewDataset, DatasetPayload
        from geckoboard.datasets.models.fields import StringField, NumberField

        client = GeckoboardClient(api_key, user_agent="nightly-export/1.2")
        client.datasets.create(
            "orders",
            NewDataset(
                fields={"name": StringField("Name"), "amount": NumberField("Amount")},
                unique_by=["name"],
            ),
        )
        client.datasets.push_data("orders", DatasetPayload(data=[{"name": "a", "amount": 1}]))
    """

    def __init__(
        self,
        api_key: str,
        *,
        user_agent: Optional[str] = None,
        base_url: str = DEFAULT_API_URL,
        config: Optional[GeckoboardConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._api = _DatasetsApiClient(
            api_key,
            base_url,
            config or GeckoboardConfig.from_env(),
            user_agent=user_agent,
            session=session,
        )
        self.datasets = DatasetOperations(self)
        self._api._verify()

    @classmethod
    def new(cls, api_key: str, **kwargs) -> "GeckoboardClient":
        """Create a verified client for the production API."""
        return cls(api_key, **kwargs)

    @classmethod
    def with_user_agent(cls, api_key: str, user_agent: str, **kwargs) -> "GeckoboardClient":
        """Create a verified client for the production API that sends ``user_agent``."""
        return cls(api_key, user_agent=user_agent, **kwargs)

    @classmethod
    def custom(
        cls,
        base_url: str,
        api_key: str,
        user_agent: Optional[str] = None,
        **kwargs,
    ) -> "GeckoboardClient":
        """Create a verified client for an alternate API root, e.g. a local test double."""
        return cls(api_key, user_agent=user_agent, base_url=base_url, **kwargs)

    @property
    def base_url(self) -> str:
        return self._api.base_url

    @property
    def user_agent(self) -> Optional[str]:
        return self._api.user_agent

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_url={self.base_url!r})"
