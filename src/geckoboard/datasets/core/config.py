# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .telemetry import TelemetryConfig

DEFAULT_API_URL = "https://api.geckoboard.com"


@dataclass(frozen=True)
class GeckoboardConfig:
    """
    Configuration settings for Geckoboard client operations.

    :param http_timeout: Request timeout in seconds (default: method-dependent).
    :type http_timeout: float or None
    :param telemetry: Optional logging and hook configuration. Telemetry is disabled when omitted.
    :type telemetry: ~geckoboard.datasets.core.telemetry.TelemetryConfig or None
    """

    http_timeout: Optional[float] = None
    telemetry: Optional[TelemetryConfig] = None

    @classmethod
    def from_env(cls) -> "GeckoboardConfig":
        """
        Create a configuration instance with default settings.

        :return: Configuration instance with default values.
        :rtype: ~geckoboard.datasets.core.config.GeckoboardConfig
        """
        # Environment-free defaults; API keys are supplied by the caller
        return cls(
            http_timeout=None,  # Will use method-dependent defaults in _HttpClient
            telemetry=None,
        )
