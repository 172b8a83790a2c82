# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Telemetry infrastructure for the Geckoboard Datasets client.

Provides request logging and an extensible hook system for custom
telemetry providers.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import (
    Any,
    Dict,
    Generator,
    List,
    Optional,
    Protocol,
    Union,
    runtime_checkable,
)


# ============================================================================
# Configuration
# ============================================================================


@dataclass(frozen=True)
class TelemetryConfig:
    """Configuration for client logging and telemetry hooks.

    Telemetry is opt-in. When enabled, every request produces one log record
    on ``logger_name`` and is reported to each registered hook.

    Example:
        Request logging::

            config = GeckoboardConfig(
                telemetry=TelemetryConfig(enable_logging=True, log_level="DEBUG")
            )

        Custom hook::

            config = GeckoboardConfig(
                telemetry=TelemetryConfig(hooks=[MyStatsdHook()])
            )
    """

    enable_logging: bool = False
    log_level: str = "WARNING"
    logger_name: str = "geckoboard.datasets"

    hooks: List["TelemetryHook"] = field(default_factory=list)


# ============================================================================
# Context Objects
# ============================================================================


@dataclass
class RequestContext:
    """Context passed to telemetry hooks for each HTTP request."""

    method: str
    url: str
    operation: str  # e.g. "datasets.create", "client.verify"
    dataset_id: Optional[str] = None

    start_time: float = field(default_factory=time.perf_counter)

    # Custom data bag for hooks to share state
    custom_data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ResponseContext:
    """Response information passed to telemetry hooks."""

    status_code: int
    duration_ms: float
    content_type: Optional[str] = None
    error: Optional[Exception] = None


# ============================================================================
# Hook Protocol
# ============================================================================


@runtime_checkable
class TelemetryHook(Protocol):
    """Protocol for custom telemetry hooks.

    All methods are optional - implement only what you need.

    Example:
        class StatsdHook:
            def __init__(self, statsd):
                self.statsd = statsd

            def on_request_end(self, request: RequestContext, response: ResponseContext):
                self.statsd.timing(
                    f"geckoboard.{request.operation}.duration",
                    response.duration_ms
                )
    """

    def on_request_start(self, context: RequestContext) -> None:
        """Called before each HTTP request is sent."""
        ...

    def on_request_end(self, request: RequestContext, response: ResponseContext) -> None:
        """Called after each HTTP response has been classified."""
        ...

    def on_request_error(self, request: RequestContext, error: Exception) -> None:
        """Called when a request fails before a response is received."""
        ...

    def get_additional_headers(self) -> Dict[str, str]:
        """Return additional headers to include in requests."""
        ...


# ============================================================================
# Telemetry Manager
# ============================================================================


class TelemetryManager:
    """Manages logging and hook dispatch for the client.

    This class is internal and not part of the public API.
    """

    def __init__(self, config: Optional[TelemetryConfig] = None) -> None:
        self._config = config or TelemetryConfig()
        self._hooks = list(self._config.hooks)
        self._logger = logging.getLogger(self._config.logger_name)
        self._log_requests = self._config.enable_logging
        if self._log_requests:
            self._logger.setLevel(getattr(logging, self._config.log_level.upper()))

    @contextmanager
    def trace_request(
        self,
        operation: str,
        method: str,
        url: str,
        dataset_id: Optional[str] = None,
    ) -> Generator[RequestContext, None, None]:
        """Create a traced request context.

        Usage:
            with telemetry.trace_request("datasets.create", "PUT", url, "sales") as ctx:
                response = self._http.request(...)
                telemetry.record_response(ctx, response.status_code)
        """
        ctx = RequestContext(
            method=method,
            url=url,
            operation=operation,
            dataset_id=dataset_id,
        )

        self._dispatch_request_start(ctx)

        try:
            yield ctx
        except Exception as e:
            if self._log_requests:
                self._logger.error("%s %s failed: %s", ctx.operation, ctx.method, e)
            self._dispatch_request_error(ctx, e)
            raise

    def record_response(
        self,
        ctx: RequestContext,
        status_code: int,
        content_type: Optional[str] = None,
        error: Optional[Exception] = None,
    ) -> None:
        """Log the response and dispatch it to hooks."""
        duration_ms = (time.perf_counter() - ctx.start_time) * 1000

        response = ResponseContext(
            status_code=status_code,
            duration_ms=duration_ms,
            content_type=content_type,
            error=error,
        )

        if self._log_requests:
            level = logging.WARNING if status_code >= 400 else logging.DEBUG
            self._logger.log(
                level,
                "%s %s %s %.1fms",
                ctx.operation,
                ctx.method,
                status_code,
                duration_ms,
                extra={"dataset_id": ctx.dataset_id},
            )

        self._dispatch_request_end(ctx, response)

    def _dispatch_request_start(self, ctx: RequestContext) -> None:
        for hook in self._hooks:
            if hasattr(hook, "on_request_start"):
                try:
                    hook.on_request_start(ctx)
                except Exception:
                    # Hooks should not break requests
                    self._logger.debug("on_request_start hook failed", exc_info=True)

    def _dispatch_request_end(self, request: RequestContext, response: ResponseContext) -> None:
        for hook in self._hooks:
            if hasattr(hook, "on_request_end"):
                try:
                    hook.on_request_end(request, response)
                except Exception:
                    self._logger.debug("on_request_end hook failed", exc_info=True)

    def _dispatch_request_error(self, request: RequestContext, error: Exception) -> None:
        for hook in self._hooks:
            if hasattr(hook, "on_request_error"):
                try:
                    hook.on_request_error(request, error)
                except Exception:
                    self._logger.debug("on_request_error hook failed", exc_info=True)

    def get_additional_headers(self) -> Dict[str, str]:
        """Collect additional headers from all hooks."""
        headers: Dict[str, str] = {}
        for hook in self._hooks:
            if hasattr(hook, "get_additional_headers"):
                try:
                    hook_headers = hook.get_additional_headers()
                    if hook_headers:
                        headers.update(hook_headers)
                except Exception:
                    self._logger.debug("get_additional_headers hook failed", exc_info=True)
        return headers


# ============================================================================
# No-op Manager for when telemetry is disabled
# ============================================================================


class NoOpTelemetryManager:
    """No-op telemetry manager when telemetry is disabled."""

    @contextmanager
    def trace_request(
        self,
        operation: str,
        method: str,
        url: str,
        dataset_id: Optional[str] = None,
    ) -> Generator[RequestContext, None, None]:
        yield RequestContext(
            method=method,
            url=url,
            operation=operation,
            dataset_id=dataset_id,
        )

    def record_response(self, *args: Any, **kwargs: Any) -> None:
        pass

    def get_additional_headers(self) -> Dict[str, str]:
        return {}


def create_telemetry_manager(
    config: Optional[TelemetryConfig],
) -> Union[TelemetryManager, NoOpTelemetryManager]:
    """Factory to create appropriate telemetry manager."""
    if config is None:
        return NoOpTelemetryManager()

    if not (config.enable_logging or config.hooks):
        return NoOpTelemetryManager()

    return TelemetryManager(config)


__all__ = [
    "TelemetryConfig",
    "TelemetryHook",
    "TelemetryManager",
    "NoOpTelemetryManager",
    "RequestContext",
    "ResponseContext",
    "create_telemetry_manager",
]
