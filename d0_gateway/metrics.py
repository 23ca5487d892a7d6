"""
Prometheus metrics for D0 Gateway monitoring
"""
from prometheus_client import Counter, Histogram

from core.logging import get_logger
from core.metrics import REGISTRY

api_calls_total = Counter(
    "gateway_api_calls_total",
    "Total number of upstream API calls made through the gateway",
    ["provider", "endpoint", "status_code"],
    registry=REGISTRY,
)

api_latency_seconds = Histogram(
    "gateway_api_latency_seconds",
    "Upstream API call latency in seconds",
    ["provider", "endpoint"],
    buckets=[0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0],
    registry=REGISTRY,
)

transport_errors_total = Counter(
    "gateway_transport_errors_total",
    "Upstream calls that never produced an HTTP response",
    ["provider", "endpoint"],
    registry=REGISTRY,
)

not_configured_total = Counter(
    "gateway_not_configured_total",
    "Calls refused because the provider credential is missing",
    ["provider"],
    registry=REGISTRY,
)


class GatewayMetrics:
    """Prometheus metrics collector for D0 Gateway"""

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self.logger = get_logger("gateway.metrics", domain="d0")
        self.__class__._initialized = True

    def record_api_call(self, provider: str, endpoint: str, status_code: int, duration: float) -> None:
        """Record an API call with metrics"""
        try:
            api_calls_total.labels(provider=provider, endpoint=endpoint, status_code=str(status_code)).inc()
            api_latency_seconds.labels(provider=provider, endpoint=endpoint).observe(duration)

            self.logger.debug(
                f"Recorded API call: {provider}/{endpoint} status={status_code} duration={duration:.3f}s"
            )

        except Exception as e:
            self.logger.error(f"Failed to record API call metrics: {e}")

    def record_transport_error(self, provider: str, endpoint: str) -> None:
        """Record a call that failed before any response arrived"""
        try:
            transport_errors_total.labels(provider=provider, endpoint=endpoint).inc()
        except Exception as e:
            self.logger.error(f"Failed to record transport error: {e}")

    def record_not_configured(self, provider: str) -> None:
        """Record a call refused for a missing credential"""
        try:
            not_configured_total.labels(provider=provider).inc()
        except Exception as e:
            self.logger.error(f"Failed to record not-configured call: {e}")
