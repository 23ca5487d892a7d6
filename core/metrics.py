"""
Core metrics collection for ParcelIQ Relay using Prometheus
"""
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Counter, Histogram, Info, generate_latest

from core.config import settings
from core.logging import get_logger

# Create a global registry for the application
REGISTRY = CollectorRegistry()

# Application info
app_info = Info("parceliq_app", "ParcelIQ relay application information", registry=REGISTRY)

# Request metrics
request_count = Counter(
    "parceliq_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
    registry=REGISTRY,
)

request_duration = Histogram(
    "parceliq_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
    registry=REGISTRY,
)

# Enrichment metrics
enrichments_total = Counter(
    "parceliq_enrichments_total",
    "Total enrichment requests by outcome",
    ["outcome"],
    registry=REGISTRY,
)

enrichment_stage_failures = Counter(
    "parceliq_enrichment_stage_failures_total",
    "Enrichment stages that failed",
    ["stage"],
    registry=REGISTRY,
)

# Error metrics
error_count = Counter(
    "parceliq_errors_total",
    "Total errors returned to callers",
    ["error_type", "domain"],
    registry=REGISTRY,
)


class MetricsCollector:
    """Helper class for collecting metrics"""

    def __init__(self):
        self.logger = get_logger("metrics")

        app_info.info({"version": settings.app_version, "environment": settings.environment})

    def track_request(self, method: str, endpoint: str, status: int, duration: float):
        """Track HTTP request metrics"""
        request_count.labels(method=method, endpoint=endpoint, status=str(status)).inc()
        request_duration.labels(method=method, endpoint=endpoint).observe(duration)

    def track_enrichment(self, failed_stages: list[str]):
        """Track one enrichment and the stages it lost"""
        outcome = "partial" if failed_stages else "complete"
        enrichments_total.labels(outcome=outcome).inc()
        for stage in failed_stages:
            enrichment_stage_failures.labels(stage=stage).inc()

    def track_error(self, error_type: str, domain: str):
        """Track errors"""
        error_count.labels(error_type=error_type, domain=domain).inc()

    def get_metrics(self) -> bytes:
        """Get current metrics in Prometheus format"""
        return generate_latest(REGISTRY)


# Global metrics collector instance
metrics = MetricsCollector()


def get_metrics_response() -> tuple[bytes, str]:
    """Get metrics response for Prometheus endpoint"""
    return metrics.get_metrics(), CONTENT_TYPE_LATEST
