"""
Idempotent Prometheus metric registration.

Importing the metrics module twice (uvicorn --reload, several application
instances in tests) must hand back the collectors that are already
registered instead of failing with a duplicate timeseries error.
"""

from typing import Any, TypeVar

from prometheus_client import REGISTRY, Counter, Gauge, Histogram
from prometheus_client.registry import CollectorRegistry

MetricT = TypeVar("MetricT", Counter, Gauge, Histogram)


def get_or_create_metric(
    metric_class: type[MetricT],
    name: str,
    documentation: str,
    labels: list[str] | None = None,
    registry: CollectorRegistry = REGISTRY,
    **kwargs: Any,
) -> MetricT:
    """
    Return the collector registered under `name`, creating it if needed.

    Args:
        metric_class: Counter, Gauge or Histogram.
        name: Metric name as passed to the constructor (counters may end
            in `_total`).
        documentation: Help text.
        labels: Label names.
        registry: Registry to look up and register in.
        **kwargs: Extra constructor arguments such as histogram `buckets`.

    Raises:
        TypeError: A metric with this name exists with another type.
    """
    existing = registry._names_to_collectors.get(name)
    if existing is None:
        return metric_class(
            name, documentation, labels or [], registry=registry, **kwargs
        )

    if not isinstance(existing, metric_class):
        raise TypeError(
            f"Metric {name} is already registered as "
            f"{type(existing).__name__}"
        )
    return existing
