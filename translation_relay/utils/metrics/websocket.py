"""
Prometheus metrics for WebSocket connections and room fan-out.
"""

from prometheus_client import Counter, Gauge, Histogram

from translation_relay.utils.metrics._helpers import get_or_create_metric

# WebSocket Connection Metrics
ws_connections_active = get_or_create_metric(
    Gauge,
    "ws_connections_active",
    "Number of active WebSocket connections",
)

ws_connections_total = get_or_create_metric(
    Counter,
    "ws_connections_total",
    "Total WebSocket connections",
    ["status"],  # accepted, closed
)

ws_messages_received_total = get_or_create_metric(
    Counter,
    "ws_messages_received_total",
    "Total WebSocket messages received",
    ["type"],
)

ws_messages_sent_total = get_or_create_metric(
    Counter,
    "ws_messages_sent_total",
    "Total WebSocket messages sent",
)

ws_delivery_failures_total = get_or_create_metric(
    Counter,
    "ws_delivery_failures_total",
    "WebSocket deliveries skipped or failed during fan-out",
    ["reason"],  # not_open, send_error
)

ws_message_processing_duration_seconds = get_or_create_metric(
    Histogram,
    "ws_message_processing_duration_seconds",
    "WebSocket message processing duration in seconds",
    ["type"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

# Room Metrics
relay_sessions_active = get_or_create_metric(
    Gauge,
    "relay_sessions_active",
    "Number of rooms with at least one participant",
)

relay_translations_total = get_or_create_metric(
    Counter,
    "relay_translations_total",
    "Total translation events relayed",
)

