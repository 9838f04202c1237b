"""
Prometheus metrics definitions.

All metrics are re-exported here:

    from translation_relay.utils.metrics import ws_connections_active
"""

from translation_relay.utils.metrics.websocket import (
    relay_sessions_active,
    relay_translations_total,
    ws_connections_active,
    ws_connections_total,
    ws_delivery_failures_total,
    ws_message_processing_duration_seconds,
    ws_messages_received_total,
    ws_messages_sent_total,
)

__all__ = [
    "ws_connections_active",
    "ws_connections_total",
    "ws_messages_received_total",
    "ws_messages_sent_total",
    "ws_delivery_failures_total",
    "ws_message_processing_duration_seconds",
    "relay_sessions_active",
    "relay_translations_total",
]
