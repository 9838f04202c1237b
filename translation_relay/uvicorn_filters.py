"""Custom filters for uvicorn access logging."""

import logging

from translation_relay.settings import app_settings


class ExcludeMetricsFilter(logging.Filter):
    """
    Logging filter to exclude monitoring endpoint requests from access logs.

    Requests to paths listed in LOG_EXCLUDED_PATHS (by default /metrics and
    /health) will not appear in uvicorn's access logs.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        return not any(
            path in message for path in app_settings.LOG_EXCLUDED_PATHS
        )
