"""
Run the relay with uvicorn.

Usage:
    python run_server.py
"""

if __name__ == "__main__":
    import logging

    import uvicorn

    from translation_relay.settings import app_settings
    from translation_relay.uvicorn_filters import ExcludeMetricsFilter

    logging.getLogger("uvicorn.access").addFilter(ExcludeMetricsFilter())

    uvicorn.run(
        "translation_relay:application",
        factory=True,
        host=app_settings.HOST,
        port=app_settings.PORT,
    )
