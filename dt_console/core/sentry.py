from sentry_sdk.integrations.aiohttp import AioHttpIntegration

from dt_console import config


def get_sentry_kwargs():
    """
    Returns Sentry configuration kwargs for the console API.

    Status fetch and query failures are captured by report_exception, the
    aiohttp integration covers errors raised by the HTTP handlers. Without a
    SENTRY_DSN the SDK stays inactive and failures are only logged.
    """
    return {
        "dsn": config.SENTRY_DSN or None,
        "integrations": [AioHttpIntegration()],
        "environment": config.SERVER_NAME or "unknown",
        "traces_sample_rate": config.SENTRY_SAMPLE_RATE or 1.0,
        "profiles_sample_rate": config.SENTRY_SAMPLE_RATE or 1.0,
    }
