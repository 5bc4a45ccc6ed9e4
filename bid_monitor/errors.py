"""Error types raised by the bid monitor."""


class MonitorError(Exception):
    """Base class for all bid monitor failures."""


class ConfigError(MonitorError):
    """A required setting is missing from the environment."""


class FetchError(MonitorError):
    """Marketplace request failed or returned an unexpected body."""


class NotifyError(MonitorError):
    """Webhook delivery failed."""
