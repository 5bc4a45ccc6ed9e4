"""Configuration settings for the bid monitor."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

import httpx
from dotenv import load_dotenv

from .errors import ConfigError

load_dotenv()

# Monitoring interval
CHECK_INTERVAL_SECONDS: int = int(os.getenv("CHECK_INTERVAL", "300"))

# Marketplace API
MARKET_BASE_URL: str = os.getenv("MARKET_BASE_URL", "https://stockx.com")
CURRENCY: str = "GBP"

# HTTP settings
REQUEST_TIMEOUT_SECONDS: int = 30
USER_AGENT: str = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/16.1 Safari/605.1.15"
)

# Variables that must be present before polling starts
REQUIRED_VARIABLES: tuple[str, ...] = (
    "WEBHOOK_URL",
    "PROXY",
    "PROXY_USER",
    "PROXY_PWD",
    "LOOK_FOR_SIZE",
    "ITEM_URL_KEY",
)


@dataclass(frozen=True)
class Settings:
    """Runtime parameters resolved from the environment."""
    webhook_url: str
    proxy_url: str
    proxy_user: str
    proxy_password: str
    look_for_size: str
    item_url_key: str


def normalize_proxy_url(value: str) -> str:
    """
    Return a proxy URL httpx accepts.

    A bare `host:port` is treated as an HTTP proxy. Anything httpx still
    rejects raises ConfigError.
    """
    if "://" not in value:
        value = f"http://{value}"
    try:
        httpx.Proxy(value)
    except (ValueError, httpx.InvalidURL) as e:
        raise ConfigError(f"Invalid PROXY value {value!r}: {e}") from e
    return value


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Resolve required settings from the environment.

    Empty values count as missing. Raises ConfigError naming every
    variable that could not be resolved, or on an unusable PROXY.
    """
    if environ is None:
        environ = os.environ

    missing = [name for name in REQUIRED_VARIABLES if not environ.get(name)]
    if missing:
        raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

    return Settings(
        webhook_url=environ["WEBHOOK_URL"],
        proxy_url=normalize_proxy_url(environ["PROXY"]),
        proxy_user=environ["PROXY_USER"],
        proxy_password=environ["PROXY_PWD"],
        look_for_size=environ["LOOK_FOR_SIZE"],
        item_url_key=environ["ITEM_URL_KEY"],
    )
