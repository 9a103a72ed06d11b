import os


def _csv(value: str) -> list:
    return [item.strip() for item in value.split(",") if item.strip()]


class ServiceConfig:
    """Service configuration from environment with defaults."""

    SEIREST = os.getenv("SEIREST", "https://rest.sei-apis.com")
    API_KEY = os.getenv("API_KEY") or None
    REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "5.0"))
    CONNECT_TIMEOUT = float(os.getenv("CONNECT_TIMEOUT", "2.0"))

    CACHE_MAX_SIZE = int(os.getenv("CACHE_MAX_SIZE", "500"))
    CACHE_TTL_SECONDS = float(os.getenv("CACHE_TTL_SECONDS", "300"))

    MAX_BATCH_SIZE = int(os.getenv("MAX_BATCH_SIZE", "25"))
    MAX_BATCH_SIZE_AUTHENTICATED = int(os.getenv("MAX_BATCH_SIZE_AUTHENTICATED", "500"))
    CLIENT_API_KEYS = _csv(os.getenv("CLIENT_API_KEYS", ""))

    NATIVE_DENOM = os.getenv("NATIVE_DENOM", "usei")

    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "3003"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
