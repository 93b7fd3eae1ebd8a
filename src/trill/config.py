"""Application configuration.

AppConfig is a frozen dataclass: immutable after creation, no string-key
dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have defaults. Override what you need::

        config = AppConfig(debug=True, port=3000)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    workers: int = 1  # 0 = auto-detect from CPU count
    reload_dirs: tuple[str, ...] = ()  # Extra directories to watch (debug only)
    log_level: str = "info"

    # Routing
    redirect_status: int = 301  # Status for trailing-slash redirects
