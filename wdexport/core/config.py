"""
Exporter settings.

Every field can be overridden by an environment variable of the same
name or from a ``.env`` file in the working directory. The API reads them
per request as defaults; the CLI flags take precedence over them.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Exporter configuration loaded from environment variables.

    ``EXPORT_BASE_URL``: Project base URL that relative ``open`` targets
    are resolved against when a request does not provide one.
    ``ELEMENT_TIMEOUT_MS``: Value assigned to the ``TIMEOUT`` constant of
    generated programs; every element lookup waits up to this long.
    ``NEW_WINDOW_TIMEOUT``: Default argument of the generated
    ``waitForWindow`` helper, used when a command carries no timeout.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    EXPORT_BASE_URL: str = ""
    ELEMENT_TIMEOUT_MS: int = 30000
    NEW_WINDOW_TIMEOUT: int = 2

    # Renderer
    INDENT_WIDTH: int = 2
    EMIT_LOGGER_COMMANDS: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # Dev CORS (comma-separated)
    CORS_ORIGINS: str = "http://localhost:5173,http://127.0.0.1:5173"


settings = Settings()
