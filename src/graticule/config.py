"""Graticule configuration using pydantic-settings.

All configuration is strongly typed and supports environment variables
and .env files.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigError(Exception):
    """Raised when a configuration value is unusable for grid generation.

    Example:
        >>> Settings(_env_file=None, MAX_LINES=-1).require_max_lines()
        Traceback (most recent call last):
        ...
        graticule.config.ConfigError: MAX_LINES must be >= 0, got -1. Fix it in .env file or MAX_LINES environment variable.
    """

    def __init__(self, key_name: str, problem: str) -> None:
        """Initialize configuration error.

        Args:
            key_name: Setting name, which is also its environment variable.
            problem: What is wrong with the configured value.
        """
        self.key_name = key_name
        self.problem = problem
        message = (
            f"{key_name} {problem}. "
            f"Fix it in .env file or {key_name} environment variable."
        )
        super().__init__(message)


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"  # "console" or "json"

    # Grid generation
    TARGET_SIZE: float = 100.0  # Target spacing between lines, in pixels
    MAX_LINES: int = 100  # Per axis, per walk direction
    LABEL_PRECISION: int = 6  # Decimal places kept in label text

    # Classify projections from their proj definition family when available
    ENABLE_PROJ_DEFINITIONS: bool = False

    def require_target_size(self) -> float:
        """Get the target pixel spacing, raising ConfigError if unusable.

        Returns:
            The configured target size.

        Raises:
            ConfigError: If TARGET_SIZE is not strictly positive.
        """
        if not self.TARGET_SIZE > 0:
            raise ConfigError("TARGET_SIZE", f"must be > 0, got {self.TARGET_SIZE}")
        return self.TARGET_SIZE

    def require_max_lines(self) -> int:
        """Get the per-direction line cap, raising ConfigError if unusable.

        Returns:
            The configured maximum line count.

        Raises:
            ConfigError: If MAX_LINES is negative.
        """
        if self.MAX_LINES < 0:
            raise ConfigError("MAX_LINES", f"must be >= 0, got {self.MAX_LINES}")
        return self.MAX_LINES


# Singleton instance for import convenience
settings = Settings()
