from functools import cached_property
from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from viewcells import CELL_DIR
from viewcells.exceptions import ConfigurationException, ErrorCode
from viewcells.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

Environment = Literal["development", "test", "production"]


class Settings(BaseSettings):
    """Cell rendering settings with validation.

    Values come from CELLS_* environment variables or a .env file in the
    working directory; every field has a usable default.

    Uses Pydantic v2 API:
    - model_config with SettingsConfigDict
    - @field_validator decorator
    - @cached_property for derived values
    """

    app_root: Path = Field(default_factory=Path.cwd, description="Application root holding the cell directory")
    cell_dir: str = Field(default=CELL_DIR, min_length=1, description="Cell directory relative to each root")
    overlay_roots: list[Path] = Field(
        default_factory=list,
        description="Plugin/engine roots searched after the application root, highest precedence first",
    )

    environment: Environment = Field(default="development", description="Controls the missing template policy")

    perform_caching: bool = Field(default=False, description="Process-wide switch for cell fragment caching")
    cache_expires_in: float | None = Field(default=None, gt=0, description="Fragment expiry in seconds")

    template_extension: str = Field(default=".html", description="Extension appended to state template names")
    log_level: str = Field(default="INFO", description="Logging level")

    model_config = SettingsConfigDict(
        env_prefix="CELLS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @cached_property
    def cell_roots(self) -> list[Path]:
        """Cell directories to search, application root first.

        Uses @cached_property so the list is built once per Settings instance.

        Returns:
            List of <root>/<cell_dir> paths
        """
        roots = [self.app_root / self.cell_dir]
        roots.extend(root / self.cell_dir for root in self.overlay_roots)

        missing = [str(root) for root in roots if not root.is_dir()]
        if missing:
            log_with_context(
                logger,
                "debug",
                "Cell roots without a cell directory",
                missing=missing,
                event_type="config_cell_roots_missing",
            )
        return roots

    @field_validator("environment", mode="before")
    @classmethod
    def normalize_environment(cls, v: str) -> str:
        """Accept environment names in any case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("cell_dir", mode="after")
    @classmethod
    def validate_cell_dir(cls, v: str) -> str:
        """Ensure cell_dir is a relative, non-blank path."""
        v = v.strip().strip("/")
        if not v:
            raise ValueError("cell_dir cannot be empty")
        return v

    @field_validator("template_extension", mode="after")
    @classmethod
    def validate_template_extension(cls, v: str) -> str:
        """Ensure the template extension starts with a dot."""
        v = v.strip()
        if not v.startswith(".") or len(v) < 2:
            raise ValueError("template_extension must look like '.html'")
        return v

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log_level names a standard logging level."""
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"log_level must be a standard logging level, got {v!r}")
        return v


# Singleton settings instance (cached for performance)
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get singleton Settings instance.

    Created on first use so the environment is read once per process.

    Returns:
        Cached Settings instance

    Raises:
        ConfigurationException: If the environment holds invalid values
    """
    global _settings_instance
    if _settings_instance is None:
        try:
            _settings_instance = Settings()
        except ValidationError as e:
            raise ConfigurationException(
                f"Invalid cell settings: {e}",
                code=ErrorCode.CONFIG_INVALID,
                details={"errors": e.errors(include_url=False, include_context=False)},
            ) from e
    return _settings_instance
