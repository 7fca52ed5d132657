"""Configuration management for whatwasthat."""

import os
import re
from pathlib import Path
from typing import Any, List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_FALLBACK_MODELS = ["gpt-5.0-mini", "gpt-4o-mini"]
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_MODEL_BASE_URL = "https://api.openai.com/v1"


class TMDBConfig(BaseModel):
    """TMDB API configuration."""

    api_key: Optional[str] = Field(default=None, description="TMDB API key")
    base_url: str = Field(default="https://api.themoviedb.org/3", description="TMDB API base URL")
    image_base_url: str = Field(
        default="https://image.tmdb.org/t/p", description="TMDB image CDN base URL"
    )
    timeout_seconds: float = Field(default=10.0, gt=0, description="Per-request timeout")
    language: Optional[str] = Field(default=None, description="Optional TMDB language code")


class ModelConfig(BaseModel):
    """Language model configuration."""

    api_key: Optional[str] = Field(default=None, description="Model provider API key")
    base_url: str = Field(default=DEFAULT_MODEL_BASE_URL, description="Responses API base URL")
    preferred: str = Field(default=DEFAULT_MODEL, description="Model tried first")
    fallbacks: List[str] = Field(
        default_factory=lambda: list(DEFAULT_FALLBACK_MODELS),
        description="Models tried in order when the preferred one is unavailable",
    )
    timeout_seconds: float = Field(default=30.0, gt=0, description="Per-request timeout")

    @property
    def models_to_try(self) -> List[str]:
        """Preferred model followed by the remaining fallbacks, without duplicates."""
        ordered = [self.preferred]
        for model in self.fallbacks:
            if model not in ordered:
                ordered.append(model)
        return ordered

    @property
    def base_url_overridden(self) -> bool:
        """Whether a base URL other than the public API was configured."""
        return self.base_url.rstrip("/") != DEFAULT_MODEL_BASE_URL

    @property
    def preferred_overridden(self) -> bool:
        """Whether a preferred model other than the default was configured."""
        return self.preferred != DEFAULT_MODEL


class APIConfig(BaseModel):
    """API server configuration."""

    host: str = Field(default="0.0.0.0", description="API host")
    port: int = Field(default=3000, description="API port")
    expose_errors: bool = Field(
        default=True, description="Include internal error messages in 500 responses"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    format: str = Field(default="json", description="Log format (json or text)")
    level: str = Field(default="info", description="Log level")
    output: Optional[str] = Field(default=None, description="Optional log file path")

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate log format."""
        if v not in ("json", "text"):
            raise ValueError("Log format must be 'json' or 'text'")
        return v

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        if v.lower() not in ("debug", "info", "warning", "error", "critical"):
            raise ValueError("Invalid log level")
        return v.lower()


class Config(BaseModel):
    """Main configuration model."""

    tmdb: TMDBConfig = Field(default_factory=TMDBConfig, description="TMDB configuration")
    model: ModelConfig = Field(default_factory=ModelConfig, description="Model configuration")
    api: APIConfig = Field(default_factory=APIConfig, description="API configuration")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging configuration")

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path) as f:
            raw_config = yaml.safe_load(f)

        if raw_config is None:
            raw_config = {}

        raw_config = cls._substitute_env_vars(raw_config)

        return cls(**raw_config)

    @staticmethod
    def _substitute_env_vars(obj: Any) -> Any:
        """Recursively substitute environment variables in configuration.

        Replaces ${VAR_NAME} with os.environ['VAR_NAME'].
        """
        if isinstance(obj, dict):
            return {key: Config._substitute_env_vars(value) for key, value in obj.items()}
        elif isinstance(obj, list):
            return [Config._substitute_env_vars(item) for item in obj]
        elif isinstance(obj, str):
            pattern = r"\$\{([^}]+)\}"

            def replace_var(match):
                var_name = match.group(1)
                value = os.environ.get(var_name)
                if value is None:
                    raise ValueError(
                        f"Environment variable '{var_name}' not found "
                        f"(referenced in configuration)"
                    )
                return value

            return re.sub(pattern, replace_var, obj)
        else:
            return obj

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "Config":
        """Create configuration from well-known environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Config instance
        """
        env = os.environ if environ is None else environ

        model = ModelConfig(api_key=env.get("OPENAI_API_KEY"))
        if env.get("OPENAI_BASE_URL"):
            model.base_url = env["OPENAI_BASE_URL"]
        if env.get("OPENAI_MODEL"):
            model.preferred = env["OPENAI_MODEL"]

        api = APIConfig()
        if env.get("PORT"):
            api.port = int(env["PORT"])

        logging_config = LoggingConfig(
            format=env.get("LOG_FORMAT", "json"),
            level=env.get("LOG_LEVEL", "info"),
        )

        return cls(
            tmdb=TMDBConfig(api_key=env.get("TMDB_API_KEY")),
            model=model,
            api=api,
            logging=logging_config,
        )


def load_config(path: Optional[str | Path] = None) -> Config:
    """Load configuration from file or from the environment.

    Args:
        path: Optional path to configuration file. If None, reads environment variables.

    Returns:
        Config instance
    """
    if path is None:
        return Config.from_env()

    return Config.from_yaml(path)
