"""
Deployment settings.

Layered with OmegaConf, later layers winning:

    built-in defaults -> YAML config file (optional) -> environment (.env) -> explicit overrides

Environment variables:
    ANALYZE_ENDPOINT     Analysis endpoint URL
    REQUEST_STRATEGY     "multipart" (server extracts) or "json" (client extracts)
    REQUEST_TIMEOUT      Seconds before the endpoint counts as unreachable
    LOGS_PATH            Root directory for session logs
    SESSION_EVENTS_FILE  JSON Lines file for session events (unset = disabled)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import yaml
from dotenv import load_dotenv
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from resume_improver.contexts.analysis.models import RequestStrategy
from resume_improver.exceptions import ConfigurationError

load_dotenv()

ENV_VARS = {
    "endpoint": "ANALYZE_ENDPOINT",
    "strategy": "REQUEST_STRATEGY",
    "timeout": "REQUEST_TIMEOUT",
    "logs_path": "LOGS_PATH",
    "events_file": "SESSION_EVENTS_FILE",
}


@dataclass
class Settings:
    endpoint: str = "http://localhost:8080/api/analyze"
    strategy: str = RequestStrategy.MULTIPART.value
    timeout: float = 120.0
    logs_path: str = "outs/logs"
    events_file: Optional[str] = None

    @property
    def request_strategy(self) -> RequestStrategy:
        return RequestStrategy(self.strategy)

    @property
    def events_path(self) -> Optional[Path]:
        return Path(self.events_file) if self.events_file else None


def _plain(value):
    """Reduce enums and paths to the primitives OmegaConf stores."""
    if isinstance(value, RequestStrategy):
        return value.value
    if isinstance(value, Path):
        return str(value)
    return value


def _validate(settings: Settings) -> Settings:
    settings.strategy = settings.strategy.strip().lower()
    if settings.strategy not in {s.value for s in RequestStrategy}:
        raise ConfigurationError(
            f"Unknown request strategy: {settings.strategy!r}. Use 'multipart' or 'json'"
        )
    if not settings.endpoint.startswith(("http://", "https://")):
        raise ConfigurationError(f"Endpoint must be an http(s) URL: {settings.endpoint!r}")
    if settings.timeout <= 0:
        raise ConfigurationError(f"Timeout must be positive, got {settings.timeout}")
    return settings


def load_settings(config_file: Optional[Union[str, Path]] = None, **overrides) -> Settings:
    """
    Resolve settings from defaults, config file, environment and overrides.

    Args:
        config_file: Optional YAML file with any subset of Settings fields
        **overrides: Explicit values (None values are ignored), e.g. from CLI options

    Returns:
        Validated Settings

    Raises:
        ConfigurationError: Unreadable config file, unknown keys or invalid values
    """
    env_values = {key: os.getenv(var) for key, var in ENV_VARS.items() if os.getenv(var)}
    explicit = {
        key: _plain(value) for key, value in overrides.items() if value is not None
    }

    try:
        layers = [OmegaConf.structured(Settings)]
        if config_file is not None:
            config_path = Path(config_file)
            if not config_path.exists():
                raise ConfigurationError(f"Config file not found: {config_path}")
            layers.append(OmegaConf.load(config_path))
        layers.append(OmegaConf.create(env_values))
        layers.append(OmegaConf.create(explicit))

        merged = OmegaConf.merge(*layers)
        settings = OmegaConf.to_object(merged)
    except (OmegaConfBaseException, yaml.YAMLError) as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e

    return _validate(settings)
