"""
Config manager - reads and manages game configuration

Defaults are a flat structure: {"key": value, ...}, overridable from a JSON file.
The engine only ever receives the immutable GameSettings.
"""
import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GameSettings(BaseModel):
    """Immutable game constants handed to the session and weather generator."""
    model_config = ConfigDict(frozen=True)

    end_game_year: int = Field(default=20, gt=0)
    starting_balance: int = Field(default=500, ge=0)
    heat_deviation: float = Field(default=0.1, gt=0)
    wetness_deviation: float = Field(default=0.1, gt=0)
    cutoff_sigmas: float = Field(default=3.0, gt=0)
    max_weather_draws: int = Field(default=10000, gt=0)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        v = v.upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"unknown log level: {v}")
        return v


class ConfigManager:
    """
    Config manager

    Merges passed-in overrides over the defaults and builds GameSettings
    """

    # Defaults (flat, one key per GameSettings field)
    DEFAULT_CONFIG = {
        "end_game_year": 20,
        "starting_balance": 500,
        "heat_deviation": 0.1,
        "wetness_deviation": 0.1,
        "cutoff_sigmas": 3.0,
        "max_weather_draws": 10000,
        "log_level": "WARNING",
    }

    _instance: Optional['ConfigManager'] = None
    _config: Dict[str, Any] = {}

    def __new__(cls):
        """Singleton"""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._config = cls.DEFAULT_CONFIG.copy()
        return cls._instance

    @classmethod
    def get_instance(cls) -> 'ConfigManager':
        """Return the config manager instance"""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def load_config(self, config: Dict[str, Any]) -> None:
        """
        Load configuration

        Args:
            config: flat config dict; unknown keys are ignored
        """
        if config:
            self._config.update({k: v for k, v in config.items() if k in self.DEFAULT_CONFIG})

    def reset(self) -> None:
        """Restore the defaults"""
        self._config = self.DEFAULT_CONFIG.copy()

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a config value

        Args:
            key: config key
            default: fallback value

        Returns:
            the config value
        """
        return self._config.get(key, default)

    def settings(self) -> GameSettings:
        """Build the immutable settings snapshot; raises pydantic ValidationError on bad values."""
        return GameSettings(**self._config)


# Global config instance
config = ConfigManager.get_instance()


def get_config() -> ConfigManager:
    """Return the config manager"""
    return config
