"""YAML configuration loader for the Live Voice Translator."""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
import logging

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)


class AudioSettings(BaseModel):
    sample_rate: int = 16000
    chunk_size: int = 1024
    channels: int = 1


class GoogleCloudSettings(BaseModel):
    credentials_path: Optional[str] = None
    language: str = "en-US"
    use_enhanced_model: bool = True
    enable_automatic_punctuation: bool = True


class TranslationSettings(BaseModel):
    endpoint: str = "https://libretranslate.com/translate"
    source_language: str = "en"
    default_target_language: str = "es"
    timeout_seconds: float = 15.0
    api_key: Optional[str] = None


class SynthesisSettings(BaseModel):
    rate: int = 170
    volume: float = Field(default=1.0, ge=0.0, le=1.0)


class LoggingSettings(BaseModel):
    level: str = "INFO"
    file_path: str = "data/logs/livetranslator.log"
    console_output: bool = True


class Settings(BaseModel):
    """Full configuration tree with defaults for every key."""
    audio: AudioSettings = Field(default_factory=AudioSettings)
    google_cloud: GoogleCloudSettings = Field(default_factory=GoogleCloudSettings)
    translation: TranslationSettings = Field(default_factory=TranslationSettings)
    synthesis: SynthesisSettings = Field(default_factory=SynthesisSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


class LiveTranslatorConfig:
    """Live translator configuration loader."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to YAML config file. If None, built-in defaults are used.
        """
        self.config_file = Path(config_path) if config_path else None

        if self.config_file is None:
            logger.info("No configuration file given, using defaults")
            self.config = Settings().model_dump()
            return

        if not self.config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_file}")

        logger.info(f"Loading configuration from: {self.config_file}")
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load, validate and parse YAML configuration file."""
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}") from e

        if not raw:
            raise ValueError("Configuration file is empty")

        try:
            config = Settings.model_validate(raw).model_dump()
        except ValidationError as e:
            raise ValueError(f"Invalid configuration: {e}") from e

        self._resolve_paths(config)

        logger.info("Configuration loaded successfully")
        return config

    def _resolve_paths(self, config: Dict[str, Any]) -> None:
        """Resolve relative paths in configuration relative to config file location."""
        config_dir = self.config_file.parent

        creds_path = config['google_cloud'].get('credentials_path')
        if creds_path and not os.path.isabs(creds_path):
            config['google_cloud']['credentials_path'] = str(config_dir / creds_path)

        log_path = config['logging'].get('file_path')
        if log_path and not os.path.isabs(log_path):
            config['logging']['file_path'] = str(config_dir / log_path)

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation (e.g., 'translation.endpoint').

        Args:
            key_path: Dot-separated key path
            default: Default value if key not found or unset

        Returns:
            Configuration value or default
        """
        keys = key_path.split('.')
        value = self.config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return default if value is None else value

    def set(self, key_path: str, value: Any) -> None:
        """Set configuration value using dot notation.

        Args:
            key_path: Dot-separated path to config value (e.g., 'translation.endpoint')
            value: Value to set
        """
        keys = key_path.split('.')
        config_dict = self.config

        for key in keys[:-1]:
            if key not in config_dict:
                config_dict[key] = {}
            config_dict = config_dict[key]

        config_dict[keys[-1]] = value
        logger.debug(f"Configuration key '{key_path}' set to: {value}")

    def get_google_credentials_path(self) -> Optional[str]:
        """Get the Google credentials path if configured and present on disk."""
        creds_path = self.get('google_cloud.credentials_path')
        if not creds_path:
            return None

        creds_file = Path(creds_path)
        if not creds_file.exists():
            logger.warning(f"Google credentials file not found: {creds_path}")
            return None

        return str(creds_file.absolute())
