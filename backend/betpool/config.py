"""Configuration management using Pydantic Settings."""

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from betpool.llm_providers import OpenAIModel

logger = logging.getLogger(__name__)

YAML_SECTIONS = ("bets", "validation", "events", "telegram")


class BetsConfig(BaseModel):
    """Bet lifecycle rules."""

    allow_votes_after_finalize: bool = True


class ValidationConfig(BaseModel):
    """Proposal plausibility check against real games."""

    enabled: bool = True
    model: str = OpenAIModel.GPT_5_MINI.value
    timeout_seconds: float = 30.0


class EventsConfig(BaseModel):
    """Game lookup parameters."""

    timeout_seconds: float = 15.0


class TelegramConfig(BaseModel):
    """Telegram bot behaviour."""

    drop_pending_updates: bool = True


class Settings(BaseSettings):
    """Main configuration class."""

    # Paths
    data_dir: Path = Path("data")

    # API Keys
    openai_api_key: str = ""
    anthropic_api_key: str = ""
    rapidapi_key: str = ""
    logfire_token: str = ""

    # Telegram
    telegram_bot_token: str = ""

    # Nested configuration sections
    bets: BetsConfig = Field(default_factory=BetsConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    events: EventsConfig = Field(default_factory=EventsConfig)
    telegram: TelegramConfig = Field(default_factory=TelegramConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("data_dir", mode="after")
    @classmethod
    def resolve_data_dir(cls, v: Path) -> Path:
        """Resolve data directory to absolute path."""
        return v.resolve()

    def load_yaml_config(self, config_path: Path | None = None) -> None:
        """Load and merge YAML configuration over section defaults."""
        config_path = config_path or self.data_dir / "config.yaml"

        if not config_path.exists():
            logger.warning(
                f"Config file not found: {config_path}. "
                "Using defaults. Run 'python -m betpool init' to create it."
            )
            return

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f)

            if not yaml_config:
                logger.warning(f"Empty config file: {config_path}")
                return

            for section_name in YAML_SECTIONS:
                if section_name in yaml_config:
                    section = getattr(self, section_name)
                    section_dict = section.model_dump()
                    section_dict.update(yaml_config[section_name] or {})
                    setattr(self, section_name, section.__class__(**section_dict))

            logger.info(f"Loaded configuration from {config_path}")

        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML config: {e}")
            raise


@lru_cache()
def get_settings() -> Settings:
    """Get singleton Settings instance."""
    settings = Settings()
    settings.load_yaml_config()
    return settings
