"""Configuration for a translation run."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

DEFAULT_TRANSLATION_MODEL = "gpt-5-mini"
DEFAULT_MAX_CONCURRENT_REQUESTS = 10
DEFAULT_CACHE_DIR = Path(".cache") / "locale-reconciler"


class ConfigurationError(ValueError):
    """Raised when a translation run is configured incorrectly."""


@dataclass(frozen=True)
class TranslationConfig:
    """
    Settings for one translation run.

    Built once (directly or with ``from_env``) and passed to every step; nothing
    reads configuration from module-level state.
    """

    source_dir: Path = Path("locales/en")
    output_dir: Path = Path("locales")
    target_languages: tuple[str, ...] = ()
    source_language: str = "en"
    cache: bool = True
    cache_dir: Path = DEFAULT_CACHE_DIR
    fallback_to_source: bool = True
    regional_fallback: bool = True
    model: str = DEFAULT_TRANSLATION_MODEL
    max_concurrent_requests: int = DEFAULT_MAX_CONCURRENT_REQUESTS
    context_file: Path | None = None
    api_key: str | None = field(default=None, repr=False)

    def __post_init__(self):
        # Accept any iterable / str path from callers, store normalized values
        object.__setattr__(self, "target_languages", tuple(self.target_languages))
        object.__setattr__(self, "source_dir", Path(self.source_dir))
        object.__setattr__(self, "output_dir", Path(self.output_dir))
        object.__setattr__(self, "cache_dir", Path(self.cache_dir))
        if self.context_file is not None:
            object.__setattr__(self, "context_file", Path(self.context_file))

    @classmethod
    def from_env(cls, **overrides) -> TranslationConfig:
        """
        Build a configuration from environment variables (and a .env file).

        Recognized variables:
            OPENAI_API_KEY: API key passed to the translation provider
            OPENAI_TRANSLATION_MODEL: Model used for translations
            MAX_CONCURRENT_REQUESTS: Parallel provider requests per content unit
            TRANSLATION_TARGET_LANGUAGES: Comma separated target language codes

        Keyword arguments override the environment.
        """
        # Load environment variables from .env file in current working directory
        load_dotenv(find_dotenv(usecwd=True))

        values = {
            "api_key": os.environ.get("OPENAI_API_KEY") or None,
            "model": os.environ.get("OPENAI_TRANSLATION_MODEL", DEFAULT_TRANSLATION_MODEL),
            "max_concurrent_requests": int(
                os.environ.get("MAX_CONCURRENT_REQUESTS", str(DEFAULT_MAX_CONCURRENT_REQUESTS))
            ),
        }

        env_targets = os.environ.get("TRANSLATION_TARGET_LANGUAGES", "")
        languages = [code.strip() for code in env_targets.split(",") if code.strip()]
        if languages:
            values["target_languages"] = tuple(languages)

        values.update(overrides)
        return cls(**values)

    def validate(self) -> None:
        """
        Check the configuration before any work is done.

        Raises:
            ConfigurationError: If no target languages are configured, or a
                numeric setting is out of range
        """
        if not self.target_languages:
            raise ConfigurationError("target_languages is required")
        if self.max_concurrent_requests < 1:
            raise ConfigurationError(
                f"max_concurrent_requests must be at least 1, got {self.max_concurrent_requests}"
            )
