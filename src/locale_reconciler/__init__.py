"""locale-reconciler: Translate JSON locale content and fill translation gaps with fallbacks."""

__version__ = "0.1.0"

from .cache import ResultCache, derive_cache_key
from .config import ConfigurationError, TranslationConfig
from .languages import ExpansionResult, expand_languages
from .provider import OpenAITranslationProvider, ProviderError
from .reconciler import FALLBACK_INFO_KEY, FallbackInfo, apply_fallbacks
from .translator import translate_content_unit, translate_locale_directory, write_translations
from .tree import MISSING, find_missing_keys, get_nested_value, set_nested_value

__all__ = [
    "__version__",
    "ConfigurationError",
    "ExpansionResult",
    "FALLBACK_INFO_KEY",
    "FallbackInfo",
    "MISSING",
    "OpenAITranslationProvider",
    "ProviderError",
    "ResultCache",
    "TranslationConfig",
    "apply_fallbacks",
    "derive_cache_key",
    "expand_languages",
    "find_missing_keys",
    "get_nested_value",
    "set_nested_value",
    "translate_content_unit",
    "translate_locale_directory",
    "write_translations",
]
