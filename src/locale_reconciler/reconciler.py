"""Fallback reconciliation of provider results against the source content."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Sequence

from .tree import MISSING, find_missing_keys, get_nested_value, set_nested_value

# Reserved key of the fallback record inside a translation set
FALLBACK_INFO_KEY = "fallbackInfo"


@dataclass
class FallbackInfo:
    """Record of every substitution made while reconciling one content unit."""

    used: bool = False
    languages_fallback_to_source: list[str] = field(default_factory=list)
    regional_fallbacks: dict[str, str] = field(default_factory=dict)
    keys_fallback: dict[str, list[str]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "used": self.used,
            "languagesFallbackToSource": list(self.languages_fallback_to_source),
            "regionalFallbacks": dict(self.regional_fallbacks),
            "keysFallback": {lang: list(keys) for lang, keys in self.keys_fallback.items()},
        }

    @classmethod
    def from_dict(cls, data: dict) -> FallbackInfo:
        return cls(
            used=bool(data.get("used", False)),
            languages_fallback_to_source=list(data.get("languagesFallbackToSource", [])),
            regional_fallbacks=dict(data.get("regionalFallbacks", {})),
            keys_fallback={
                lang: list(keys) for lang, keys in data.get("keysFallback", {}).items()
            },
        )


def apply_fallbacks(
    raw: dict,
    source: dict,
    requested_targets: Sequence[str],
    fallback_to_source: bool,
    regional_fallback: bool,
    regional_map: dict[str, str],
) -> dict:
    """
    Merge raw provider results with the source content.

    For each requested language:

    1. If the provider returned nothing (or an empty tree) for it, use the
       translation of its base language when regional fallback applies,
       otherwise a copy of the source when ``fallback_to_source`` is set,
       otherwise leave the language out.
    2. If the translation exists but lacks keys, fill each missing key from the
       base language translation when available, else from the source.

    Neither ``raw`` nor ``source`` is modified. Only the requested languages
    are included in the result; when any substitution happened the
    ``FallbackInfo`` is attached under ``FALLBACK_INFO_KEY``.

    Args:
        raw: Provider output, language code -> tree
        source: Source-language tree
        requested_targets: Languages the caller asked for
        fallback_to_source: Fill gaps with source content
        regional_fallback: Fill regional variants from their base language first
        regional_map: Region-qualified code -> base language

    Returns:
        Reconciled translation set

    Raises:
        TypeError: If ``source`` or a non-empty translation is not a dict
    """
    if not isinstance(source, dict):
        raise TypeError(f"Source content must be a dict, got {type(source).__name__}")

    raw = copy.deepcopy(raw)
    info = FallbackInfo()
    result = {}

    for lang in requested_targets:
        translation = raw.get(lang)
        base_lang = regional_map.get(lang) if regional_fallback else None
        base_translation = raw.get(base_lang) if base_lang else None

        # Entire language missing
        if not translation:
            if isinstance(base_translation, dict) and base_translation:
                result[lang] = copy.deepcopy(base_translation)
                info.used = True
                info.regional_fallbacks[lang] = base_lang
            elif fallback_to_source:
                result[lang] = copy.deepcopy(source)
                info.used = True
                info.languages_fallback_to_source.append(lang)
            continue

        if not isinstance(translation, dict):
            raise TypeError(
                f"Translation for '{lang}' must be a dict, got {type(translation).__name__}"
            )

        result[lang] = translation

        # Individual keys missing
        if not fallback_to_source:
            continue

        missing_keys = find_missing_keys(source, translation)
        if not missing_keys:
            continue

        info.used = True
        info.keys_fallback[lang] = missing_keys

        for key in missing_keys:
            value = MISSING
            if isinstance(base_translation, dict):
                value = get_nested_value(base_translation, key)
            if value is MISSING:
                value = get_nested_value(source, key)
            if value is not MISSING:
                set_nested_value(translation, key, copy.deepcopy(value))

    if info.used:
        result[FALLBACK_INFO_KEY] = info.to_dict()

    return result


def get_fallback_info(translations: dict) -> FallbackInfo | None:
    """Return the fallback record attached to a translation set, if any."""
    data = translations.get(FALLBACK_INFO_KEY)
    if not isinstance(data, dict):
        return None
    return FallbackInfo.from_dict(data)


def describe_fallbacks(info: FallbackInfo) -> list[str]:
    """Render a fallback record as human-readable log lines."""
    lines = []
    for lang, base_lang in info.regional_fallbacks.items():
        lines.append(f"{lang} used {base_lang} translation (regional fallback)")
    for lang in info.languages_fallback_to_source:
        lines.append(f"{lang} used source content (fallback)")
    for lang, keys in info.keys_fallback.items():
        lines.append(f"{lang} filled {len(keys)} missing key(s): {', '.join(keys)}")
    return lines
