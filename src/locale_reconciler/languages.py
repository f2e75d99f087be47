"""Expansion of requested target languages into provider languages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence


@dataclass(frozen=True)
class ExpansionResult:
    """
    Languages to request from the provider for one translation request.

    Attributes:
        requested_targets: The languages the caller asked for
        provider_targets: Ordered, duplicate-free languages to send to the provider
        regional_map: Region-qualified code -> base language (e.g. 'pt-BR' -> 'pt')
    """

    requested_targets: frozenset[str]
    provider_targets: tuple[str, ...]
    regional_map: dict[str, str] = field(default_factory=dict)


def is_regional(code: str) -> bool:
    """Return True for region-qualified codes such as 'pt-BR'."""
    return "-" in code


def base_language(code: str) -> str:
    """Return the base language of a code ('pt-BR' -> 'pt', 'es' -> 'es')."""
    return code.split("-", 1)[0]


def expand_languages(target_languages: Sequence[str], regional_fallback: bool) -> ExpansionResult:
    """
    Expand target languages with the base languages regional variants fall back to.

    With regional fallback enabled, every region-qualified code is mapped to its
    base language, and the base is added to the provider languages (right before
    the first variant that needs it) unless it was requested already.

    Args:
        target_languages: Requested language codes, in order
        regional_fallback: Whether regional variants fall back to their base language

    Returns:
        ExpansionResult with the provider languages and the regional map
    """
    regional_map = {}
    provider_targets = []

    for lang in target_languages:
        if regional_fallback and is_regional(lang):
            base = base_language(lang)
            regional_map[lang] = base

            if base not in provider_targets and base not in target_languages:
                provider_targets.append(base)

        if lang not in provider_targets:
            provider_targets.append(lang)

    return ExpansionResult(
        requested_targets=frozenset(target_languages),
        provider_targets=tuple(provider_targets),
        regional_map=regional_map,
    )
