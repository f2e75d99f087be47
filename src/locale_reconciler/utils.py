"""Utility functions for locale-reconciler."""

from __future__ import annotations

import json
from pathlib import Path

import pycountry

from .config import ConfigurationError
from .languages import base_language, is_regional


def get_language_name(code: str) -> str:
    """
    Get the full language name from a language code.

    Args:
        code: ISO 639 language code, optionally region-qualified
            (e.g., 'de', 'fr', 'pt-BR')

    Returns:
        Full language name (e.g., 'German', 'French', 'Portuguese (Brazil)')

    Raises:
        ValueError: If the language code is not recognized
    """
    special_cases = {
        "zh": "Chinese",
        "zh-cn": "Chinese (Simplified)",
        "zh-tw": "Chinese (Traditional)",
        "zh-hans": "Chinese (Simplified)",
        "zh-hant": "Chinese (Traditional)",
    }

    code_lower = code.lower()
    if code_lower in special_cases:
        return special_cases[code_lower]

    if is_regional(code_lower):
        name = get_language_name(base_language(code_lower))
        region = code_lower.split("-", 1)[1]
        country = pycountry.countries.get(alpha_2=region.upper())
        if country:
            return f"{name} ({country.name})"
        return f"{name} ({region.upper()})"

    language = pycountry.languages.get(alpha_2=code_lower)
    if language:
        return language.name

    # Try alpha_3 code as fallback
    language = pycountry.languages.get(alpha_3=code_lower)
    if language:
        return language.name

    raise ValueError(f"Unknown language code: {code}")


def load_context(path: Path | str | None) -> str:
    """
    Build the prompt context block from a context file.

    The file is a JSON object with optional ``instructions`` (a string) and
    ``glossary`` (term -> definition) entries. Terms that must stay
    untranslated can be given as an empty definition.

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigurationError: If the file is not a JSON object, or an entry has the wrong type
    """
    if path is None:
        return ""

    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Context file not found: {path}")

    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ConfigurationError(f"Context file must contain a JSON object: {path}")

    instructions = data.get("instructions", "")
    glossary = data.get("glossary", {})
    if not isinstance(instructions, str):
        raise ConfigurationError(f"'instructions' in {path} must be a string")
    if not isinstance(glossary, dict):
        raise ConfigurationError(f"'glossary' in {path} must be an object")

    parts = []
    if instructions.strip():
        parts.append("**Contextual Information**:")
        parts.append(instructions.strip())

    if glossary:
        parts.append("\n**Glossary**:")
        for term, definition in glossary.items():
            if definition:
                parts.append(f'- "{term}" refers to {definition}')
            else:
                parts.append(f'- "{term}" must not be translated')

    return "\n".join(parts)
