"""Build-step orchestration: cache lookup, translation, reconciliation and output."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from .cache import ResultCache, derive_cache_key
from .config import TranslationConfig
from .languages import expand_languages
from .provider import OpenAITranslationProvider
from .reconciler import apply_fallbacks, describe_fallbacks, get_fallback_info


def discover_source_files(source_dir: Path) -> list[Path]:
    """Return the JSON files directly inside ``source_dir``, sorted by name."""
    return sorted(path for path in Path(source_dir).glob("*.json") if path.is_file())


async def translate_content_unit(
    config: TranslationConfig,
    provider,
    unit_name: str,
    raw_source: bytes,
    cache: ResultCache | None = None,
) -> dict:
    """
    Produce the final translation set for one content unit.

    A cached result is returned when one exists for the same source bytes and
    target languages. Otherwise the provider is called once and its output is
    reconciled against the source; a provider failure is treated as if every
    language came back empty.

    Args:
        config: Run configuration
        provider: Object with an async ``translate(tree, source_language, target_languages)``
        unit_name: Name of the content unit (the source file name)
        raw_source: Source file content exactly as read
        cache: Result cache, or None to always translate

    Returns:
        Translation set: language code -> tree, plus the fallback record if any

    Raises:
        json.JSONDecodeError: If ``raw_source`` is not valid JSON
        TypeError: If the source content is not a JSON object
    """
    source = json.loads(raw_source)
    if not isinstance(source, dict):
        raise TypeError(f"{unit_name}: source content must be a JSON object")

    cache_key = derive_cache_key(raw_source, config.target_languages)

    if cache is not None:
        cached = cache.get(unit_name, cache_key)
        if cached is not None:
            print(f"   {unit_name}: Using cached translations")
            return cached

    expansion = expand_languages(config.target_languages, config.regional_fallback)

    print(f"   {unit_name}: Translating to {len(config.target_languages)} language(s)...")

    provider_failed = False
    try:
        raw = await provider.translate(
            source, config.source_language, list(expansion.provider_targets)
        )
    except Exception as e:
        print(f"   {unit_name}: Translation failed - {e}")
        if config.fallback_to_source:
            print("      Using source content as fallback for all languages")
        provider_failed = True
        raw = {}

    translations = apply_fallbacks(
        raw,
        source,
        config.target_languages,
        config.fallback_to_source,
        config.regional_fallback,
        expansion.regional_map,
    )

    if cache is not None and not provider_failed:
        cache.put(unit_name, cache_key, translations)

    if not provider_failed:
        print(f"   {unit_name}: Translation complete")
        info = get_fallback_info(translations)
        if info is not None:
            for line in describe_fallbacks(info):
                print(f"      {line}")

    return translations


def write_translations(
    output_dir: Path,
    unit_name: str,
    translations: dict,
    target_languages: Sequence[str],
) -> list[Path]:
    """
    Write each requested language's tree to ``<output_dir>/<lang>/<unit_name>``.

    Languages missing from ``translations`` are skipped with a warning.

    Returns:
        Paths of the files written
    """
    written = []
    for lang in target_languages:
        if lang not in translations:
            print(f"   {unit_name}: No translation for {lang}")
            continue

        lang_dir = Path(output_dir) / lang
        lang_dir.mkdir(parents=True, exist_ok=True)

        output_file = lang_dir / unit_name
        with open(output_file, "w", encoding="utf-8") as f:
            json.dump(translations[lang], f, ensure_ascii=False, indent=2)
        written.append(output_file)

    return written


async def translate_locale_directory(config: TranslationConfig, provider=None) -> dict[str, list[Path]]:
    """
    Translate every JSON file in ``config.source_dir`` and write the results.

    Files are processed one after another. A file that is not valid JSON is
    reported and skipped.

    Args:
        config: Run configuration
        provider: Translation provider; an OpenAI provider is built from
            ``config`` when omitted

    Returns:
        Mapping of source file name -> output files written

    Raises:
        ConfigurationError: If the configuration is invalid
    """
    config.validate()

    source_dir = config.source_dir
    print("Starting translation process...")
    print(f"   Source: {source_dir}")
    print(f"   Target languages: {', '.join(config.target_languages)}")

    if not source_dir.is_dir():
        print(f"Warning: Source directory not found: {source_dir}")
        return {}

    source_files = discover_source_files(source_dir)
    if not source_files:
        print(f"Warning: No JSON files found in {source_dir}")
        return {}

    print(f"   Found {len(source_files)} source file(s)")

    if provider is None:
        provider = OpenAITranslationProvider.from_config(config)

    cache = ResultCache(config.cache_dir) if config.cache else None

    written = {}
    for source_file in source_files:
        unit_name = source_file.name
        raw_source = source_file.read_bytes()

        try:
            translations = await translate_content_unit(
                config, provider, unit_name, raw_source, cache
            )
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            print(f"Error parsing {unit_name}: {e}")
            continue

        written[unit_name] = write_translations(
            config.output_dir, unit_name, translations, config.target_languages
        )

    print("Translation complete!")
    return written
