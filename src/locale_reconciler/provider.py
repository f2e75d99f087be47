"""OpenAI-backed translation provider."""

from __future__ import annotations

import asyncio
import json
from typing import Sequence

from openai import AsyncOpenAI

from .config import ConfigurationError, TranslationConfig
from .utils import get_language_name, load_context


class ProviderError(Exception):
    """Raised when the provider could not translate into any language."""


def generate_schema(value):
    """
    Generate a JSON schema from a Python value structure.

    This allows Structured Outputs to guarantee the response matches the input structure.
    """
    if isinstance(value, str):
        return {"type": "string"}
    elif isinstance(value, dict):
        return {
            "type": "object",
            "properties": {k: generate_schema(v) for k, v in value.items()},
            "required": list(value.keys()),
            "additionalProperties": False,
        }
    elif isinstance(value, list):
        if len(value) > 0:
            return {"type": "array", "items": generate_schema(value[0])}
        return {"type": "array", "items": {"type": "string"}}
    elif isinstance(value, bool):
        return {"type": "boolean"}
    elif isinstance(value, int):
        return {"type": "integer"}
    elif isinstance(value, float):
        return {"type": "number"}
    elif value is None:
        return {"type": ["string", "null"]}
    else:
        return {"type": "string"}


class OpenAITranslationProvider:
    """
    Translates a locale tree into several languages with the Chat Completions API.

    One request is made per target language; requests for the same tree run
    concurrently, bounded by ``max_concurrent_requests``.
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str,
        context: str = "",
        max_concurrent_requests: int = 10,
    ):
        self.client = client
        self.model = model
        self.context = context
        self.max_concurrent_requests = max_concurrent_requests

    @classmethod
    def from_config(cls, config: TranslationConfig) -> OpenAITranslationProvider:
        if not config.api_key:
            raise ConfigurationError(
                "OPENAI_API_KEY environment variable not set. "
                "Set it in your environment or in a .env file."
            )
        return cls(
            client=AsyncOpenAI(api_key=config.api_key),
            model=config.model,
            context=load_context(config.context_file),
            max_concurrent_requests=config.max_concurrent_requests,
        )

    def _build_messages(self, tree: dict, source_name: str, target_name: str) -> list[dict]:
        source_text = json.dumps(tree, ensure_ascii=False)
        prompt = (
            f"Translate the following JSON containing {source_name} text to {target_name}:\n"
            f"```\n{source_text}\n```\n"
        )

        system_content = f"""You are a helpful assistant that translates {source_name} to other languages. The content to translate is provided as JSON. You provide the output as JSON matching the exact same structure.

Rules:
- Maintain all keys from the input exactly as they are
- Any values that begin with '@:' should remain unchanged (these are references)
- When you encounter values enclosed in braces like '{{variable_name}}', keep the variable name unchanged. The placeholder position can change to fit the target language grammar.
- Translate all user-facing text naturally for the target language

{self.context}"""

        return [
            {"role": "system", "content": system_content},
            {"role": "user", "content": prompt},
        ]

    async def translate_language(self, tree: dict, source_language: str, target_language: str) -> dict:
        """
        Translate ``tree`` into one language.

        Raises:
            ValueError: If the model refused, or the response was truncated, empty or not an object
            OpenAIError: On transport or API errors
        """
        messages = self._build_messages(
            tree,
            get_language_name(source_language),
            get_language_name(target_language),
        )

        response = await self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": "translation_output",
                    "schema": generate_schema(tree),
                    "strict": True,
                },
            },
        )

        if not response.choices:
            raise ValueError("Response contained no choices")

        message = response.choices[0].message
        if getattr(message, "refusal", None):
            raise ValueError(f"Model refused to translate: {message.refusal}")

        if response.choices[0].finish_reason == "length":
            raise ValueError("Response was truncated due to length limit")

        if not message.content:
            raise ValueError("Response contained no content")

        parsed = json.loads(message.content)
        if not isinstance(parsed, dict):
            raise ValueError("Response is not a JSON object")
        return parsed

    async def translate(
        self,
        tree: dict,
        source_language: str,
        target_languages: Sequence[str],
    ) -> dict[str, dict]:
        """
        Translate ``tree`` into every language of ``target_languages``.

        Languages whose request fails are left out of the result, so callers get
        a partial mapping rather than an exception.

        Returns:
            Mapping of language code -> translated tree

        Raises:
            ProviderError: If no language could be translated
        """
        semaphore = asyncio.Semaphore(self.max_concurrent_requests)

        async def _translate_one(lang: str) -> dict:
            async with semaphore:
                return await self.translate_language(tree, source_language, lang)

        results = await asyncio.gather(
            *(_translate_one(lang) for lang in target_languages),
            return_exceptions=True,
        )

        translations = {}
        errors = []
        for lang, result in zip(target_languages, results):
            if isinstance(result, Exception):
                print(f"      Translation to {lang} failed: {result}")
                errors.append(f"{lang}: {result}")
            elif isinstance(result, BaseException):
                raise result
            else:
                translations[lang] = result

        if target_languages and not translations:
            raise ProviderError("All translations failed - " + "; ".join(errors))

        return translations
