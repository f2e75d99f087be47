import json
from types import SimpleNamespace

import pytest


class FakeProvider:
    """Provider double that returns canned results and records its calls."""

    def __init__(self, results=None, error=None):
        self.results = results or {}
        self.error = error
        self.calls = []

    async def translate(self, tree, source_language, target_languages):
        self.calls.append((tree, source_language, list(target_languages)))
        if self.error is not None:
            raise self.error
        return {lang: self.results[lang] for lang in target_languages if lang in self.results}


def make_completion(content, finish_reason="stop", refusal=None):
    """Build an object shaped like an OpenAI chat completion response."""
    message = SimpleNamespace(content=content, refusal=refusal)
    return SimpleNamespace(choices=[SimpleNamespace(message=message, finish_reason=finish_reason)])


@pytest.fixture
def source_tree():
    return {
        "greeting": "Hello",
        "farewell": "Goodbye",
        "nav": {"home": "Home", "about": "About"},
    }


@pytest.fixture
def source_dir(tmp_path, source_tree):
    directory = tmp_path / "locales" / "en"
    directory.mkdir(parents=True)
    (directory / "common.json").write_text(json.dumps(source_tree), encoding="utf-8")
    return directory
