"""Tests for cache key derivation and the on-disk result cache."""

import json
import random

import pytest

from locale_reconciler.cache import ResultCache, cache_file_name, derive_cache_key


class TestDeriveCacheKey:
    def test_deterministic(self):
        content = b'{"greeting": "Hello"}'
        assert derive_cache_key(content, ["es", "fr"]) == derive_cache_key(content, ["es", "fr"])

    def test_fixed_length_hex(self):
        key = derive_cache_key(b"{}", ["es"])
        assert len(key) == 32
        int(key, 16)

    def test_content_change(self):
        assert derive_cache_key(b'{"a": "A"}', ["es"]) != derive_cache_key(b'{"a": "B"}', ["es"])

    def test_whitespace_change(self):
        assert derive_cache_key(b'{"a": "A"}', ["es"]) != derive_cache_key(b'{"a":"A"}', ["es"])

    def test_language_membership(self):
        assert derive_cache_key(b"{}", ["es"]) != derive_cache_key(b"{}", ["es", "fr"])

    def test_language_order(self):
        assert derive_cache_key(b"{}", ["es", "fr"]) != derive_cache_key(b"{}", ["fr", "es"])

    def test_content_language_boundary(self):
        assert derive_cache_key(b"ab", ["c"]) != derive_cache_key(b"a", ["bc"])
        assert derive_cache_key(b"x", ["es,fr"]) != derive_cache_key(b"x", ["es", "fr"])

    def test_str_matches_utf8_bytes(self):
        text = '{"greeting": "Olá"}'
        assert derive_cache_key(text, ["pt"]) == derive_cache_key(text.encode("utf-8"), ["pt"])

    @pytest.mark.parametrize("seed", range(20))
    def test_byte_mutation_changes_key(self, seed):
        rng = random.Random(seed)
        content = bytearray(rng.randbytes(rng.randint(1, 200)))
        original = derive_cache_key(bytes(content), ["es"])

        index = rng.randrange(len(content))
        content[index] = (content[index] + rng.randint(1, 255)) % 256

        assert derive_cache_key(bytes(content), ["es"]) != original


class TestResultCache:
    def test_cache_file_name(self):
        assert cache_file_name("common.json", "abc123") == "common.json.abc123.json"

    def test_miss(self, tmp_path):
        assert ResultCache(tmp_path).get("common.json", "abc") is None

    def test_put_then_get(self, tmp_path):
        cache = ResultCache(tmp_path / "cache")
        translations = {"es": {"greeting": "Hola"}, "pt-BR": {"greeting": "Olá"}}

        path = cache.put("common.json", "abc", translations)

        assert path == tmp_path / "cache" / "common.json.abc.json"
        assert cache.get("common.json", "abc") == translations

    def test_last_write_wins(self, tmp_path):
        cache = ResultCache(tmp_path)
        cache.put("common.json", "abc", {"es": {"a": "1"}})
        cache.put("common.json", "abc", {"es": {"a": "2"}})
        assert cache.get("common.json", "abc") == {"es": {"a": "2"}}

    def test_corrupted_entry_is_a_miss(self, tmp_path, capsys):
        cache = ResultCache(tmp_path)
        cache.path_for("common.json", "abc").write_text("{not json", encoding="utf-8")

        assert cache.get("common.json", "abc") is None
        assert "Cache corrupted" in capsys.readouterr().out

    def test_non_object_entry_is_a_miss(self, tmp_path):
        cache = ResultCache(tmp_path)
        cache.path_for("common.json", "abc").write_text(json.dumps(["es"]), encoding="utf-8")

        assert cache.get("common.json", "abc") is None
