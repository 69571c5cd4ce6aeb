# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
import threading

import pytest

from godbolt.cache import CacheEntry, MetadataCache
from godbolt.loader import load_cache
from godbolt.model import Compiler, Formatter, Language
from godbolt.transport import TransportError


def _language(language_id: str, default_compiler: str = "", name: str = "") -> Language:
    return Language(
        id=language_id,
        name=name or language_id,
        extensions=(f".{language_id}",),
        monaco=language_id,
        default_compiler=default_compiler,
    )


def _compiler(compiler_id: str, lang: str) -> Compiler:
    return Compiler(id=compiler_id, name=compiler_id.upper(), lang=lang, alias=())


def _example_cache() -> MetadataCache:
    return MetadataCache.build(
        languages=[_language("c++", default_compiler="gcc1")],
        compilers=[_compiler("gcc1", "c++"), _compiler("clang1", "c++")],
    )


def test_cache_groups_compilers_under_matching_language_in_listing_order() -> None:
    cache = MetadataCache.build(
        languages=[_language("c"), _language("c++"), _language("rust")],
        compilers=[
            _compiler("clang1", "c++"),
            _compiler("cg1", "c"),
            _compiler("gcc1", "c++"),
            _compiler("orphan", "fortran"),
            _compiler("rustc1", "rust"),
        ],
    )

    grouped = {
        entry.language.id: [compiler.id for compiler in entry.compilers]
        for entry in cache.entries
    }
    assert grouped == {"c": ["cg1"], "c++": ["clang1", "gcc1"], "rust": ["rustc1"]}
    assert [language.id for language in cache.languages()] == ["c", "c++", "rust"]


def test_cache_drops_compilers_with_unknown_language() -> None:
    cache = MetadataCache.build(
        languages=[_language("c++")],
        compilers=[_compiler("gcc1", "c++"), _compiler("f1", "fortran")],
    )

    assert [compiler.id for compiler in cache.compilers()] == ["gcc1"]
    assert cache.find_compiler_by_id("f1") is None


def test_cache_matches_compiler_language_exactly() -> None:
    cache = MetadataCache.build(
        languages=[_language("c++")],
        compilers=[_compiler("gcc1", "C++")],
    )

    assert cache.entries[0].compilers == ()


def test_cache_keeps_languages_without_compilers_and_formatters() -> None:
    formatter = Formatter(
        exe="/opt/clang-format",
        version="17",
        name="clangformat",
        styles=("Google", "LLVM"),
        format_type="clangformat",
    )
    cache = MetadataCache.build(
        languages=[_language("zig")], compilers=[], formatters=[formatter]
    )

    assert cache.entries == (CacheEntry(language=_language("zig"), compilers=()),)
    assert cache.formatters == (formatter,)
    assert cache.find_formatter("clangformat") == formatter
    assert cache.find_formatter("rustfmt") is None


def test_cache_end_to_end_resolution() -> None:
    cache = _example_cache()

    assert len(cache.entries) == 1
    assert [c.id for c in cache.entries[0].compilers] == ["gcc1", "clang1"]
    resolved = cache.resolve("c++")
    assert resolved is not None and resolved.id == "gcc1"
    resolved = cache.resolve("clang1")
    assert resolved is not None and resolved.id == "clang1"
    assert cache.resolve("rustc") is None


def test_resolve_prefers_exact_compiler_id_over_language() -> None:
    cache = MetadataCache.build(
        languages=[_language("go", default_compiler="gccgo1")],
        compilers=[_compiler("gccgo1", "go"), _compiler("go", "go")],
    )

    resolved = cache.resolve("go")

    assert resolved is not None
    assert resolved.id == "go"


@pytest.mark.parametrize("identifier", ["c++", "C++", "c++".upper(), "c++".lower()])
def test_resolve_language_is_case_insensitive(identifier: str) -> None:
    resolved = _example_cache().resolve(identifier)

    assert resolved is not None
    assert resolved.id == "gcc1"


def test_resolve_compiler_id_is_case_sensitive() -> None:
    cache = _example_cache()

    assert cache.find_compiler_by_id("GCC1") is None
    assert cache.resolve("CLANG1") is None


def test_resolve_returns_none_when_default_compiler_is_dangling() -> None:
    cache = MetadataCache.build(
        languages=[_language("d", default_compiler="ldc-missing")],
        compilers=[_compiler("dmd1", "d")],
    )

    assert cache.find_language_by_id("D") == _language("d", "ldc-missing")
    assert cache.resolve("d") is None


def test_find_compiler_returns_first_match_in_entry_order() -> None:
    first = Compiler(id="dup", name="first", lang="a")
    second = Compiler(id="dup", name="second", lang="b")
    cache = MetadataCache.build(
        languages=[_language("a"), _language("b")], compilers=[second, first]
    )

    assert cache.find_compiler_by_id("dup") == first


def test_find_entry_is_case_insensitive() -> None:
    entry = _example_cache().find_entry("C++")

    assert entry is not None
    assert entry.language.id == "c++"


def test_suggest_ranks_close_identifiers() -> None:
    cache = MetadataCache.build(
        languages=[_language("rust", default_compiler="r1740")],
        compilers=[_compiler("r1740", "rust"), _compiler("gcc1", "rust")],
    )

    assert cache.suggest("rsut")[0] == "rust"
    assert cache.suggest("zzzzzz") == []
    assert cache.suggest("gcc2", limit=1) == ["gcc1"]


def test_suggest_rejects_invalid_threshold() -> None:
    with pytest.raises(ValueError):
        _example_cache().suggest("x", threshold=1.5)


class _ListingTransport:
    def __init__(self, fail_compilers: bool = False) -> None:
        self._fail_compilers = fail_compilers
        self.threads: set[str] = set()

    def fetch_languages(self) -> list[Language]:
        self.threads.add(threading.current_thread().name)
        return [_language("c++", default_compiler="gcc1")]

    def fetch_compilers(self) -> list[Compiler]:
        self.threads.add(threading.current_thread().name)
        if self._fail_compilers:
            raise TransportError("HTTP 503: Service Unavailable")
        return [_compiler("gcc1", "c++"), _compiler("clang1", "c++")]

    def fetch_formatters(self) -> list[Formatter]:
        return [
            Formatter(
                exe="/opt/rustfmt",
                version="1.7",
                name="rustfmt",
                styles=(),
                format_type="rustfmt",
            )
        ]


def test_load_cache_builds_cache_from_transport_listings() -> None:
    transport = _ListingTransport()

    cache = load_cache(transport)  # type: ignore[arg-type]

    assert [c.id for c in cache.entries[0].compilers] == ["gcc1", "clang1"]
    assert [f.name for f in cache.formatters] == ["rustfmt"]
    assert threading.current_thread().name not in transport.threads


def test_load_cache_propagates_transport_errors() -> None:
    with pytest.raises(TransportError):
        load_cache(_ListingTransport(fail_compilers=True))  # type: ignore[arg-type]


def test_load_cache_rejects_non_positive_workers() -> None:
    with pytest.raises(ValueError):
        load_cache(_ListingTransport(), max_workers=0)  # type: ignore[arg-type]
