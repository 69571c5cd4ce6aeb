# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""In-memory metadata cache and compiler resolution."""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

import Levenshtein

from godbolt.model import Compiler, Formatter, Language

logger = logging.getLogger(__name__)

DEFAULT_SUGGESTION_THRESHOLD: float = 0.6


@dataclass(frozen=True)
class CacheEntry:
    """Pair one language with the compilers that target it.

    Attributes:
        language: Language of this entry.
        compilers: Compilers whose ``lang`` equals ``language.id``, in listing
            order.
    """

    language: Language
    compilers: tuple[Compiler, ...]


def compiler_id_matches(compiler: Compiler, identifier: str) -> bool:
    """Return whether ``identifier`` names ``compiler`` (exact match)."""
    return compiler.id == identifier


def language_id_matches(language: Language, identifier: str) -> bool:
    """Return whether ``identifier`` names ``language`` (case-insensitive)."""
    return language.id.lower() == identifier.lower()


class MetadataCache:
    """Index languages and their compilers for lookups.

    The cache is built once from full metadata listings and never mutated
    afterwards, so a single instance can be shared between threads.
    """

    def __init__(
        self,
        entries: Iterable[CacheEntry],
        formatters: Iterable[Formatter] = (),
    ) -> None:
        """Initialize the cache from prebuilt entries.

        Args:
            entries: Cache entries in language listing order.
            formatters: Formatter tools available on the service.
        """
        self._entries = tuple(entries)
        self._formatters = tuple(formatters)

    @classmethod
    def build(
        cls,
        languages: Iterable[Language],
        compilers: Iterable[Compiler],
        formatters: Iterable[Formatter] = (),
    ) -> "MetadataCache":
        """Group compilers under their language.

        Args:
            languages: Full language listing.
            compilers: Full compiler listing.
            formatters: Full formatter listing.

        Returns:
            Cache with one entry per language. Compilers whose ``lang`` matches
            no language are left out.
        """
        all_compilers = tuple(compilers)
        entries: list[CacheEntry] = []
        for language in languages:
            relevant = tuple(
                compiler for compiler in all_compilers if compiler.lang == language.id
            )
            entries.append(CacheEntry(language=language, compilers=relevant))

        cache = cls(entries=entries, formatters=formatters)
        indexed = sum(len(entry.compilers) for entry in entries)
        if indexed != len(all_compilers):
            logger.info(
                f"Compilers without a known language were skipped "
                f"(skipped={len(all_compilers) - indexed})"
            )
        for entry in entries:
            if cache.find_compiler_by_id(entry.language.default_compiler) is None:
                logger.warning(
                    f"Default compiler does not resolve (language={entry.language.id} "
                    f"default_compiler={entry.language.default_compiler})"
                )
        logger.info(
            f"Metadata cache built (languages={len(entries)} compilers={indexed} "
            f"formatters={len(cache.formatters)})"
        )
        return cache

    @property
    def entries(self) -> tuple[CacheEntry, ...]:
        return self._entries

    @property
    def formatters(self) -> tuple[Formatter, ...]:
        return self._formatters

    def languages(self) -> list[Language]:
        return [entry.language for entry in self._entries]

    def compilers(self) -> Iterator[Compiler]:
        """Iterate indexed compilers in entry order."""
        for entry in self._entries:
            yield from entry.compilers

    def resolve(self, identifier: str) -> Compiler | None:
        """Resolve a compiler or language identifier to a compiler.

        Args:
            identifier: Compiler id (exact) or language id (any case).

        Returns:
            The named compiler, the language's default compiler, or ``None``
            when neither lookup succeeds.
        """
        compiler = self.find_compiler_by_id(identifier)
        if compiler is not None:
            return compiler
        language = self.find_language_by_id(identifier)
        if language is None:
            return None
        return self.find_compiler_by_id(language.default_compiler)

    def find_compiler_by_id(self, compiler_id: str) -> Compiler | None:
        for compiler in self.compilers():
            if compiler_id_matches(compiler, compiler_id):
                return compiler
        return None

    def find_language_by_id(self, language_id: str) -> Language | None:
        for entry in self._entries:
            if language_id_matches(entry.language, language_id):
                return entry.language
        return None

    def find_entry(self, language_id: str) -> CacheEntry | None:
        """Return the cache entry of a language (case-insensitive)."""
        for entry in self._entries:
            if language_id_matches(entry.language, language_id):
                return entry
        return None

    def find_formatter(self, name: str) -> Formatter | None:
        for formatter in self._formatters:
            if formatter.name == name:
                return formatter
        return None

    def suggest(
        self,
        identifier: str,
        limit: int = 3,
        threshold: float = DEFAULT_SUGGESTION_THRESHOLD,
    ) -> list[str]:
        """Suggest known identifiers close to an unresolved one.

        Args:
            identifier: Identifier that failed to resolve.
            limit: Maximum number of suggestions.
            threshold: Inclusive similarity threshold in [0.0, 1.0].

        Returns:
            Compiler and language ids ordered by descending similarity, ties
            broken by id.

        Raises:
            ValueError: If ``threshold`` is outside [0.0, 1.0] or ``limit`` is
                negative.
        """
        if threshold < 0.0 or threshold > 1.0:
            raise ValueError("threshold must be between 0.0 and 1.0.")
        if limit < 0:
            raise ValueError("limit must be >= 0")
        needle = identifier.lower()
        candidates = {entry.language.id for entry in self._entries}
        candidates.update(compiler.id for compiler in self.compilers())
        scored = [
            (float(Levenshtein.ratio(needle, candidate.lower())), candidate)
            for candidate in candidates
        ]
        ranked = sorted(
            (item for item in scored if item[0] >= threshold),
            key=lambda item: (-item[0], item[1]),
        )
        return [candidate for _, candidate in ranked[:limit]]
