# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Transport abstractions for the Compiler Explorer API."""

import logging
from typing import Protocol

from godbolt.model import Compiler, Formatter, Language, Library
from godbolt.request import CompilationRequest, FormatRequest
from godbolt.response import CompilationResult, FormatResult

logger = logging.getLogger(__name__)


class GodboltError(RuntimeError):
    """Represent any failure reported by this package."""


class TransportError(GodboltError):
    """Represent a failed network call (connection, timeout, non-2xx status)."""


class MalformedResponseError(GodboltError):
    """Represent a response body that does not match the expected shape."""


class Transport(Protocol):
    """Define the calls made against a Compiler Explorer instance.

    Every method raises ``TransportError`` when the call fails and
    ``MalformedResponseError`` when the body cannot be decoded.
    """

    def fetch_languages(self) -> list[Language]:
        """Fetch all supported languages."""

    def fetch_compilers(self) -> list[Compiler]:
        """Fetch all compilers."""

    def fetch_compilers_for(self, language_id: str) -> list[Compiler]:
        """Fetch the compilers of one language."""

    def fetch_libraries_for(self, language_id: str) -> list[Library]:
        """Fetch the libraries available for one language."""

    def fetch_formatters(self) -> list[Formatter]:
        """Fetch all formatting tools."""

    def submit_compilation(
        self, compiler_id: str, request: CompilationRequest
    ) -> CompilationResult:
        """Compile (and optionally execute) a request.

        Args:
            compiler_id: Compiler identifier used in the endpoint path.
            request: Request body.

        Returns:
            Parsed compilation result.
        """

    def submit_format(self, formatter_id: str, request: FormatRequest) -> FormatResult:
        """Format source code with one formatter."""
