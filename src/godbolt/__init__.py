# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Public import surface for the Compiler Explorer client."""

from godbolt.cache import CacheEntry, MetadataCache
from godbolt.http import RequestsTransport
from godbolt.loader import load_cache
from godbolt.model import Compiler, Formatter, Language, Library, LibraryVersion
from godbolt.request import (
    CompilationFilters,
    CompilationRequest,
    CompilerOptions,
    ExecuteParameters,
    FormatRequest,
    build_compilation_request,
)
from godbolt.response import (
    AsmLine,
    BuildResult,
    CompilationResult,
    FormatResult,
    OutputLine,
    Tag,
)
from godbolt.session import EncodingError, encode_session, session_url
from godbolt.transport import (
    GodboltError,
    MalformedResponseError,
    Transport,
    TransportError,
)

__all__ = [
    "AsmLine",
    "BuildResult",
    "CacheEntry",
    "CompilationFilters",
    "CompilationRequest",
    "CompilationResult",
    "Compiler",
    "CompilerOptions",
    "EncodingError",
    "ExecuteParameters",
    "FormatRequest",
    "FormatResult",
    "Formatter",
    "GodboltError",
    "Language",
    "Library",
    "LibraryVersion",
    "MalformedResponseError",
    "MetadataCache",
    "OutputLine",
    "RequestsTransport",
    "Tag",
    "Transport",
    "TransportError",
    "build_compilation_request",
    "encode_session",
    "load_cache",
    "session_url",
]
