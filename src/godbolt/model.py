# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Metadata models returned by the Compiler Explorer service."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Language:
    """Represent one language supported by the service.

    Attributes:
        id: Unique language identifier (for example ``c++``).
        name: Display name.
        extensions: File extensions associated with the language.
        monaco: Editor mode tag used by the web UI.
        default_compiler: Identifier of the compiler used when only the
            language is given.
    """

    id: str
    name: str
    extensions: tuple[str, ...]
    monaco: str
    default_compiler: str


@dataclass(frozen=True)
class Compiler:
    """Represent one compiler.

    Attributes:
        id: Unique compiler identifier (for example ``g132``).
        name: Display name.
        lang: Identifier of the owning language.
        alias: Alternative identifiers for the compiler.
    """

    id: str
    name: str
    lang: str
    alias: tuple[str, ...] = ()


@dataclass(frozen=True)
class LibraryVersion:
    """Represent one published version of a library.

    Attributes:
        id: Version identifier used in requests.
        version: Human-readable version string.
        staticliblink: Static library names linked when the version is used.
        description: Optional free-form description.
        alias: Alternative identifiers for the version.
        dependencies: Identifiers of libraries this version depends on.
        path: Include paths added to the compilation.
        libpath: Library binary paths.
        options: Extra compiler options.
    """

    id: str
    version: str
    staticliblink: tuple[str, ...] = ()
    description: str | None = None
    alias: tuple[str, ...] = ()
    dependencies: tuple[str, ...] = ()
    path: tuple[str, ...] = ()
    libpath: tuple[str, ...] = ()
    options: tuple[str, ...] = ()


@dataclass(frozen=True)
class Library:
    """Represent one library available for a language."""

    id: str
    name: str
    url: str | None
    versions: tuple[LibraryVersion, ...]


@dataclass(frozen=True)
class Formatter:
    """Represent one code formatting tool.

    Attributes:
        exe: Path to the formatter executable on the service host.
        version: Long version string.
        name: Formatter name, also its identifier in format requests.
        styles: Supported base styles, possibly empty.
        format_type: Formatter type tag (``type`` on the wire).
    """

    exe: str
    version: str
    name: str
    styles: tuple[str, ...]
    format_type: str
