# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Decoding of Compiler Explorer JSON payloads into models."""

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from godbolt.model import Compiler, Formatter, Language, Library, LibraryVersion
from godbolt.response import (
    AsmLine,
    BuildResult,
    CompilationResult,
    FormatResult,
    OutputLine,
    Tag,
)
from godbolt.transport import MalformedResponseError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def parse_list(payload: object, item_parser: Callable[[object], T]) -> list[T]:
    """Decode a JSON array with ``item_parser``.

    Raises:
        MalformedResponseError: If ``payload`` is not a list or an item is
            malformed.
    """
    if not isinstance(payload, list):
        raise MalformedResponseError(
            f"Expected a JSON array, got {type(payload).__name__}."
        )
    return [item_parser(item) for item in payload]


def parse_language(payload: object) -> Language:
    data = _require_object(payload, "language")
    return Language(
        id=_require_str(data, "id"),
        name=_require_str(data, "name"),
        extensions=_str_tuple(data, "extensions"),
        monaco=_optional_str(data, "monaco") or "",
        default_compiler=_optional_str(data, "defaultCompiler") or "",
    )


def parse_compiler(payload: object) -> Compiler:
    data = _require_object(payload, "compiler")
    return Compiler(
        id=_require_str(data, "id"),
        name=_require_str(data, "name"),
        lang=_require_str(data, "lang"),
        alias=_str_tuple(data, "alias"),
    )


def parse_library_version(payload: object) -> LibraryVersion:
    data = _require_object(payload, "library version")
    return LibraryVersion(
        id=_require_str(data, "id"),
        version=_require_str(data, "version"),
        staticliblink=_str_tuple(data, "staticliblink"),
        description=_optional_str(data, "description"),
        alias=_str_tuple(data, "alias"),
        dependencies=_str_tuple(data, "dependencies"),
        path=_str_tuple(data, "path"),
        libpath=_str_tuple(data, "libpath"),
        options=_str_tuple(data, "options"),
    )


def parse_library(payload: object) -> Library:
    data = _require_object(payload, "library")
    return Library(
        id=_require_str(data, "id"),
        name=_require_str(data, "name"),
        url=_optional_str(data, "url"),
        versions=tuple(parse_list(data.get("versions", []), parse_library_version)),
    )


def parse_formatter(payload: object) -> Formatter:
    data = _require_object(payload, "formatter")
    return Formatter(
        exe=_require_str(data, "exe"),
        version=_optional_str(data, "version") or "",
        name=_require_str(data, "name"),
        styles=_str_tuple(data, "styles"),
        format_type=_optional_str(data, "type") or "",
    )


def parse_compilation_result(payload: object) -> CompilationResult:
    """Decode the compile endpoint response.

    Args:
        payload: Decoded JSON body.

    Returns:
        Compilation result; absent optional fields stay ``None``.

    Raises:
        MalformedResponseError: If required fields are missing or mistyped.
    """
    data = _require_object(payload, "compilation result")
    build_payload = data.get("buildResult")
    asm_payload = data.get("asm")
    return CompilationResult(
        code=_require_int(data, "code"),
        stdout=_output_lines(data.get("stdout")),
        stderr=_output_lines(data.get("stderr")),
        did_execute=_optional_bool(data, "didExecute"),
        build_result=(
            _build_result(build_payload) if build_payload is not None else None
        ),
        asm=(
            tuple(parse_list(asm_payload, _asm_line))
            if asm_payload is not None
            else None
        ),
        asm_size=_optional_int(data, "asmSize"),
        ok_to_cache=_optional_bool(data, "okToCache"),
        input_filename=_optional_str(data, "inputFilename"),
        compilation_options=_str_tuple(data, "compilationOptions"),
        tools=tuple(data.get("tools") or ()),
        exec_time=_optional_int(data, "execTime"),
    )


def parse_format_result(payload: object) -> FormatResult:
    data = _require_object(payload, "format result")
    return FormatResult(
        exit=_require_int(data, "exit"),
        answer=_optional_str(data, "answer") or "",
    )


def _build_result(payload: object) -> BuildResult:
    data = _require_object(payload, "build result")
    return BuildResult(
        code=_require_int(data, "code"),
        stdout=_output_lines(data.get("stdout")),
        stderr=_output_lines(data.get("stderr")),
    )


def _output_lines(payload: object) -> tuple[OutputLine, ...]:
    if payload is None:
        return ()
    return tuple(parse_list(payload, _output_line))


def _output_line(payload: object) -> OutputLine:
    # Older service revisions send plain strings instead of objects.
    if isinstance(payload, str):
        return OutputLine(text=payload)
    data = _require_object(payload, "output line")
    tag_payload = data.get("tag")
    tag = None
    if tag_payload is not None:
        tag_data = _require_object(tag_payload, "tag")
        tag = Tag(
            line=_optional_int(tag_data, "line") or 0,
            column=_optional_int(tag_data, "column") or 0,
            text=_optional_str(tag_data, "text") or "",
        )
    return OutputLine(text=_optional_str(data, "text") or "", tag=tag)


def _asm_line(payload: object) -> AsmLine:
    data = _require_object(payload, "assembly line")
    source_line = None
    source = data.get("source")
    if isinstance(source, dict):
        source_line = _optional_int(source, "line")
    return AsmLine(text=_optional_str(data, "text"), source_line=source_line)


def _require_object(payload: object, what: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise MalformedResponseError(
            f"Expected {what} object, got {type(payload).__name__}."
        )
    return payload


def _require_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise MalformedResponseError(f"Field '{key}' must be a string.")
    return value


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise MalformedResponseError(f"Field '{key}' must be a string.")
    return value


def _require_int(data: dict[str, Any], key: str) -> int:
    value = _optional_int(data, key)
    if value is None:
        raise MalformedResponseError(f"Field '{key}' is missing.")
    return value


def _optional_int(data: dict[str, Any], key: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        raise MalformedResponseError(f"Field '{key}' must be an integer.")
    if isinstance(value, int):
        return value
    # execTime is reported as a numeric string by some service versions.
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError as exc:
            raise MalformedResponseError(
                f"Field '{key}' must be an integer."
            ) from exc
    raise MalformedResponseError(f"Field '{key}' must be an integer.")


def _optional_bool(data: dict[str, Any], key: str) -> bool | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise MalformedResponseError(f"Field '{key}' must be a boolean.")
    return value


def _str_tuple(data: dict[str, Any], key: str) -> tuple[str, ...]:
    value = data.get(key)
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise MalformedResponseError(f"Field '{key}' must be a list of strings.")
    return tuple(value)
