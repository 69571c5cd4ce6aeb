# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Request models for compilation and formatting calls."""

import logging
from dataclasses import dataclass, field, fields
from typing import Any

from godbolt.model import Compiler

logger = logging.getLogger(__name__)


def _wire(name: str) -> Any:
    """Declare an optional field serialized under ``name`` when set."""
    return field(default=None, metadata={"wire": name})


def omit_unset(value: object) -> dict[str, Any]:
    """Serialize a dataclass of optional wire fields.

    Args:
        value: Dataclass instance whose fields carry ``wire`` metadata.

    Returns:
        Mapping of wire names to values for every field that is not ``None``.
    """
    payload: dict[str, Any] = {}
    for item in fields(value):  # type: ignore[arg-type]
        current = getattr(value, item.name)
        if current is None:
            continue
        payload[item.metadata.get("wire", item.name)] = current
    return payload


@dataclass(frozen=True)
class CompilationFilters:
    """Output-shaping toggles for a compilation request.

    Every filter is tri-state: ``None`` leaves the service default in place,
    ``True``/``False`` are sent explicitly.
    """

    binary: bool | None = _wire("binary")
    binary_object: bool | None = _wire("binaryObject")
    comment_only: bool | None = _wire("commentOnly")
    demangle: bool | None = _wire("demangle")
    directives: bool | None = _wire("directives")
    execute: bool | None = _wire("execute")
    intel: bool | None = _wire("intel")
    labels: bool | None = _wire("labels")
    library_code: bool | None = _wire("libraryCode")
    trim: bool | None = _wire("trim")
    debug_calls: bool | None = _wire("debugCalls")

    def to_payload(self) -> dict[str, Any]:
        return omit_unset(self)


FILTER_NAMES: dict[str, str] = {
    item.metadata["wire"]: item.name for item in fields(CompilationFilters)
}


@dataclass(frozen=True)
class CompilerOptions:
    """Compiler-side switches.

    Attributes:
        skip_asm: Ask the service not to produce assembly output.
        executor_request: Mark the request as an execution request.
    """

    skip_asm: bool | None = _wire("skipAsm")
    executor_request: bool | None = _wire("executorRequest")

    def to_payload(self) -> dict[str, Any]:
        return omit_unset(self)


@dataclass(frozen=True)
class ExecuteParameters:
    """Arguments and standard input for the executed program."""

    args: tuple[str, ...] = ()
    stdin: str = ""

    def to_payload(self) -> dict[str, Any]:
        return {"args": list(self.args), "stdin": self.stdin}


@dataclass(frozen=True)
class CompilationRequest:
    """Describe one compilation or execution request.

    Attributes:
        source: Source code to compile.
        compiler: Compiler identifier.
        user_arguments: Flags passed to the compiler (for example ``-O2``).
        filters: Output filters.
        compiler_options: Compiler-side switches.
        execute_parameters: Program arguments and stdin.
    """

    source: str
    compiler: str
    user_arguments: str = ""
    filters: CompilationFilters = CompilationFilters()
    compiler_options: CompilerOptions = CompilerOptions()
    execute_parameters: ExecuteParameters = ExecuteParameters()

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body sent to the compile endpoint."""
        return {
            "source": self.source,
            "compiler": self.compiler,
            "options": {
                "userArguments": self.user_arguments,
                "compilerOptions": self.compiler_options.to_payload(),
                "filters": self.filters.to_payload(),
                "executeParameters": self.execute_parameters.to_payload(),
            },
        }


@dataclass(frozen=True)
class FormatRequest:
    """Describe one formatting request.

    Attributes:
        source: Source code to format.
        style: Base style; omitted from the body when empty.
        use_spaces: Indent with spaces instead of tabs.
        tab_width: Indentation width.
    """

    source: str
    style: str = ""
    use_spaces: bool = True
    tab_width: int = 4

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"source": self.source}
        if self.style:
            payload["base"] = self.style
        payload["useSpaces"] = self.use_spaces
        payload["tabWidth"] = self.tab_width
        return payload


def build_compilation_request(
    compiler: Compiler,
    source: str,
    user_arguments: str = "",
    filters: CompilationFilters | None = None,
    execute_parameters: ExecuteParameters | None = None,
    compiler_options: CompilerOptions | None = None,
) -> CompilationRequest:
    """Assemble a compilation request for a resolved compiler.

    No local validation is performed; argument syntax and filter combinations
    are checked by the service.

    Args:
        compiler: Target compiler.
        source: Source code.
        user_arguments: Compiler flags.
        filters: Output filters, service defaults when omitted.
        execute_parameters: Program arguments and stdin.
        compiler_options: Compiler-side switches.

    Returns:
        Request ready to be submitted.
    """
    return CompilationRequest(
        source=source,
        compiler=compiler.id,
        user_arguments=user_arguments,
        filters=filters or CompilationFilters(),
        compiler_options=compiler_options or CompilerOptions(),
        execute_parameters=execute_parameters or ExecuteParameters(),
    )
