# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Response models for compilation and formatting calls."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Tag:
    """Source location attached to a diagnostic line."""

    line: int
    column: int
    text: str


@dataclass(frozen=True)
class OutputLine:
    """Represent one stdout or stderr line.

    Attributes:
        text: Line text without the trailing newline.
        tag: Source location when the service recognised a diagnostic.
    """

    text: str
    tag: Tag | None = None


@dataclass(frozen=True)
class AsmLine:
    """Represent one line of assembly output.

    Attributes:
        text: Assembly text, ``None`` for lines the service left blank.
        source_line: Source line the instruction maps to, when known.
    """

    text: str | None
    source_line: int | None = None


@dataclass(frozen=True)
class BuildResult:
    """Compilation step of an execution request."""

    code: int
    stdout: tuple[OutputLine, ...] = ()
    stderr: tuple[OutputLine, ...] = ()


@dataclass(frozen=True)
class CompilationResult:
    """Represent the service response for one compilation request.

    Optional attributes are ``None`` when the service did not send them, which
    depends on the filters in the request (``asm`` is absent for execution
    requests, ``build_result`` is absent for plain compilations).

    Attributes:
        code: Exit status of the compiler, or of the program when executed.
        stdout: Output lines.
        stderr: Error lines, possibly tagged with a source location.
        did_execute: Whether the program was executed.
        build_result: Compilation step of an execution request.
        asm: Assembly lines.
        asm_size: Assembly size in bytes.
        ok_to_cache: Whether the service considers the result cacheable.
        input_filename: Name of the source file on the service host.
        compilation_options: Full compiler command line used.
        tools: Tool results attached to the compilation.
        exec_time: Wall time of the execution in milliseconds.
    """

    code: int
    stdout: tuple[OutputLine, ...] = ()
    stderr: tuple[OutputLine, ...] = ()
    did_execute: bool | None = None
    build_result: BuildResult | None = None
    asm: tuple[AsmLine, ...] | None = None
    asm_size: int | None = None
    ok_to_cache: bool | None = None
    input_filename: str | None = None
    compilation_options: tuple[str, ...] = ()
    tools: tuple[object, ...] = ()
    exec_time: int | None = None

    @property
    def succeeded(self) -> bool:
        return self.code == 0

    def asm_text(self) -> str:
        """Join assembly lines into one text block, empty when absent."""
        if self.asm is None:
            return ""
        return "\n".join(line.text or "" for line in self.asm)

    def diagnostics(self) -> list[OutputLine]:
        """Return tagged compiler diagnostics.

        Execution responses carry compiler output in ``build_result``; plain
        compilations carry it at the top level.
        """
        source = self.build_result if self.build_result is not None else self
        return [line for line in (*source.stderr, *source.stdout) if line.tag]


@dataclass(frozen=True)
class FormatResult:
    """Represent the service response for one formatting request."""

    exit: int
    answer: str

    @property
    def succeeded(self) -> bool:
        return self.exit == 0
