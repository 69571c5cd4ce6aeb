# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Command-line client for the Compiler Explorer API."""

import argparse
import json
import logging
import sys
from dataclasses import asdict, replace
from pathlib import Path
from typing import Any, TextIO

from rich.console import Console
from rich.logging import RichHandler
from rich.style import Style
from rich.table import Table

from godbolt.cache import MetadataCache
from godbolt.http import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_SECONDS,
    RequestsTransport,
    normalize_base_url,
)
from godbolt.loader import load_cache
from godbolt.model import Compiler
from godbolt.request import (
    FILTER_NAMES,
    CompilationFilters,
    CompilerOptions,
    ExecuteParameters,
    FormatRequest,
    build_compilation_request,
)
from godbolt.response import CompilationResult, OutputLine
from godbolt.session import encode_session, session_url
from godbolt.transport import GodboltError, Transport

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with Rich handler.

    Args:
        level: Logging severity threshold.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser instance.
    """
    parser = argparse.ArgumentParser(prog="godbolt")
    parser.add_argument(
        "--base-url", default=DEFAULT_BASE_URL, help="Compiler Explorer base URL."
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT_SECONDS,
        help="Request timeout in seconds.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    languages_parser = subparsers.add_parser("languages")
    _add_format_argument(languages_parser)

    compilers_parser = subparsers.add_parser("compilers")
    compilers_parser.add_argument(
        "--language", required=False, help="Only list compilers of this language."
    )
    _add_format_argument(compilers_parser)

    libraries_parser = subparsers.add_parser("libraries")
    libraries_parser.add_argument("--language", required=True, help="Language id.")
    _add_format_argument(libraries_parser)

    formatters_parser = subparsers.add_parser("formatters")
    _add_format_argument(formatters_parser)

    resolve_parser = subparsers.add_parser("resolve")
    resolve_parser.add_argument("identifier", help="Compiler id or language id.")

    compile_parser = subparsers.add_parser("compile")
    _add_session_arguments(compile_parser)
    compile_parser.add_argument(
        "--filter",
        action="append",
        default=[],
        dest="filters",
        help="Output filter as NAME or NAME=true|false (repeatable).",
    )
    compile_parser.add_argument(
        "--execute", action="store_true", help="Execute the compiled program."
    )
    _add_format_argument(compile_parser)

    share_parser = subparsers.add_parser("share")
    _add_session_arguments(share_parser)

    format_parser = subparsers.add_parser("format")
    format_parser.add_argument("--formatter", required=True, help="Formatter id.")
    format_parser.add_argument("--source", required=True, help="Source file path.")
    format_parser.add_argument("--style", default="", help="Base style.")
    format_parser.add_argument(
        "--use-tabs", action="store_true", help="Indent with tabs instead of spaces."
    )
    format_parser.add_argument(
        "--tab-width", type=int, default=4, help="Indentation width."
    )
    return parser


def _add_format_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--format",
        choices=("table", "json"),
        default="table",
        help="Output format.",
    )


def _add_session_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--compiler", required=True, help="Compiler id or language id."
    )
    parser.add_argument("--source", required=True, help="Source file path.")
    parser.add_argument("--args", default="", help="Compiler arguments.")
    parser.add_argument(
        "--exec-arg",
        action="append",
        default=[],
        dest="exec_args",
        help="Program argument for execution (repeatable).",
    )
    parser.add_argument("--stdin", default="", help="Program standard input.")


def run(
    argv: list[str],
    stdout: TextIO,
    stderr: TextIO,
    transport: Transport | None = None,
) -> int:
    """Run CLI command.

    Args:
        argv: CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.
        transport: Transport override; a requests transport is built from the
            parsed options when omitted.

    Returns:
        Exit code.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit:
        logger.warning(f"Argument parsing failed (argv={argv})")
        return EXIT_USAGE

    if transport is None:
        try:
            transport = RequestsTransport(base_url=args.base_url, timeout=args.timeout)
        except ValueError as exc:
            logger.warning(
                f"Invalid transport configuration (base_url={args.base_url} error={exc})"
            )
            stderr.write(f"Invalid configuration: {exc}\n")
            return EXIT_USAGE

    handlers = {
        "languages": _run_languages,
        "compilers": _run_compilers,
        "libraries": _run_libraries,
        "formatters": _run_formatters,
        "resolve": _run_resolve,
        "compile": _run_compile,
        "share": _run_share,
        "format": _run_format,
    }
    handler = handlers.get(args.command)
    if handler is None:
        logger.warning(f"Unsupported command (command={args.command})")
        stderr.write(f"Unsupported command: {args.command}\n")
        return EXIT_USAGE
    try:
        return handler(args, transport, stdout, stderr)
    except GodboltError as exc:
        logger.warning(f"Command failed (command={args.command} error={exc})")
        stderr.write(f"{args.command} failed: {exc}\n")
        return EXIT_FAILURE


def _run_languages(
    args: argparse.Namespace, transport: Transport, stdout: TextIO, stderr: TextIO
) -> int:
    languages = transport.fetch_languages()
    rows = [
        [
            language.id,
            language.name,
            ", ".join(language.extensions),
            language.default_compiler,
        ]
        for language in languages
    ]
    _write_rows(
        stdout=stdout,
        output_format=args.format,
        columns=["id", "name", "extensions", "default_compiler"],
        rows=rows,
        items=[asdict(language) for language in languages],
    )
    return EXIT_OK


def _run_compilers(
    args: argparse.Namespace, transport: Transport, stdout: TextIO, stderr: TextIO
) -> int:
    if args.language:
        compilers = transport.fetch_compilers_for(args.language)
    else:
        compilers = transport.fetch_compilers()
    rows = [
        [compiler.id, compiler.name, compiler.lang, ", ".join(compiler.alias)]
        for compiler in compilers
    ]
    _write_rows(
        stdout=stdout,
        output_format=args.format,
        columns=["id", "name", "lang", "alias"],
        rows=rows,
        items=[asdict(compiler) for compiler in compilers],
    )
    return EXIT_OK


def _run_libraries(
    args: argparse.Namespace, transport: Transport, stdout: TextIO, stderr: TextIO
) -> int:
    libraries = transport.fetch_libraries_for(args.language)
    rows = [
        [
            library.id,
            library.name,
            ", ".join(version.version for version in library.versions),
            str(library.url or ""),
        ]
        for library in libraries
    ]
    _write_rows(
        stdout=stdout,
        output_format=args.format,
        columns=["id", "name", "versions", "url"],
        rows=rows,
        items=[asdict(library) for library in libraries],
    )
    return EXIT_OK


def _run_formatters(
    args: argparse.Namespace, transport: Transport, stdout: TextIO, stderr: TextIO
) -> int:
    formatters = transport.fetch_formatters()
    rows = [
        [
            formatter.name,
            formatter.format_type,
            ", ".join(formatter.styles),
            formatter.version,
        ]
        for formatter in formatters
    ]
    _write_rows(
        stdout=stdout,
        output_format=args.format,
        columns=["name", "type", "styles", "version"],
        rows=rows,
        items=[asdict(formatter) for formatter in formatters],
    )
    return EXIT_OK


def _run_resolve(
    args: argparse.Namespace, transport: Transport, stdout: TextIO, stderr: TextIO
) -> int:
    cache = load_cache(transport)
    compiler = cache.resolve(args.identifier)
    if compiler is None:
        _write_resolve_miss(cache=cache, identifier=args.identifier, stderr=stderr)
        return EXIT_FAILURE
    stdout.write(f"{compiler.id}\t{compiler.name}\t{compiler.lang}\n")
    return EXIT_OK


def _run_compile(
    args: argparse.Namespace, transport: Transport, stdout: TextIO, stderr: TextIO
) -> int:
    try:
        filters = parse_filters(args.filters)
    except ValueError as exc:
        logger.warning(f"Invalid filter argument (filters={args.filters} error={exc})")
        stderr.write(f"Invalid filter: {exc}\n")
        return EXIT_USAGE
    source = _read_source(Path(args.source), stderr=stderr)
    if source is None:
        return EXIT_USAGE

    compiler = _resolve_compiler(args.compiler, transport=transport, stderr=stderr)
    if compiler is None:
        return EXIT_FAILURE

    compiler_options = CompilerOptions()
    if args.execute:
        filters = replace(filters, execute=True)
        compiler_options = CompilerOptions(executor_request=True)
    request = build_compilation_request(
        compiler=compiler,
        source=source,
        user_arguments=args.args,
        filters=filters,
        execute_parameters=ExecuteParameters(
            args=tuple(args.exec_args), stdin=args.stdin
        ),
        compiler_options=compiler_options,
    )
    result = transport.submit_compilation(compiler.id, request)
    logger.info(
        f"Compilation completed (compiler={compiler.id} code={result.code} "
        f"did_execute={result.did_execute})"
    )
    if args.format == "json":
        _write_json(asdict(result), stdout=stdout)
    else:
        _write_compilation(result=result, stdout=stdout)
    return EXIT_OK if result.succeeded else EXIT_FAILURE


def _run_share(
    args: argparse.Namespace, transport: Transport, stdout: TextIO, stderr: TextIO
) -> int:
    source = _read_source(Path(args.source), stderr=stderr)
    if source is None:
        return EXIT_USAGE
    compiler = _resolve_compiler(args.compiler, transport=transport, stderr=stderr)
    if compiler is None:
        return EXIT_FAILURE
    token = encode_session(
        compiler=compiler,
        source=source,
        user_arguments=args.args,
        execute_parameters=ExecuteParameters(
            args=tuple(args.exec_args), stdin=args.stdin
        ),
    )
    stdout.write(f"{session_url(token, base_url=normalize_base_url(args.base_url))}\n")
    return EXIT_OK


def _run_format(
    args: argparse.Namespace, transport: Transport, stdout: TextIO, stderr: TextIO
) -> int:
    source = _read_source(Path(args.source), stderr=stderr)
    if source is None:
        return EXIT_USAGE
    result = transport.submit_format(
        args.formatter,
        FormatRequest(
            source=source,
            style=args.style,
            use_spaces=not args.use_tabs,
            tab_width=args.tab_width,
        ),
    )
    if not result.succeeded:
        stderr.write(f"Formatter exited with {result.exit}: {result.answer}\n")
        return EXIT_FAILURE
    stdout.write(result.answer)
    if not result.answer.endswith("\n"):
        stdout.write("\n")
    return EXIT_OK


def parse_filters(filter_args: list[str]) -> CompilationFilters:
    """Parse CLI filter arguments.

    Args:
        filter_args: Values of the form ``NAME`` or ``NAME=true|false`` where
            ``NAME`` is the wire name of a filter (for example ``commentOnly``).

    Returns:
        Filters with only the named entries set.

    Raises:
        ValueError: If a filter name or value is invalid.
    """
    values: dict[str, bool] = {}
    for raw in filter_args:
        name, sep, value = raw.partition("=")
        name = name.strip()
        if name not in FILTER_NAMES:
            raise ValueError(
                f"Unsupported filter '{name}', expected one of "
                f"{', '.join(sorted(FILTER_NAMES))}"
            )
        if not sep:
            values[FILTER_NAMES[name]] = True
            continue
        lowered = value.strip().lower()
        if lowered not in {"true", "false"}:
            raise ValueError(f"Filter '{name}' expects true or false, got '{value}'")
        values[FILTER_NAMES[name]] = lowered == "true"
    return CompilationFilters(**values)


def _resolve_compiler(
    identifier: str, transport: Transport, stderr: TextIO
) -> Compiler | None:
    cache = load_cache(transport)
    compiler = cache.resolve(identifier)
    if compiler is None:
        _write_resolve_miss(cache=cache, identifier=identifier, stderr=stderr)
    return compiler


def _write_resolve_miss(cache: MetadataCache, identifier: str, stderr: TextIO) -> None:
    logger.warning(f"Identifier did not resolve to a compiler (identifier={identifier})")
    stderr.write(f"Unknown compiler or language: {identifier}\n")
    suggestions = cache.suggest(identifier)
    if suggestions:
        stderr.write(f"Did you mean: {', '.join(suggestions)}\n")


def _read_source(path: Path, stderr: TextIO) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.warning(f"Failed to read source file (path={path} error={exc})")
        stderr.write(f"Failed to read source file: {path}\n")
        return None


def _write_json(payload: Any, stdout: TextIO) -> None:
    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    console.print(
        json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


def _write_rows(
    stdout: TextIO,
    output_format: str,
    columns: list[str],
    rows: list[list[str]],
    items: list[dict[str, Any]],
) -> None:
    if output_format == "json":
        _write_json(items, stdout=stdout)
        return
    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    table = Table(show_header=True, expand=True)
    for column in columns:
        table.add_column(column, overflow="fold")
    for row in rows:
        table.add_row(*row)
    console.print(table)


def _write_compilation(result: CompilationResult, stdout: TextIO) -> None:
    """Write a compilation result as rule-separated sections.

    Args:
        result: Compilation result.
        stdout: Standard output stream.
    """
    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    if result.build_result is not None:
        _write_section(console, "build stdout", result.build_result.stdout)
        _write_section(console, "build stderr", result.build_result.stderr)
    if result.asm is not None:
        console.rule("asm", style=Style(color="cyan"), characters="-")
        console.print(result.asm_text(), markup=False, highlight=False)
    _write_section(console, "stdout", result.stdout)
    _write_section(console, "stderr", result.stderr)
    console.rule(f"exit code {result.code}", style=Style(color="cyan"), characters="-")


def _write_section(console: Console, title: str, lines: tuple[OutputLine, ...]) -> None:
    if not lines:
        return
    console.rule(title, style=Style(color="cyan"), characters="-")
    for line in lines:
        console.print(line.text, markup=False, highlight=False)


def main() -> None:
    """Run the CLI application and exit."""
    configure_logging()
    exit_code = run(sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
