# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
import pytest

from godbolt.payloads import (
    parse_compilation_result,
    parse_compiler,
    parse_format_result,
    parse_formatter,
    parse_language,
    parse_library,
    parse_list,
)
from godbolt.response import OutputLine, Tag
from godbolt.transport import MalformedResponseError


def test_parse_language_maps_default_compiler() -> None:
    language = parse_language(
        {
            "id": "c++",
            "name": "C++",
            "extensions": [".cpp", ".cc"],
            "monaco": "cppp",
            "defaultCompiler": "g132",
        }
    )

    assert language.id == "c++"
    assert language.extensions == (".cpp", ".cc")
    assert language.default_compiler == "g132"


def test_parse_compiler_tolerates_missing_alias() -> None:
    compiler = parse_compiler({"id": "g132", "name": "gcc 13.2", "lang": "c++"})

    assert compiler.alias == ()


def test_parse_compiler_rejects_missing_lang() -> None:
    with pytest.raises(MalformedResponseError):
        parse_compiler({"id": "g132", "name": "gcc 13.2"})


def test_parse_list_rejects_non_array() -> None:
    with pytest.raises(MalformedResponseError):
        parse_list({"id": "c"}, parse_language)


def test_parse_library_with_versions() -> None:
    library = parse_library(
        {
            "id": "fmt",
            "name": "{fmt}",
            "url": None,
            "versions": [
                {
                    "id": "1000",
                    "version": "10.0.0",
                    "staticliblink": ["fmtd"],
                    "alias": [],
                    "dependencies": [],
                    "path": ["/opt/fmt/include"],
                    "libpath": [],
                    "options": [],
                }
            ],
        }
    )

    assert library.url is None
    assert library.versions[0].version == "10.0.0"
    assert library.versions[0].description is None
    assert library.versions[0].path == ("/opt/fmt/include",)


def test_parse_formatter_maps_type() -> None:
    formatter = parse_formatter(
        {
            "exe": "/opt/clang-format",
            "version": "clang-format 17",
            "name": "clangformat",
            "styles": ["Google"],
            "type": "clangformat",
        }
    )

    assert formatter.format_type == "clangformat"
    assert formatter.styles == ("Google",)


def test_parse_compilation_result_with_asm_and_tagged_stderr() -> None:
    result = parse_compilation_result(
        {
            "code": 1,
            "okToCache": True,
            "stdout": [],
            "stderr": [
                {
                    "text": "<source>:1:9: error: unknown type name 'iwnt'",
                    "tag": {"line": 1, "column": 9, "text": "unknown type name"},
                },
                {"text": "1 error generated."},
            ],
            "inputFilename": "/tmp/example.cpp",
            "compilationOptions": ["-O3"],
            "tools": [],
            "asmSize": 12,
            "asm": [
                {"text": "sum(int, int):", "source": None},
                {"text": "  lea eax, [rdi+rsi]", "source": {"file": None, "line": 1}},
            ],
        }
    )

    assert result.code == 1
    assert not result.succeeded
    assert result.did_execute is None
    assert result.build_result is None
    assert result.asm_size == 12
    assert result.asm is not None and result.asm[1].source_line == 1
    assert result.asm_text() == "sum(int, int):\n  lea eax, [rdi+rsi]"
    assert result.diagnostics() == [
        OutputLine(
            text="<source>:1:9: error: unknown type name 'iwnt'",
            tag=Tag(line=1, column=9, text="unknown type name"),
        )
    ]


def test_parse_execution_result_without_asm() -> None:
    result = parse_compilation_result(
        {
            "code": 0,
            "didExecute": True,
            "stdout": [{"text": "Test"}],
            "stderr": [],
            "execTime": "12",
            "buildResult": {
                "code": 0,
                "stdout": [],
                "stderr": [
                    {
                        "text": "warning: unused",
                        "tag": {"line": 3, "column": 1, "text": "unused"},
                    }
                ],
            },
        }
    )

    assert result.asm is None
    assert result.asm_text() == ""
    assert result.did_execute is True
    assert result.exec_time == 12
    assert result.stdout == (OutputLine(text="Test"),)
    assert result.build_result is not None
    assert [line.text for line in result.diagnostics()] == ["warning: unused"]


def test_parse_compilation_result_accepts_plain_string_lines() -> None:
    result = parse_compilation_result({"code": 0, "stdout": ["a", "b"]})

    assert [line.text for line in result.stdout] == ["a", "b"]


def test_parse_compilation_result_requires_code() -> None:
    with pytest.raises(MalformedResponseError):
        parse_compilation_result({"stdout": []})


def test_parse_compilation_result_rejects_non_object() -> None:
    with pytest.raises(MalformedResponseError):
        parse_compilation_result(["code", 0])


def test_parse_format_result() -> None:
    result = parse_format_result({"exit": 0, "answer": "int x;\n"})

    assert result.succeeded
    assert result.answer == "int x;\n"
