# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
from godbolt.model import Compiler
from godbolt.request import (
    FILTER_NAMES,
    CompilationFilters,
    CompilerOptions,
    ExecuteParameters,
    FormatRequest,
    build_compilation_request,
    omit_unset,
)

GCC = Compiler(id="g132", name="x86-64 gcc 13.2", lang="c++", alias=())


def test_filters_without_values_serialize_to_empty_mapping() -> None:
    assert CompilationFilters().to_payload() == {}


def test_filters_with_execute_only_serialize_single_key() -> None:
    assert CompilationFilters(execute=True).to_payload() == {"execute": True}


def test_filters_keep_explicit_false_and_use_wire_names() -> None:
    filters = CompilationFilters(
        comment_only=True,
        library_code=False,
        binary_object=False,
        debug_calls=True,
    )

    assert filters.to_payload() == {
        "binaryObject": False,
        "commentOnly": True,
        "libraryCode": False,
        "debugCalls": True,
    }


def test_filter_names_map_wire_names_to_fields() -> None:
    assert FILTER_NAMES["commentOnly"] == "comment_only"
    assert FILTER_NAMES["execute"] == "execute"
    assert len(FILTER_NAMES) == 11


def test_omit_unset_applies_to_compiler_options() -> None:
    assert omit_unset(CompilerOptions()) == {}
    assert CompilerOptions(skip_asm=True, executor_request=False).to_payload() == {
        "skipAsm": True,
        "executorRequest": False,
    }


def test_compilation_request_payload_always_sends_nested_blocks() -> None:
    request = build_compilation_request(
        compiler=GCC, source="int main() { return 0; }"
    )

    assert request.to_payload() == {
        "source": "int main() { return 0; }",
        "compiler": "g132",
        "options": {
            "userArguments": "",
            "compilerOptions": {},
            "filters": {},
            "executeParameters": {"args": [], "stdin": ""},
        },
    }


def test_compilation_request_payload_for_execution() -> None:
    request = build_compilation_request(
        compiler=GCC,
        source="int main() {}",
        user_arguments="-O3 -Wall",
        filters=CompilationFilters(execute=True),
        execute_parameters=ExecuteParameters(args=("--flag", "2"), stdin="input"),
        compiler_options=CompilerOptions(executor_request=True),
    )

    payload = request.to_payload()

    assert payload["compiler"] == "g132"
    assert payload["options"] == {
        "userArguments": "-O3 -Wall",
        "compilerOptions": {"executorRequest": True},
        "filters": {"execute": True},
        "executeParameters": {"args": ["--flag", "2"], "stdin": "input"},
    }


def test_format_request_omits_empty_style() -> None:
    assert FormatRequest(source="int x;").to_payload() == {
        "source": "int x;",
        "useSpaces": True,
        "tabWidth": 4,
    }


def test_format_request_sends_style_when_given() -> None:
    payload = FormatRequest(
        source="int x;", style="Google", use_spaces=False, tab_width=8
    ).to_payload()

    assert payload == {
        "source": "int x;",
        "base": "Google",
        "useSpaces": False,
        "tabWidth": 8,
    }
