# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Shareable client-state tokens for compilation sessions."""

import base64
import json
import logging
from typing import Any

from godbolt.http.requests_client import DEFAULT_BASE_URL
from godbolt.model import Compiler
from godbolt.request import ExecuteParameters
from godbolt.transport import GodboltError

logger = logging.getLogger(__name__)

SESSION_ID: int = 1


class EncodingError(GodboltError):
    """Represent a failure to encode a session token."""


def build_client_state(
    compiler: Compiler,
    source: str,
    user_arguments: str = "",
    execute_parameters: ExecuteParameters | None = None,
) -> dict[str, Any]:
    """Build the client-state record for one session.

    Args:
        compiler: Compiler of the session; its ``lang`` becomes the session
            language.
        source: Source code.
        user_arguments: Compiler flags.
        execute_parameters: Program arguments and stdin for the executor pane.

    Returns:
        Client-state mapping with one session holding one compiler and one
        executor.
    """
    execution = execute_parameters or ExecuteParameters()
    return {
        "sessions": [
            {
                "id": SESSION_ID,
                "language": compiler.lang,
                "source": source,
                "compilers": [{"id": compiler.id, "options": user_arguments}],
                "executors": [
                    {
                        "arguments": " ".join(execution.args),
                        "compiler": {
                            "id": compiler.id,
                            "libs": [],
                            "options": user_arguments,
                        },
                        "stdin": execution.stdin,
                    }
                ],
            }
        ]
    }


def encode_session(
    compiler: Compiler,
    source: str,
    user_arguments: str = "",
    execute_parameters: ExecuteParameters | None = None,
) -> str:
    """Encode a compilation session into a URL-safe token.

    The client state is serialized as compact JSON with a fixed key order,
    and its UTF-8 bytes are encoded with the URL-safe base64 alphabet
    (``A-Z a-z 0-9 - _`` with ``=`` padding). Equal inputs give equal tokens.

    Args:
        compiler: Compiler of the session.
        source: Source code.
        user_arguments: Compiler flags.
        execute_parameters: Program arguments and stdin.

    Returns:
        Session token.

    Raises:
        EncodingError: If the session cannot be serialized or encoded.
    """
    state = build_client_state(
        compiler=compiler,
        source=source,
        user_arguments=user_arguments,
        execute_parameters=execute_parameters,
    )
    try:
        text = json.dumps(state, ensure_ascii=False, separators=(",", ":"))
        raw = text.encode("utf-8")
    except (TypeError, ValueError) as exc:
        logger.warning(
            f"Session serialization failed (compiler={compiler.id} error={exc})"
        )
        raise EncodingError(str(exc)) from exc
    return base64.urlsafe_b64encode(raw).decode("ascii")


def session_url(token: str, base_url: str = DEFAULT_BASE_URL) -> str:
    """Return the link that opens a session token in the web UI."""
    return f"{base_url.rstrip('/')}/clientstate/{token}"
