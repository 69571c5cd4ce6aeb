# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Compiler Explorer transport over the requests library."""

import logging
from collections.abc import Callable
from typing import Any, TypeVar
from urllib.parse import quote, urlparse

import requests

from godbolt.model import Compiler, Formatter, Language, Library
from godbolt.payloads import (
    parse_compilation_result,
    parse_compiler,
    parse_format_result,
    parse_formatter,
    parse_language,
    parse_library,
    parse_list,
)
from godbolt.request import CompilationRequest, FormatRequest
from godbolt.response import CompilationResult, FormatResult
from godbolt.transport import MalformedResponseError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL: str = "https://godbolt.org"
DEFAULT_USER_AGENT: str = "godbolt-python-client"
DEFAULT_TIMEOUT_SECONDS: float = 60.0

LANGUAGE_FIELDS: str = "id,name,extensions,monaco,defaultCompiler"
COMPILER_FIELDS: str = "id,name,lang,alias"

_GODBOLT_HOSTS: set[str] = {"godbolt", "godbolt.org", "www.godbolt.org"}

T = TypeVar("T")


class RequestsTransport:
    """Call the Compiler Explorer REST API with a requests session."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize transport configuration.

        Args:
            base_url: Service base URL or host alias.
            user_agent: Value of the ``User-Agent`` header.
            timeout: Per-request timeout in seconds.
            session: Preconfigured session; created lazily when omitted.

        Raises:
            ValueError: If ``base_url`` is invalid or ``timeout`` is not
                greater than zero.
        """
        if timeout <= 0:
            raise ValueError("timeout must be > 0")
        self._base_url = normalize_base_url(base_url)
        self._user_agent = user_agent
        self._timeout = timeout
        self._session = session

    @property
    def base_url(self) -> str:
        return self._base_url

    def fetch_languages(self) -> list[Language]:
        payload = self._get("/api/languages", params={"fields": LANGUAGE_FIELDS})
        return _decode(payload, lambda body: parse_list(body, parse_language))

    def fetch_compilers(self) -> list[Compiler]:
        payload = self._get("/api/compilers", params={"fields": COMPILER_FIELDS})
        return _decode(payload, lambda body: parse_list(body, parse_compiler))

    def fetch_compilers_for(self, language_id: str) -> list[Compiler]:
        payload = self._get(
            f"/api/compilers/{_segment(language_id)}",
            params={"fields": COMPILER_FIELDS},
        )
        return _decode(payload, lambda body: parse_list(body, parse_compiler))

    def fetch_libraries_for(self, language_id: str) -> list[Library]:
        payload = self._get(f"/api/libraries/{_segment(language_id)}")
        return _decode(payload, lambda body: parse_list(body, parse_library))

    def fetch_formatters(self) -> list[Formatter]:
        payload = self._get("/api/formats")
        return _decode(payload, lambda body: parse_list(body, parse_formatter))

    def submit_compilation(
        self, compiler_id: str, request: CompilationRequest
    ) -> CompilationResult:
        """Compile (and optionally execute) a request.

        Args:
            compiler_id: Compiler identifier used in the endpoint path.
            request: Request body.

        Returns:
            Parsed compilation result.

        Raises:
            TransportError: If the call fails.
            MalformedResponseError: If the body does not match the result shape.
        """
        payload = self._post(
            f"/api/compiler/{_segment(compiler_id)}/compile", request.to_payload()
        )
        return _decode(payload, parse_compilation_result)

    def submit_format(self, formatter_id: str, request: FormatRequest) -> FormatResult:
        payload = self._post(
            f"/api/format/{_segment(formatter_id)}", request.to_payload()
        )
        return _decode(payload, parse_format_result)

    def _get(self, path: str, params: dict[str, str] | None = None) -> object:
        return self._send("GET", path, params=params)

    def _post(self, path: str, body: dict[str, Any]) -> object:
        return self._send("POST", path, json=body)

    def _send(self, method: str, path: str, **kwargs: Any) -> object:
        """Send one request and decode its JSON body.

        Raises:
            TransportError: If the connection fails or the status is not 2xx.
            MalformedResponseError: If the body is not valid JSON.
        """
        url = f"{self._base_url}{path}"
        session = self._get_session()
        try:
            response = session.request(
                method,
                url,
                headers={"User-Agent": self._user_agent, "Accept": "application/json"},
                timeout=self._timeout,
                **kwargs,
            )
        except requests.RequestException as exc:
            logger.warning(f"Request failed (method={method} url={url} error={exc})")
            raise TransportError(f"Network error: {exc}") from exc

        if not response.ok:
            logger.warning(
                f"Request returned an error status (method={method} url={url} "
                f"status={response.status_code})"
            )
            raise TransportError(f"HTTP {response.status_code}: {response.reason}")

        try:
            return response.json()
        except ValueError as exc:
            logger.warning(
                f"Response is not valid JSON (method={method} url={url} error={exc})"
            )
            raise MalformedResponseError(f"Invalid JSON in response: {exc}") from exc

    def _get_session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
        return self._session


def normalize_base_url(base_url: str) -> str:
    """Normalize a Compiler Explorer base URL.

    Args:
        base_url: User-provided URL, bare host or alias.

    Returns:
        Base URL without a trailing slash.

    Raises:
        ValueError: If the value is empty or has no host.
    """
    normalized_raw = base_url.strip()
    if not normalized_raw:
        raise ValueError("Invalid Compiler Explorer URL: value is empty.")

    if normalized_raw.lower().rstrip("/") in _GODBOLT_HOSTS:
        return DEFAULT_BASE_URL

    candidate = normalized_raw
    if "://" not in candidate:
        candidate = f"https://{candidate}"

    parsed = urlparse(candidate)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError(
            f"Invalid Compiler Explorer URL: expected host URL, got '{base_url}'."
        )
    return candidate.rstrip("/")


def _segment(value: str) -> str:
    # Language ids such as "c++" must survive as one path segment.
    return quote(value, safe="")


def _decode(payload: object, parser: Callable[[object], T]) -> T:
    try:
        return parser(payload)
    except MalformedResponseError as exc:
        logger.warning(f"Response does not match the expected shape (error={exc})")
        raise
