# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Metadata cache construction from a transport."""

import concurrent.futures
import logging
import time

from godbolt.cache import MetadataCache
from godbolt.transport import Transport

logger = logging.getLogger(__name__)


def load_cache(transport: Transport, max_workers: int = 3) -> MetadataCache:
    """Fetch metadata listings and build the cache.

    The language, compiler and formatter listings are independent reads and
    are fetched concurrently; the join does not depend on arrival order.

    Args:
        transport: Transport used for the metadata calls.
        max_workers: Maximum number of worker threads used for the fetches.

    Returns:
        Fully built metadata cache.

    Raises:
        ValueError: If ``max_workers`` is not greater than zero.
        TransportError: If any listing call fails.
        MalformedResponseError: If any listing cannot be decoded.
    """
    if max_workers <= 0:
        raise ValueError("max_workers must be > 0")
    started_at = time.monotonic()
    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        languages_future = executor.submit(transport.fetch_languages)
        compilers_future = executor.submit(transport.fetch_compilers)
        formatters_future = executor.submit(transport.fetch_formatters)
        languages = languages_future.result()
        compilers = compilers_future.result()
        formatters = formatters_future.result()

    logger.info(
        "metadata_fetch_completed languages=%s compilers=%s formatters=%s elapsed_seconds=%.2f",
        len(languages),
        len(compilers),
        len(formatters),
        time.monotonic() - started_at,
    )
    return MetadataCache.build(
        languages=languages, compilers=compilers, formatters=formatters
    )
