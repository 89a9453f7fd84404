#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmlstitch/http.py
"""HTTP client construction for fragment fetching.

The composer never reaches for a process-wide client: it is handed an
``httpx.Client`` (or builds one through ``create_http_client``), which keeps
timeout and retry policy with the caller and lets tests plug in
``httpx.MockTransport``.
"""

from __future__ import annotations

import logging

import httpx

from htmlstitch.options import FetchOptions

logger = logging.getLogger(__name__)


def create_http_client(
    options: FetchOptions | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create the httpx client used to fetch fragment sources.

    Parameters
    ----------
    options : FetchOptions, optional
        Timeout, redirect, header and base URL settings
    transport : httpx.BaseTransport, optional
        Custom transport (e.g. ``httpx.MockTransport`` or a transport with
        retries configured)

    Returns
    -------
    httpx.Client
        Configured HTTP client. The caller owns it and must close it.

    """
    options = options or FetchOptions()
    headers = {"User-Agent": options.effective_user_agent, **options.headers}

    kwargs = {}
    if options.base_url:
        kwargs["base_url"] = options.base_url
    if transport is not None:
        kwargs["transport"] = transport

    logger.debug(
        "Creating HTTP client (timeout=%s, follow_redirects=%s, base_url=%s)",
        options.timeout,
        options.follow_redirects,
        options.base_url,
    )
    return httpx.Client(
        timeout=options.timeout,
        follow_redirects=options.follow_redirects,
        headers=headers,
        **kwargs,
    )
