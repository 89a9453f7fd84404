#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmlstitch/resolver.py
"""Fetching and parsing the remote content of a single placeholder.

A placeholder resolves to a detached anonymous element holding the top-level
nodes parsed from its ``src`` response. Every failure is reported as a
``ResolutionError`` subclass so the composer can fall back to the
placeholder's own children.
"""

from __future__ import annotations

import logging

import httpx
from bs4.element import Tag

from htmlstitch.constants import FRAGMENT_SOURCE_ATTRIBUTE
from htmlstitch.exceptions import FragmentTransportError, MissingSourceError, UpstreamStatusError
from htmlstitch.markup import anonymous_element, owner_document, parse_fragment

logger = logging.getLogger(__name__)


def fragment_source(placeholder: Tag) -> str | None:
    """Return the placeholder's ``src`` value, or None when absent or blank."""
    value = placeholder.get(FRAGMENT_SOURCE_ATTRIBUTE)
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def fallback_fragment(placeholder: Tag) -> Tag:
    """Wrap the placeholder's children in an anonymous element.

    The children are moved, not copied, so the fallback content is kept
    verbatim and the placeholder is left empty.
    """
    wrapper = anonymous_element(owner_document(placeholder))
    for child in list(placeholder.contents):
        wrapper.append(child.extract())
    return wrapper


class FragmentResolver:
    """Resolve placeholders by fetching their ``src`` with an httpx client.

    Parameters
    ----------
    client : httpx.Client
        Client used for every fetch. The resolver does not close it.
    parser : str, default "html5lib"
        BeautifulSoup tree builder for response bodies

    """

    def __init__(self, client: httpx.Client, parser: str = "html5lib"):
        """Initialize the resolver with its HTTP client and fragment parser."""
        self.client = client
        self.parser = parser

    def fetch(self, url: str) -> str:
        """GET ``url`` and return the decoded body of a 200 response.

        The response is streamed inside a context manager so the connection
        is released whether the request succeeds or fails.

        Raises
        ------
        FragmentTransportError
            If the request could not be completed
        UpstreamStatusError
            If the response status is not 200

        """
        logger.debug("Fetching fragment from %s", url)
        try:
            with self.client.stream("GET", url) as response:
                if response.status_code != httpx.codes.OK:
                    raise UpstreamStatusError(url, response.status_code)
                response.read()
                body = response.text
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise FragmentTransportError(url, original_error=e) from e

        logger.debug("Fetched %d characters from %s", len(body), url)
        return body

    def resolve(self, placeholder: Tag) -> Tag:
        """Resolve ``placeholder`` into a detached anonymous element.

        Parameters
        ----------
        placeholder : Tag
            A ``<fragment>`` element

        Returns
        -------
        Tag
            Anonymous element whose children are the parsed response nodes

        Raises
        ------
        MissingSourceError
            If the placeholder has no usable ``src``
        FragmentTransportError
            If the source could not be reached
        UpstreamStatusError
            If the source answered with a status other than 200
        FragmentParseError
            If the response body could not be parsed

        """
        url = fragment_source(placeholder)
        if url is None:
            raise MissingSourceError()

        body = self.fetch(url)
        nodes = parse_fragment(body, parser=self.parser, url=url)

        wrapper = anonymous_element()
        for node in nodes:
            wrapper.append(node.extract())
        return wrapper
