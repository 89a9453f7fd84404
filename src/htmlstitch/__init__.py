"""htmlstitch - server-side composition of HTML documents from remote fragments.

A document marks the places where independently served content belongs with
placeholder elements::

    <fragment src="https://fragments.example.com/header">Loading failed</fragment>

``compose`` fetches every placeholder's ``src``, splices the returned markup
into the document and resolves placeholders inside fetched content as well.
When a source cannot be fetched the placeholder's own children are rendered
instead. ``<link>`` elements found in fragment content are moved into the
document ``<head>``.

Examples
--------
One-shot composition:

    >>> from htmlstitch import compose
    >>> html = compose(open("page.html", "rb"))

Reusing an HTTP client across documents:

    >>> import httpx
    >>> from htmlstitch import Composer, ComposeOptions
    >>> with httpx.Client(timeout=2.0) as client:
    ...     composer = Composer(ComposeOptions(max_depth=3), client=client)
    ...     pages = [composer.compose(page) for page in sources]

Requirements
------------
- Python 3.10+
- beautifulsoup4, html5lib and httpx

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

__version__ = "1.0.0"

from htmlstitch.composer import Composer, compose
from htmlstitch.exceptions import (
    DependencyError,
    FragmentDepthError,
    FragmentParseError,
    FragmentTransportError,
    MissingSourceError,
    ParsingError,
    ResolutionError,
    SectionNotFoundError,
    StitchError,
    UpstreamStatusError,
    ValidationError,
)
from htmlstitch.http import create_http_client
from htmlstitch.markup import parse_document, parse_fragment, serialize
from htmlstitch.options import ComposeOptions, FetchOptions
from htmlstitch.resolver import FragmentResolver, fallback_fragment
from htmlstitch.sections import add_header, add_script, find_section
from htmlstitch.walker import walk

__all__ = [
    "__version__",
    "Composer",
    "compose",
    "ComposeOptions",
    "FetchOptions",
    "FragmentResolver",
    "fallback_fragment",
    "create_http_client",
    "walk",
    "find_section",
    "add_header",
    "add_script",
    "parse_document",
    "parse_fragment",
    "serialize",
    "StitchError",
    "ValidationError",
    "DependencyError",
    "ParsingError",
    "ResolutionError",
    "MissingSourceError",
    "FragmentTransportError",
    "UpstreamStatusError",
    "FragmentParseError",
    "FragmentDepthError",
    "SectionNotFoundError",
]
