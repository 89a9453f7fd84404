#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmlstitch/options.py
"""Configuration options for fragment composition and fetching.

Both option classes are frozen dataclasses. Field metadata carries the help
text and importance used by the CLI, and ``create_updated`` returns modified
copies without mutating the original instance.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from htmlstitch.constants import (
    DEFAULT_DOCUMENT_PARSER,
    DEFAULT_FOLLOW_REDIRECTS,
    DEFAULT_FRAGMENT_PARSER,
    DEFAULT_HOIST_LINKS,
    DEFAULT_MAX_DEPTH,
    DEFAULT_STRICT_HEAD,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    HTML_PARSER_CHOICES,
    USER_AGENT_ENV_VAR,
    HtmlParser,
)
from htmlstitch.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    @classmethod
    def from_mapping(cls, values: dict[str, Any]) -> Self:
        """Build an instance from a configuration mapping.

        Keys may use dashes instead of underscores. Unknown keys are rejected.

        Raises
        ------
        ValidationError
            If the mapping contains a key that is not a field of this class

        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in values.items():
            name = key.replace("-", "_")
            if name not in known:
                raise ValidationError(
                    f"Unknown {cls.__name__} setting: {key}", parameter_name=key, parameter_value=value
                )
            kwargs[name] = value
        return cls(**kwargs)


def _validate_parser(name: str, value: str) -> None:
    if value not in HTML_PARSER_CHOICES:
        raise ValidationError(
            f"Invalid {name}: {value!r}. Must be one of: {', '.join(HTML_PARSER_CHOICES)}",
            parameter_name=name,
            parameter_value=value,
        )


@dataclass(frozen=True)
class ComposeOptions(CloneFrozenMixin):
    """Options controlling how placeholders are substituted.

    Parameters
    ----------
    document_parser : {"html5lib", "html.parser", "lxml"}, default "html5lib"
        BeautifulSoup tree builder for the input document. ``html5lib``
        produces a complete document (``html``/``head``/``body``) the way a
        browser would, which guarantees a ``head`` for hoisted links.
    fragment_parser : {"html5lib", "html.parser", "lxml"}, default "html5lib"
        Tree builder for fetched fragment bodies.
    hoist_links : bool, default True
        Move ``<link>`` elements found in resolved content into ``<head>``.
    strict_head : bool, default True
        Raise ``SectionNotFoundError`` when a link must be hoisted but the
        document has no ``<head>``. When False the link stays where it is.
    max_depth : int or None, default None
        Maximum nesting depth of placeholders inside fetched content.
        ``None`` resolves without limit.

    """

    document_parser: HtmlParser = field(
        default=DEFAULT_DOCUMENT_PARSER,
        metadata={
            "help": "BeautifulSoup parser for the input document",
            "choices": list(HTML_PARSER_CHOICES),
            "importance": "advanced",
        },
    )
    fragment_parser: HtmlParser = field(
        default=DEFAULT_FRAGMENT_PARSER,
        metadata={
            "help": "BeautifulSoup parser for fetched fragment bodies",
            "choices": list(HTML_PARSER_CHOICES),
            "importance": "advanced",
        },
    )
    hoist_links: bool = field(
        default=DEFAULT_HOIST_LINKS,
        metadata={"help": "Move <link> elements from fragments into <head>", "importance": "core"},
    )
    strict_head: bool = field(
        default=DEFAULT_STRICT_HEAD,
        metadata={
            "help": "Fail when a link must be hoisted but the document has no <head>",
            "importance": "advanced",
        },
    )
    max_depth: int | None = field(
        default=DEFAULT_MAX_DEPTH,
        metadata={"help": "Maximum nesting depth of fragments (unlimited when unset)", "importance": "security"},
    )

    def __post_init__(self) -> None:
        """Validate parser names and the depth limit.

        Raises
        ------
        ValidationError
            If any field value is outside its valid range.

        """
        _validate_parser("document_parser", self.document_parser)
        _validate_parser("fragment_parser", self.fragment_parser)
        if self.max_depth is not None and self.max_depth < 0:
            raise ValidationError(
                f"max_depth must be non-negative, got {self.max_depth}",
                parameter_name="max_depth",
                parameter_value=self.max_depth,
            )


@dataclass(frozen=True)
class FetchOptions(CloneFrozenMixin):
    """Options for the HTTP client used to fetch fragment sources.

    Parameters
    ----------
    timeout : float, default 10.0
        Request timeout in seconds
    user_agent : str, optional
        User-Agent header. Defaults to ``$HTMLSTITCH_USER_AGENT`` or
        ``htmlstitch/1.0``.
    follow_redirects : bool, default True
        Follow HTTP redirects when fetching fragments
    base_url : str, optional
        Base URL that relative ``src`` values are resolved against
    headers : dict[str, str]
        Extra headers sent with every fragment request

    """

    timeout: float = field(
        default=DEFAULT_TIMEOUT,
        metadata={"help": "Network timeout in seconds for fragment requests", "importance": "core"},
    )
    user_agent: str | None = field(
        default=None,
        metadata={"help": "User-Agent included on header for requests", "importance": "advanced"},
    )
    follow_redirects: bool = field(
        default=DEFAULT_FOLLOW_REDIRECTS,
        metadata={"help": "Follow redirects when fetching fragments", "importance": "advanced"},
    )
    base_url: str | None = field(
        default=None,
        metadata={"help": "Base URL for resolving relative fragment sources", "importance": "core"},
    )
    headers: dict[str, str] = field(
        default_factory=dict,
        metadata={"help": "Extra request headers sent to fragment sources", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate the timeout and copy the header mapping."""
        if self.timeout <= 0:
            raise ValidationError(
                f"timeout must be positive, got {self.timeout}", parameter_name="timeout", parameter_value=self.timeout
            )
        object.__setattr__(self, "headers", dict(self.headers))

    @property
    def effective_user_agent(self) -> str:
        """User-Agent actually sent, honoring the environment override."""
        return self.user_agent or os.getenv(USER_AGENT_ENV_VAR) or DEFAULT_USER_AGENT
