#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for htmlstitch.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Reserved Markup - Tag names with a special meaning during composition
3. Composition Defaults - Default values for ComposeOptions
4. Network Defaults - Default values for FetchOptions
5. Logging - Logger names and record fields
6. CLI Exit Codes
"""

from __future__ import annotations

from typing import Literal, get_args

# =============================================================================
# Type Definitions
# =============================================================================

HtmlParser = Literal["html.parser", "html5lib", "lxml"]
HTML_PARSER_CHOICES: tuple[str, ...] = get_args(HtmlParser)

# Maps a BeautifulSoup tree builder name to (install_name, version_spec)
HTML_PARSER_PACKAGES: dict[str, tuple[str, str]] = {
    "html5lib": ("html5lib", ""),
    "lxml": ("lxml", ""),
}

# =============================================================================
# Reserved Markup
# =============================================================================

FRAGMENT_TAG = "fragment"
FRAGMENT_SOURCE_ATTRIBUTE = "src"

# Container element that fetched fragment bodies are parsed inside of
FRAGMENT_CONTEXT_TAG = "content"

HEAD_TAG = "head"
LINK_TAG = "link"
SCRIPT_TAG = "script"

# Anonymous wrapper replacing a placeholder; serializes as <>...</>
ANONYMOUS_TAG = ""

# =============================================================================
# Composition Defaults
# =============================================================================

DEFAULT_DOCUMENT_PARSER: HtmlParser = "html5lib"
DEFAULT_FRAGMENT_PARSER: HtmlParser = "html5lib"
DEFAULT_HOIST_LINKS = True
DEFAULT_STRICT_HEAD = True
DEFAULT_MAX_DEPTH: int | None = None

# =============================================================================
# Network Defaults
# =============================================================================

DEFAULT_TIMEOUT = 10.0
DEFAULT_FOLLOW_REDIRECTS = True
DEFAULT_USER_AGENT = "htmlstitch/1.0"
USER_AGENT_ENV_VAR = "HTMLSTITCH_USER_AGENT"

# =============================================================================
# Logging
# =============================================================================

PACKAGE_LOGGER = "htmlstitch"
HTTP_LOGGERS = ("httpx", "httpcore")

# LogRecord attribute carrying the source of a placeholder that fell back
FALLBACK_URL_LOG_FIELD = "fragment_url"

# =============================================================================
# CLI Exit Codes
# =============================================================================

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
EXIT_COMPOSITION_ERROR = 7
