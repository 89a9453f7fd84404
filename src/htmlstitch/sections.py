#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmlstitch/sections.py
"""Locating top-level document sections and hoisting elements into them."""

from __future__ import annotations

import copy
import logging

from bs4.element import PageElement, Tag

from htmlstitch.constants import HEAD_TAG
from htmlstitch.exceptions import SectionNotFoundError
from htmlstitch.walker import is_element, walk

logger = logging.getLogger(__name__)


def find_root(node: PageElement) -> PageElement:
    """Return the topmost ancestor of ``node`` (``node`` itself if it has no parent)."""
    root = node
    while root.parent is not None:
        root = root.parent
    return root


def find_section(tag_name: str, from_node: PageElement) -> Tag:
    """Locate the first element named ``tag_name`` in the tree containing ``from_node``.

    Parameters
    ----------
    tag_name : str
        Section tag to look for, e.g. ``"head"``
    from_node : PageElement
        Any node of the tree; the search starts from its root

    Returns
    -------
    Tag
        The first matching element in walk order

    Raises
    ------
    SectionNotFoundError
        If no element with that name exists

    """
    for node in walk(find_root(from_node)):
        if is_element(node, tag_name):
            return node
    raise SectionNotFoundError(tag_name)


def add_header(root: PageElement, element: Tag) -> None:
    """Append a copy of ``element`` as the last child of the document ``<head>``.

    The copy carries the element's name, attributes and children. ``element``
    itself is left where it is.

    Raises
    ------
    SectionNotFoundError
        If the tree containing ``root`` has no ``<head>``

    """
    head = find_section(HEAD_TAG, root)
    head.append(copy.copy(element))
    logger.debug("Hoisted <%s> into <head>", element.name)


def add_script(node: PageElement) -> None:
    """Hoist a ``<script>`` element out of resolved content.

    Scripts are deliberately left where the fragment put them; this hook does
    nothing.
    """
    return None
