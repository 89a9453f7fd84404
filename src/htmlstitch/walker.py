#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmlstitch/walker.py
"""Tree traversal over BeautifulSoup documents.

The walk order is not a plain pre-order. Starting from a node, each step moves
to the first child if there is one, otherwise to the next sibling, otherwise to
the next sibling of the nearest ancestor that has one. The nodes reached are
emitted in reverse, so for every node its descendants come before it and later
content comes before earlier content:

    >>> soup = BeautifulSoup("<p><a></a><a></a></p><div><a></a></div>", "html.parser")
    >>> [n.name for n in walk(soup)]
    ['a', 'div', 'a', 'a', 'p']

The result is a snapshot list, so the tree may be mutated while iterating it.
"""

from __future__ import annotations

from bs4 import BeautifulSoup
from bs4.element import PageElement, Tag


def is_element(node: PageElement | None, name: str | None = None) -> bool:
    """Return True if ``node`` is an element (optionally with tag ``name``).

    The ``BeautifulSoup`` object is a ``Tag`` subclass but represents the
    document itself, so it is not an element.
    """
    if not isinstance(node, Tag) or isinstance(node, BeautifulSoup):
        return False
    return name is None or node.name == name


def first_child(node: PageElement) -> PageElement | None:
    """Return the first child of ``node``, or None for leaves and text."""
    if isinstance(node, Tag) and node.contents:
        return node.contents[0]
    return None


def _step(node: PageElement) -> PageElement | None:
    child = first_child(node)
    if child is not None:
        return child

    if node.next_sibling is not None:
        return node.next_sibling

    ancestor = node.parent
    while ancestor is not None:
        if ancestor.next_sibling is not None:
            return ancestor.next_sibling
        ancestor = ancestor.parent
    return None


def walk(node: PageElement) -> list[PageElement]:
    """Return the nodes that follow ``node`` in walk order.

    Parameters
    ----------
    node : PageElement
        Starting point. It is never part of its own result.

    Returns
    -------
    list[PageElement]
        Elements, text and other nodes reachable from ``node``, deepest and
        last first.

    """
    chain: list[PageElement] = []
    current = _step(node)
    while current is not None:
        chain.append(current)
        current = _step(current)
    chain.reverse()
    return chain


def elements_named(node: PageElement, name: str) -> list[Tag]:
    """Return the elements named ``name`` from ``walk(node)``, in walk order."""
    return [n for n in walk(node) if is_element(n, name)]
