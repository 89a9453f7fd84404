#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_sections.py
"""Unit tests for section lookup and header hoisting."""

import pytest
from bs4 import BeautifulSoup

from htmlstitch.exceptions import SectionNotFoundError
from htmlstitch.sections import add_header, add_script, find_root, find_section


@pytest.mark.unit
class TestFindSection:
    """Tests for find_section."""

    def test_from_nested_node(self) -> None:
        """The head is found from any node of the document."""
        document = BeautifulSoup("<html><head/><body><a>Foo</a></body></html>", "html5lib")
        start = document.a.contents[0]
        section = find_section("head", start)
        assert section is document.head

    def test_from_root(self) -> None:
        """A node without a parent is searched as the root."""
        document = BeautifulSoup("<p></p>", "html5lib")
        assert find_section("body", document) is document.body

    def test_missing_section(self) -> None:
        """A tree without the section raises SectionNotFoundError."""
        document = BeautifulSoup("<div><p>x</p></div>", "html.parser")
        with pytest.raises(SectionNotFoundError) as exc_info:
            find_section("head", document.p)
        assert exc_info.value.section == "head"

    def test_detached_subtree_is_searched_alone(self) -> None:
        """A detached subtree does not see the document it came from."""
        document = BeautifulSoup("<html><head></head><body><div><p></p></div></body></html>", "html5lib")
        div = document.div.extract()
        with pytest.raises(SectionNotFoundError):
            find_section("head", div.p)

    def test_find_root(self) -> None:
        document = BeautifulSoup("<div><p></p></div>", "html.parser")
        assert find_root(document.p) is document
        assert find_root(document) is document


@pytest.mark.unit
class TestAddHeader:
    """Tests for add_header."""

    def test_copy_is_appended_last(self) -> None:
        """A copy of the element becomes the last child of head."""
        document = BeautifulSoup(
            '<html><head><title>T</title></head><body><link rel="stylesheet" href="a.css"></body></html>',
            "html5lib",
        )
        link = document.body.link
        add_header(document.body, link)

        assert document.head.contents[-1].name == "link"
        assert document.head.contents[-1]["href"] == "a.css"
        assert document.head.contents[-1] is not link

    def test_original_is_left_in_place(self) -> None:
        """Removing the original is the caller's job."""
        document = BeautifulSoup('<html><head></head><body><link href="a.css"></body></html>', "html5lib")
        link = document.body.link
        add_header(link, link)
        assert link.parent is document.body
        assert len(document.find_all("link")) == 2

    def test_children_are_copied(self) -> None:
        """Children of the hoisted element come along."""
        document = BeautifulSoup("<html><head></head><body><style>p{}</style></body></html>", "html5lib")
        add_header(document, document.body.style)
        assert str(document.head) == "<head><style>p{}</style></head>"

    def test_without_head(self) -> None:
        """Hoisting into a document without head fails."""
        document = BeautifulSoup('<div><link href="a.css"></div>', "html.parser")
        with pytest.raises(SectionNotFoundError):
            add_header(document, document.link)


@pytest.mark.unit
def test_add_script_does_nothing() -> None:
    """Script hoisting is a no-op."""
    document = BeautifulSoup("<html><head></head><body><script>go()</script></body></html>", "html5lib")
    before = str(document)
    assert add_script(document.script) is None
    assert str(document) == before
