"""Unit tests for ComposeOptions and FetchOptions."""

import dataclasses

import pytest

from htmlstitch.exceptions import ValidationError
from htmlstitch.options import ComposeOptions, FetchOptions


@pytest.mark.unit
class TestComposeOptions:
    """Validation and copying of composition options."""

    def test_defaults(self) -> None:
        options = ComposeOptions()
        assert options.document_parser == "html5lib"
        assert options.fragment_parser == "html5lib"
        assert options.hoist_links is True
        assert options.strict_head is True
        assert options.max_depth is None

    def test_frozen(self) -> None:
        options = ComposeOptions()
        with pytest.raises(dataclasses.FrozenInstanceError):
            options.max_depth = 3  # type: ignore[misc]

    def test_create_updated_returns_copy(self) -> None:
        original = ComposeOptions()
        updated = original.create_updated(max_depth=2, hoist_links=False)
        assert updated.max_depth == 2
        assert updated.hoist_links is False
        assert original.max_depth is None

    @pytest.mark.parametrize("field_name", ["document_parser", "fragment_parser"])
    def test_unknown_parser(self, field_name: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ComposeOptions(**{field_name: "regex"})
        assert exc_info.value.parameter_name == field_name

    def test_negative_depth(self) -> None:
        with pytest.raises(ValidationError, match="max_depth"):
            ComposeOptions(max_depth=-1)

    def test_zero_depth_allowed(self) -> None:
        assert ComposeOptions(max_depth=0).max_depth == 0

    def test_from_mapping_accepts_dashes(self) -> None:
        options = ComposeOptions.from_mapping({"max-depth": 3, "strict_head": False})
        assert options.max_depth == 3
        assert options.strict_head is False

    def test_from_mapping_rejects_unknown_keys(self) -> None:
        with pytest.raises(ValidationError, match="Unknown ComposeOptions setting: colour"):
            ComposeOptions.from_mapping({"colour": "blue"})


@pytest.mark.unit
class TestFetchOptions:
    """Validation of fetch options and the effective User-Agent."""

    @pytest.mark.parametrize("timeout", [0, -1.5])
    def test_timeout_must_be_positive(self, timeout: float) -> None:
        with pytest.raises(ValidationError):
            FetchOptions(timeout=timeout)

    def test_headers_are_copied(self) -> None:
        headers = {"X-Team": "web"}
        options = FetchOptions(headers=headers)
        headers["X-Team"] = "changed"
        assert options.headers == {"X-Team": "web"}

    def test_user_agent_default(self, monkeypatch) -> None:
        monkeypatch.delenv("HTMLSTITCH_USER_AGENT", raising=False)
        assert FetchOptions().effective_user_agent == "htmlstitch/1.0"

    def test_user_agent_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("HTMLSTITCH_USER_AGENT", "edge-composer/2")
        assert FetchOptions().effective_user_agent == "edge-composer/2"

    def test_explicit_user_agent_wins(self, monkeypatch) -> None:
        monkeypatch.setenv("HTMLSTITCH_USER_AGENT", "edge-composer/2")
        assert FetchOptions(user_agent="mine").effective_user_agent == "mine"
