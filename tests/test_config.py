"""Tests for waypoint.config — RouterConfig frozen dataclass."""

import pytest

from waypoint.config import RouterConfig


class TestRouterConfig:
    def test_defaults(self) -> None:
        cfg = RouterConfig()

        assert cfg.base_path == ""
        assert cfg.trailing_slash is True

    def test_override(self) -> None:
        cfg = RouterConfig(base_path="/app", trailing_slash=False)

        assert cfg.base_path == "/app"
        assert cfg.trailing_slash is False

    def test_frozen(self) -> None:
        cfg = RouterConfig()

        with pytest.raises(AttributeError):
            cfg.base_path = "/x"  # type: ignore[misc]
