"""Tests for application configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from folderquery.config import ROOT_ENV_VAR, AppConfig


class TestAppConfig:
    """Test AppConfig dataclass."""

    def test_default_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should create config with default values."""
        monkeypatch.delenv(ROOT_ENV_VAR, raising=False)
        config = AppConfig()

        assert config.corpus_root == Path("data/orders")
        assert config.identity_field == "pi_order_id_str"
        assert config.path_field == "pi_path_to_order_xml"
        assert config.marker_name == "order.xml"
        assert config.folder_prefix == "order"
        assert config.default_rows == 10

    def test_root_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should pick the corpus root from the environment."""
        monkeypatch.setenv(ROOT_ENV_VAR, "/srv/orders")

        assert AppConfig().corpus_root == Path("/srv/orders")

    def test_custom_config(self) -> None:
        config = AppConfig(
            corpus_root=Path("/custom/orders"),
            identity_field="id",
            marker_name="record.xml",
        )

        assert config.corpus_root == Path("/custom/orders")
        assert config.identity_field == "id"
        assert config.marker_name == "record.xml"

    def test_resolve_corpus_root_absolute(self) -> None:
        config = AppConfig(corpus_root=Path("/absolute/orders"))

        assert config.resolve_corpus_root(Path("/base")) == Path("/absolute/orders")

    def test_resolve_corpus_root_relative_no_base(self) -> None:
        config = AppConfig(corpus_root=Path("relative/orders"))

        assert config.resolve_corpus_root(base_dir=None) == Path("relative/orders")

    def test_resolve_corpus_root_relative_with_base(self) -> None:
        config = AppConfig(corpus_root=Path("relative/orders"))

        resolved = config.resolve_corpus_root(base_dir=Path("/base/directory"))

        assert resolved == Path("/base/directory/relative/orders")
