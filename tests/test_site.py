"""Tests for pawprint.site — identifiers and site loading."""

import sys
from pathlib import Path

import pytest

from pawprint._errors import ConfigError
from pawprint.config import PawprintConfig
from pawprint.site import all_reps, clean_identifier, load_site

from tests.conftest import FakeRep, FakeSite, FakeUnit


class TestCleanIdentifier:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("about", "/about/"),
            ("/about", "/about/"),
            ("about/", "/about/"),
            ("//blog/post//", "/blog/post/"),
            ("/", "/"),
            ("", "/"),
        ],
    )
    def test_clean(self, raw: str, expected: str) -> None:
        assert clean_identifier(raw) == expected


class TestAllReps:
    def test_pages_then_assets(self) -> None:
        site = FakeSite(
            pages=[FakeUnit("/", [FakeRep("a"), FakeRep("b")])],
            assets=[FakeUnit("/css/", [FakeRep("c")])],
        )
        assert [rep.output_path for rep in all_reps(site)] == ["a", "b", "c"]


class TestLoadSite:
    def test_loads_factory(self, tmp_site: Path) -> None:
        site = load_site(PawprintConfig(root=tmp_site))
        assert [page.identifier for page in site.pages] == ["/", "/about/"]

    def test_malformed_factory_path(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="module:attr"):
            load_site(PawprintConfig(root=tmp_path, site="site"))

    def test_missing_module(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_site(PawprintConfig(root=tmp_path))

    def test_missing_attribute(self, tmp_path: Path) -> None:
        (tmp_path / "site.py").write_text("load_site = 42\n")
        with pytest.raises(ConfigError, match="not callable"):
            load_site(PawprintConfig(root=tmp_path))

    def test_import_failure_becomes_config_error(self, tmp_path: Path) -> None:
        (tmp_path / "site.py").write_text("import does_not_exist\n")
        with pytest.raises(ConfigError, match="failed to load") as exc_info:
            load_site(PawprintConfig(root=tmp_path))
        assert isinstance(exc_info.value.__cause__, ModuleNotFoundError)
        assert "pawprint_site_site" not in sys.modules

    def test_syntax_error_becomes_config_error(self, tmp_path: Path) -> None:
        (tmp_path / "site.py").write_text("def load_site(config:\n")
        with pytest.raises(ConfigError, match="failed to load"):
            load_site(PawprintConfig(root=tmp_path))

    def test_factory_failure_becomes_config_error(self, tmp_path: Path) -> None:
        (tmp_path / "site.py").write_text(
            "def load_site(config):\n    raise RuntimeError('no content dir')\n"
        )
        with pytest.raises(ConfigError, match="no content dir"):
            load_site(PawprintConfig(root=tmp_path))
