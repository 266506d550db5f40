"""Tests for gxbuild.core.config module."""

from __future__ import annotations

from pathlib import Path

from gxbuild.core.config import (
    DEFAULT_IMAGE,
    Config,
    load_config,
    load_config_or_default,
)
from gxbuild.core.result import Err, Ok


class TestDefaults:
    def test_default_values(self) -> None:
        config = Config()
        assert config.product.name == "VisualBoyAdvanceGX"
        assert config.product.edition == "Cover"
        assert config.container.image == DEFAULT_IMAGE
        assert config.container.source_mount == "/src/"
        assert config.container.output_mount == "/tmp/bin/"
        assert config.paths.bin == "bin"
        assert config.tools == ("git", "docker")

    def test_from_empty_dict(self) -> None:
        assert Config.from_dict({}) == Config()


class TestFromDict:
    def test_overrides(self) -> None:
        config = Config.from_dict(
            {
                "product": {"name": "VBAGX", "edition": "Plain"},
                "container": {"image": "devkitpro/devkitppc:latest", "make": "make -j4"},
                "paths": {"covers": "art"},
                "preflight": {"tools": ["git", "podman"]},
            }
        )
        assert config.product.name == "VBAGX"
        assert config.product.edition == "Plain"
        assert config.container.image == "devkitpro/devkitppc:latest"
        assert config.container.make == "make -j4"
        assert config.container.workdir == "/tmp/"
        assert config.paths.covers == "art"
        assert config.paths.readme == "README.md"
        assert config.tools == ("git", "podman")

    def test_wrong_types_fall_back_to_defaults(self) -> None:
        config = Config.from_dict(
            {
                "product": {"name": 12},
                "container": "not a table",
                "preflight": {"tools": ["git", 3]},
            }
        )
        assert config.product.name == "VisualBoyAdvanceGX"
        assert config.container.image == DEFAULT_IMAGE
        assert config.tools == ("git", "docker")


class TestLoadConfig:
    def test_load_valid(self, tmp_path: Path) -> None:
        path = tmp_path / "gxbuild.toml"
        path.write_text('[container]\nimage = "custom:1"\n', encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Ok)
        assert result.value.container.image == "custom:1"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "gxbuild.toml"
        path.write_text("[container\n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message
        assert result.error.path == path

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "missing.toml")

        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_directory_is_an_error(self, tmp_path: Path) -> None:
        path = tmp_path / "gxbuild.toml"
        path.mkdir()

        result = load_config_or_default(path)

        assert isinstance(result, Err)
        assert result.error.path == path

    def test_or_default_missing_file(self, tmp_path: Path) -> None:
        result = load_config_or_default(tmp_path / "missing.toml")

        assert result == Ok(Config())

    def test_or_default_keeps_parse_errors(self, tmp_path: Path) -> None:
        path = tmp_path / "gxbuild.toml"
        path.write_text("= broken", encoding="utf-8")

        assert isinstance(load_config_or_default(path), Err)
