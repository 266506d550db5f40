"""Typed configuration loading.

The configuration file (``gxbuild.toml`` at the project root) is optional.
Every value has a default matching the VisualBoyAdvanceGX release layout, so
a bare checkout builds without one.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_list, get_table

__all__ = [
    "CONFIG_FILENAME",
    "Config",
    "ConfigError",
    "ContainerConfig",
    "PathsConfig",
    "ProductConfig",
    "DEFAULT_IMAGE",
    "DEFAULT_TOOLS",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "gxbuild.toml"

# Pinned so every machine compiles with the same toolchain.
DEFAULT_IMAGE = "devkitpro/devkitppc:20190212"

DEFAULT_TOOLS: tuple[str, ...] = ("git", "docker")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ProductConfig:
    """Naming used for release archives."""

    name: str = "VisualBoyAdvanceGX"
    edition: str = "Cover"


@dataclass(frozen=True, slots=True)
class ContainerConfig:
    """Containerized build settings.

    Mount points are paths inside the container. ``executables`` is the
    directory, relative to the copied source tree, that make fills with the
    compiled binaries.
    """

    image: str = DEFAULT_IMAGE
    source_mount: str = "/src/"
    output_mount: str = "/tmp/bin/"
    workdir: str = "/tmp/"
    make: str = "make"
    executables: str = "executables"


@dataclass(frozen=True, slots=True)
class PathsConfig:
    """Paths relative to the project root."""

    bin: str = "bin"
    dist: str = "dist"
    readme: str = "README.md"
    covers: str = "distribution/covers"
    loader_metadata: str = "distribution/hbc"


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    product: ProductConfig = field(default_factory=ProductConfig)
    container: ContainerConfig = field(default_factory=ContainerConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    tools: tuple[str, ...] = DEFAULT_TOOLS

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        product: StrDict = get_table(data, "product") or {}
        container: StrDict = get_table(data, "container") or {}
        paths: StrDict = get_table(data, "paths") or {}
        preflight: StrDict = get_table(data, "preflight") or {}

        defaults_container = ContainerConfig()
        defaults_paths = PathsConfig()

        return cls(
            product=ProductConfig(
                name=get_str(product, "name") or "VisualBoyAdvanceGX",
                edition=get_str(product, "edition") or "Cover",
            ),
            container=ContainerConfig(
                image=get_str(container, "image") or DEFAULT_IMAGE,
                source_mount=get_str(container, "source_mount")
                or defaults_container.source_mount,
                output_mount=get_str(container, "output_mount")
                or defaults_container.output_mount,
                workdir=get_str(container, "workdir") or defaults_container.workdir,
                make=get_str(container, "make") or defaults_container.make,
                executables=get_str(container, "executables") or defaults_container.executables,
            ),
            paths=PathsConfig(
                bin=get_str(paths, "bin") or defaults_paths.bin,
                dist=get_str(paths, "dist") or defaults_paths.dist,
                readme=get_str(paths, "readme") or defaults_paths.readme,
                covers=get_str(paths, "covers") or defaults_paths.covers,
                loader_metadata=get_str(paths, "loader_metadata")
                or defaults_paths.loader_metadata,
            ),
            tools=get_str_list(preflight, "tools") or DEFAULT_TOOLS,
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))
    except OSError as e:
        return Err(ConfigError(f"Cannot read config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to gxbuild.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config if the file exists, otherwise return the defaults.

    A file that exists but cannot be parsed is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
