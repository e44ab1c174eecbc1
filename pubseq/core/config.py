"""Typed configuration loading and access.

This module provides dataclasses for the publish.toml structure. The
defaults describe the wasm-opt release: binaryen is vendored into the two
-sys crates (minus googletest), then the three crates are published in
dependency order with the pinned Rust 1.48.0 toolchain.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from .result import Err, Ok, Result
from .structured import (
    StrDict,
    as_str_dict,
    get_bool,
    get_str,
    get_str_list,
    get_table,
    get_table_list,
)
from .version import ToolchainVersion, parse_version

__all__ = [
    "CONFIG_FILENAME",
    "Config",
    "ConfigError",
    "PackageConfig",
    "PublishConfig",
    "SourceConfig",
    "ToolchainConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "publish.toml"

DEFAULT_TOOL = "rustc"
DEFAULT_MIN_VERSION = ToolchainVersion(1, 48, 0)
DEFAULT_SOURCE = "binaryen"
DEFAULT_EXCLUDES = ("third_party/googletest",)


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class ToolchainConfig:
    """Minimum toolchain and how to invoke it.

    When ``pinned`` is set, rustc and cargo are invoked as ``+<min_version>``
    so the release is built with exactly the minimum supported compiler.
    """

    tool: str = DEFAULT_TOOL
    min_version: ToolchainVersion = DEFAULT_MIN_VERSION
    pinned: bool = True

    @property
    def channel(self) -> str | None:
        return str(self.min_version) if self.pinned else None


@dataclass(frozen=True, slots=True)
class SourceConfig:
    """Vendored source tree copied into packages before publishing."""

    path: str = DEFAULT_SOURCE


@dataclass(frozen=True, slots=True)
class PublishConfig:
    allow_dirty: bool = False


@dataclass(frozen=True, slots=True)
class PackageConfig:
    """One publishable package, as declared in ``[[package]]``."""

    name: str
    manifest: str
    stage_into: tuple[str, ...] = ()
    excludes: tuple[str, ...] = ()
    require: tuple[str, ...] = ()
    depends_on: tuple[str, ...] = ()


def _default_packages() -> tuple[PackageConfig, ...]:
    return (
        PackageConfig(
            name="wasm-opt-sys",
            manifest="components/wasm-opt-sys/Cargo.toml",
            stage_into=("components/wasm-opt-sys/binaryen",),
            excludes=DEFAULT_EXCLUDES,
            require=("src",),
        ),
        PackageConfig(
            name="wasm-opt-cxx-sys",
            manifest="components/wasm-opt-cxx-sys/Cargo.toml",
            stage_into=("components/wasm-opt-cxx-sys/binaryen",),
            excludes=DEFAULT_EXCLUDES,
            require=("src",),
            depends_on=("wasm-opt-sys",),
        ),
        PackageConfig(
            name="wasm-opt",
            manifest="components/wasm-opt/Cargo.toml",
            depends_on=("wasm-opt-sys", "wasm-opt-cxx-sys"),
        ),
    )


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    toolchain: ToolchainConfig = field(default_factory=ToolchainConfig)
    source: SourceConfig = field(default_factory=SourceConfig)
    publish: PublishConfig = field(default_factory=PublishConfig)
    packages: tuple[PackageConfig, ...] = field(default_factory=_default_packages)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML).

        Raises:
            ValueError: If a value is present but malformed.
        """
        toolchain = _section(data, "toolchain")
        source = _section(data, "source")
        publish = _section(data, "publish")

        min_version = DEFAULT_MIN_VERSION
        raw_version = _str(toolchain, "toolchain", "min_version")
        if raw_version is not None:
            parsed = parse_version(raw_version)
            if parsed is None:
                raise ValueError(f"toolchain.min_version is not X.Y.Z: {raw_version!r}")
            min_version = parsed

        pinned = _bool(toolchain, "toolchain", "pinned")
        allow_dirty = _bool(publish, "publish", "allow_dirty")

        packages = _default_packages()
        if "package" in data:
            tables = get_table_list(data, "package")
            if not tables:
                raise ValueError("[[package]] must be a non-empty array of tables")
            packages = tuple(_package_from_dict(t, i) for i, t in enumerate(tables))

        return cls(
            toolchain=ToolchainConfig(
                tool=_str(toolchain, "toolchain", "tool") or DEFAULT_TOOL,
                min_version=min_version,
                pinned=True if pinned is None else pinned,
            ),
            source=SourceConfig(path=_str(source, "source", "path") or DEFAULT_SOURCE),
            publish=PublishConfig(allow_dirty=bool(allow_dirty)),
            packages=packages,
        )


def _section(data: Mapping[str, object], name: str) -> StrDict:
    if name not in data:
        return {}
    table = get_table(data, name)
    if table is None:
        raise ValueError(f"[{name}] must be a table")
    return table


def _str(table: StrDict, section: str, key: str) -> str | None:
    """A present key must hold a non-empty string; absent gives None."""
    if key not in table:
        return None
    value = get_str(table, key)
    if value is None:
        raise ValueError(f"{section}.{key} must be a non-empty string, got {table[key]!r}")
    return value


def _bool(table: StrDict, section: str, key: str) -> bool | None:
    if key not in table:
        return None
    value = get_bool(table, key)
    if value is None:
        raise ValueError(f"{section}.{key} must be true or false, got {table[key]!r}")
    return value


def _package_from_dict(table: StrDict, index: int) -> PackageConfig:
    name = get_str(table, "name")
    if name is None:
        raise ValueError(f"package #{index + 1}: missing name")
    manifest = get_str(table, "manifest")
    if manifest is None:
        raise ValueError(f"package '{name}': missing manifest")

    def str_list(key: str) -> tuple[str, ...]:
        if key not in table:
            return ()
        values = get_str_list(table, key)
        if values is None:
            raise ValueError(f"package '{name}': {key} must be a list of non-empty strings")
        return tuple(values)

    excludes = str_list("excludes")
    require = str_list("require")
    for rel in (*excludes, *require):
        if not _is_contained(rel):
            raise ValueError(f"package '{name}': '{rel}' must be relative to the staged copy")
    stage_into = str_list("stage_into")
    for rel in stage_into:
        if not _is_contained(rel):
            raise ValueError(f"package '{name}': stage_into '{rel}' must be inside the release root")

    return PackageConfig(
        name=name,
        manifest=manifest,
        stage_into=stage_into,
        excludes=excludes,
        require=require,
        depends_on=str_list("depends_on"),
    )


def _is_contained(rel: str) -> bool:
    """True if ``rel`` stays inside the directory it is joined to."""
    p = PurePosixPath(rel.replace("\\", "/"))
    if p.is_absolute() or rel.startswith(("/", "\\")) or ":" in rel:
        return False
    return ".." not in p.parts and p != PurePosixPath(".")


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


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to publish.toml

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


def load_config_or_default(root: Path, explicit: Path | None = None) -> Result[Config, ConfigError]:
    """Load the release config for ``root``.

    An explicit path must exist. Otherwise ``<root>/publish.toml`` is used
    when present, and the built-in wasm-opt layout when it is not.
    """
    if explicit is not None:
        return load_config(explicit)

    path = root / CONFIG_FILENAME
    if not path.exists():
        return Ok(Config())
    return load_config(path)
