"""TOML config loading for nixc.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_NAME = "nixc.toml"


@dataclass
class DiagnosticsConfig:
    color: bool = True


@dataclass
class NixcConfig:
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)


def find_config(start_path: Path | None = None) -> Path | None:
    """Walk up directories to find nixc.toml. Returns None if there is none."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_NAME
        if candidate.is_file():
            return candidate
        parent = path.parent
        if parent == path:
            return None
        path = parent


def load_config(path: Path | None) -> NixcConfig:
    """Parse a nixc.toml file into a NixcConfig; None gives the defaults."""
    config = NixcConfig()
    if path is None:
        return config

    with open(path, "rb") as f:
        data = tomllib.load(f)

    if "diagnostics" in data:
        diag = data["diagnostics"]
        config.diagnostics = DiagnosticsConfig(
            color=diag.get("color", True),
        )

    return config
