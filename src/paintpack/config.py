from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from paintpack.paths import config_root, default_export_root


@dataclass(slots=True)
class ExportConfig:
    export_root: Path = field(default_factory=default_export_root)
    max_width: int = 1024
    manifest_filename: str = "custompaintings.json"
    image_format: str = "png"


@dataclass(slots=True)
class PreviewConfig:
    image_format: str = "png"


@dataclass(slots=True)
class UIConfig:
    show_banner: bool = True


@dataclass(slots=True)
class AppConfig:
    export: ExportConfig = field(default_factory=ExportConfig)
    preview: PreviewConfig = field(default_factory=PreviewConfig)
    ui: UIConfig = field(default_factory=UIConfig)


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    out = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


def _to_config(data: dict[str, Any]) -> AppConfig:
    export_data = dict(data.get("export") or {})
    root = export_data.pop("export_root", None)
    export = ExportConfig(**export_data)
    if root:
        export.export_root = Path(str(root)).expanduser()
    if export.max_width <= 0:
        raise ValueError(f"export.max_width must be positive: {export.max_width}")
    return AppConfig(
        export=export,
        preview=PreviewConfig(**(data.get("preview") or {})),
        ui=UIConfig(**(data.get("ui") or {})),
    )


def default_config_path() -> Path:
    return config_root() / "config.yaml"


def load_config(config_path: Path | None = None, overrides: dict[str, Any] | None = None) -> AppConfig:
    path = config_path or default_config_path()
    base: dict[str, Any] = {}
    if path.exists():
        loaded = yaml.safe_load(path.read_text())
        if isinstance(loaded, dict):
            base = loaded
    if overrides:
        base = _merge(base, overrides)
    return _to_config(base)


def write_default_config(path: Path | None = None) -> Path:
    target = path or default_config_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    if target.exists():
        return target
    target.write_text(
        yaml.safe_dump(
            {
                "export": {
                    "export_root": str(default_export_root()),
                    "max_width": 1024,
                    "manifest_filename": "custompaintings.json",
                    "image_format": "png",
                },
                "preview": {"image_format": "png"},
                "ui": {"show_banner": True},
            },
            sort_keys=False,
        )
    )
    return target
