from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from paintpack.config import default_config_path, load_config, write_default_config


def test_defaults_without_file(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / "missing.yaml")
    assert cfg.export.max_width == 1024
    assert cfg.export.manifest_filename == "custompaintings.json"
    assert cfg.export.image_format == "png"
    assert cfg.export.export_root == tmp_path / "xdg-data" / "paintpack" / "exports"
    assert cfg.preview.image_format == "png"


def test_default_config_round_trips(tmp_path: Path) -> None:
    path = write_default_config()
    assert path == default_config_path()
    assert path.parent == tmp_path / "xdg-config" / "paintpack"

    path.write_text(yaml.safe_dump({"export": {"max_width": 512, "export_root": "~/packs"}}))
    assert write_default_config() == path
    cfg = load_config(path)
    assert cfg.export.max_width == 512
    assert cfg.export.export_root == Path("~/packs").expanduser()


def test_overrides_merge_into_file_values(tmp_path: Path) -> None:
    path = tmp_path / "cfg.yaml"
    path.write_text(yaml.safe_dump({"export": {"max_width": 512}, "ui": {"show_banner": False}}))

    cfg = load_config(path, overrides={"export": {"manifest_filename": "pack.json"}})

    assert cfg.export.max_width == 512
    assert cfg.export.manifest_filename == "pack.json"
    assert cfg.ui.show_banner is False


def test_invalid_max_width_rejected(tmp_path: Path) -> None:
    path = tmp_path / "cfg.yaml"
    path.write_text(yaml.safe_dump({"export": {"max_width": 0}}))
    with pytest.raises(ValueError):
        load_config(path)
