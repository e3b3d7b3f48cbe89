from __future__ import annotations

import json
from pathlib import Path

from PIL import Image
from typer.testing import CliRunner
import yaml

from paintpack.cli import app

runner = CliRunner()


def _config(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.safe_dump({"export": {"export_root": str(tmp_path / "exports")}, "ui": {"show_banner": False}})
    )
    return path


def test_geometry_json(tmp_path: Path) -> None:
    res = runner.invoke(app, ["--config", str(_config(tmp_path)), "geometry", "1600", "900", "--json"])

    assert res.exit_code == 0, res.output
    data = json.loads(res.output)
    assert data["square"] == [350, 0, 900, 900]
    assert data["wide"] == [0, 50, 1600, 800]
    assert data["long_rectangle"] == [200, 0, 1200, 900]


def test_sizes_json(tmp_path: Path) -> None:
    res = runner.invoke(app, ["--config", str(_config(tmp_path)), "sizes", "--json"])

    assert res.exit_code == 0, res.output
    rows = json.loads(res.output)
    assert rows[0] == {"aspect": "square", "ratio": "1:1", "sizes": ["1x1", "2x2", "3x3", "4x4"]}


def test_preview_missing_file_exits_nonzero(tmp_path: Path) -> None:
    res = runner.invoke(app, ["--config", str(_config(tmp_path)), "preview", str(tmp_path / "nope.png")])
    assert res.exit_code == 1


def test_crop_command(tmp_path: Path) -> None:
    img = tmp_path / "a.png"
    Image.new("RGBA", (100, 100)).save(img)

    res = runner.invoke(app, ["--config", str(_config(tmp_path)), "crop", str(img), "0", "0", "40", "20", "--json"])

    assert res.exit_code == 0, res.output
    assert json.loads(res.output)["crop"] == [0, 0, 40, 20]
    with Image.open(img) as out:
        assert out.size == (40, 20)


def test_export_command(tmp_path: Path) -> None:
    Image.new("RGBA", (200, 100)).save(tmp_path / "a.png")
    pack = tmp_path / "pack.yaml"
    pack.write_text(
        yaml.safe_dump(
            {"name": "Cli Pack", "id": "cli", "items": [{"source": "a.png", "aspect": "wide", "id": "a", "filename": "a"}]}
        )
    )

    res = runner.invoke(app, ["--config", str(_config(tmp_path)), "export", str(pack), "--json"])

    assert res.exit_code == 0, res.output
    payload = json.loads(res.output)
    assert payload["images"] == 2
    assert Path(payload["pack_dir"]) == tmp_path / "exports" / "Cli_Pack"


def test_export_missing_metadata_fails(tmp_path: Path) -> None:
    Image.new("RGBA", (200, 100)).save(tmp_path / "a.png")
    pack = tmp_path / "pack.yaml"
    pack.write_text(yaml.safe_dump({"name": "Bad", "items": [{"source": "a.png", "aspect": "wide"}]}))

    res = runner.invoke(app, ["--config", str(_config(tmp_path)), "export", str(pack)])

    assert res.exit_code == 1
    assert not (tmp_path / "exports" / "Bad").exists()


def test_export_too_small_source_fails_cleanly(tmp_path: Path) -> None:
    Image.new("RGBA", (1, 1)).save(tmp_path / "dot.png")
    pack = tmp_path / "pack.yaml"
    pack.write_text(
        yaml.safe_dump({"name": "Tiny", "items": [{"source": "dot.png", "aspect": "wide", "id": "a", "filename": "a"}]})
    )

    res = runner.invoke(app, ["--config", str(_config(tmp_path)), "export", str(pack)])

    assert res.exit_code == 1
    assert "export failed" in res.output


def test_pack_file_with_string_included_fails(tmp_path: Path) -> None:
    pack = tmp_path / "pack.yaml"
    pack.write_text(yaml.safe_dump({"name": "P", "items": [{"source": "a.png", "included": "no"}]}))

    res = runner.invoke(app, ["--config", str(_config(tmp_path)), "export", str(pack)])

    assert res.exit_code == 1
