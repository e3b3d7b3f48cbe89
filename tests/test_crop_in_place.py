from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from paintpack.errors import DecodeError
from paintpack.media.image_io import cap_width, crop_file_in_place


def test_crop_overwrites_file(tmp_path: Path) -> None:
    path = tmp_path / "photo.png"
    Image.new("RGBA", (200, 100), (0, 0, 0, 255)).save(path)

    rect = crop_file_in_place(path, 10, 20, 50, 30)

    assert rect.as_tuple() == (10, 20, 50, 30)
    with Image.open(path) as img:
        assert img.size == (50, 30)
        assert img.format == "PNG"


def test_crop_keeps_jpeg_format_and_clamps(tmp_path: Path) -> None:
    path = tmp_path / "photo.jpg"
    Image.new("RGB", (120, 80), (255, 0, 0)).save(path)

    rect = crop_file_in_place(path, 100, 60, 500, 500)

    assert rect.as_tuple() == (100, 60, 20, 20)
    with Image.open(path) as img:
        assert img.format == "JPEG"
        assert img.size == (20, 20)


def test_crop_missing_file(tmp_path: Path) -> None:
    with pytest.raises(DecodeError):
        crop_file_in_place(tmp_path / "missing.png", 0, 0, 1, 1)


def test_cap_width_leaves_small_images_alone() -> None:
    img = Image.new("RGBA", (300, 200))
    assert cap_width(img, 1024) is img
    assert cap_width(img, 150).size == (150, 100)
