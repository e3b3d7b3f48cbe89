from __future__ import annotations

from pathlib import Path

from PIL import Image

from paintpack.aspect import AspectClass, iter_classes
from paintpack.geometry import calculate_crop
from paintpack.media.image_io import crop_to, decode_image, to_data_uri


def generate_cropped_images(path: str | Path) -> list[Image.Image]:
    """One crop per aspect class, in declaration order, from a single decode.

    The buffers are transient; callers encode them for display and drop them.
    """
    img = decode_image(path)
    return [crop_to(img, calculate_crop(img.size, aspect.ratio)) for aspect in iter_classes()]


def crop_single_image(path: str | Path, aspect: AspectClass) -> Image.Image:
    img = decode_image(path)
    return crop_to(img, calculate_crop(img.size, aspect.ratio))


def generate_data_uris(images: list[Image.Image], fmt: str = "png") -> list[str]:
    return [to_data_uri(img, fmt) for img in images]


def preview_data_uris(path: str | Path, fmt: str = "png") -> list[str]:
    return generate_data_uris(generate_cropped_images(path), fmt)
