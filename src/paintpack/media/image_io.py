from __future__ import annotations

import base64
import io
import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from paintpack.errors import DecodeError, ExportIOError
from paintpack.geometry import CropRect, clamp_rect

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = {
    ".jpg",
    ".jpeg",
    ".png",
    ".webp",
    ".bmp",
    ".gif",
    ".tif",
    ".tiff",
}


def _open(path: Path) -> Image.Image:
    try:
        with Image.open(path) as img:
            img.load()
            fmt = img.format
            out = img.copy()
    except FileNotFoundError as exc:
        raise DecodeError(path, "file not found") from exc
    except UnidentifiedImageError as exc:
        raise DecodeError(path, "unsupported or unrecognized format") from exc
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise DecodeError(path, str(exc) or type(exc).__name__) from exc
    out.format = fmt
    return out


def decode_image(path: str | Path) -> Image.Image:
    """Decode ``path`` into an RGBA pixel grid."""
    img = _open(Path(path))
    if img.mode != "RGBA":
        img = img.convert("RGBA")
    return img


def encode_image(img: Image.Image, fmt: str = "png") -> bytes:
    buffer = io.BytesIO()
    img.save(buffer, format=fmt.upper())
    return buffer.getvalue()


def to_data_uri(img: Image.Image, fmt: str = "png") -> str:
    """Inline ``data:`` URI for ``img``; an empty image yields ``""``."""
    if img.width == 0 or img.height == 0:
        return ""
    payload = base64.b64encode(encode_image(img, fmt)).decode("ascii")
    return f"data:image/{fmt.lower()};base64,{payload}"


def crop_to(img: Image.Image, rect: CropRect) -> Image.Image:
    return img.crop(rect.box)


def cap_width(img: Image.Image, max_width: int) -> Image.Image:
    """Downscale so width is at most ``max_width``, keeping the aspect ratio."""
    if img.width <= max_width:
        return img
    height = max(1, round(img.height * max_width / img.width))
    return img.resize((max_width, height), Image.Resampling.LANCZOS)


def save_image(img: Image.Image, path: Path, fmt: str = "png") -> None:
    try:
        path.write_bytes(encode_image(img, fmt))
    except OSError as exc:
        raise ExportIOError(path, exc.strerror or str(exc)) from exc
    logger.debug("wrote %s (%dx%d)", path, img.width, img.height)


def crop_file_in_place(path: str | Path, x: int, y: int, width: int, height: int) -> CropRect:
    """Crop the image at ``path`` and overwrite it in its original format."""
    target = Path(path)
    img = _open(target)
    rect = clamp_rect(img.size, x, y, width, height)
    fmt = img.format or (target.suffix.lstrip(".") or "png")
    cropped = crop_to(img, rect)
    try:
        cropped.save(target, format=fmt)
    except OSError as exc:
        raise ExportIOError(target, exc.strerror or str(exc)) from exc
    logger.debug("cropped %s to %s", target, rect.as_tuple())
    return rect
