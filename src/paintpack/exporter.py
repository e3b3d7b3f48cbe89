from __future__ import annotations

from dataclasses import dataclass, field
from importlib import resources
import logging
from pathlib import Path
import re
from typing import Sequence

from paintpack.catalog import ExportItem
from paintpack.errors import ContractViolation, ExportIOError, ImageTooSmallError
from paintpack.geometry import calculate_crop
from paintpack.manifest import PackMetadata, Painting, PaintingBundle, write_manifest
from paintpack.media.image_io import cap_width, crop_to, decode_image, save_image

logger = logging.getLogger(__name__)

MAX_WIDTH = 1024
MANIFEST_FILENAME = "custompaintings.json"
ICON_NAME = "icon.png"

_PACK_ID_DROP = re.compile(r"[^a-z0-9_]")


@dataclass(slots=True)
class ExportResult:
    pack_dir: Path
    manifest_path: Path
    icon_path: Path
    bundle: PaintingBundle
    images: list[Path] = field(default_factory=list)


def sanitize_name(value: str) -> str:
    return value.replace(" ", "_")


def sanitize_pack_id(value: str) -> str:
    return _PACK_ID_DROP.sub("", value.lower().replace(" ", "_"))


def default_icon_bytes() -> bytes:
    return resources.files("paintpack").joinpath("assets", ICON_NAME).read_bytes()


def _check_items(items: Sequence[ExportItem]) -> None:
    for idx, item in enumerate(items):
        missing = item.missing_fields()
        if missing:
            raise ContractViolation(
                f"export item {idx} ({item.source_path}) is missing {', '.join(missing)}"
            )


def _mkdir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ExportIOError(path, exc.strerror or str(exc)) from exc


def _write_bytes(path: Path, data: bytes) -> None:
    try:
        path.write_bytes(data)
    except OSError as exc:
        raise ExportIOError(path, exc.strerror or str(exc)) from exc


def write_images(
    bundle: PaintingBundle,
    items: Sequence[ExportItem],
    images_dir: Path,
    max_width: int = MAX_WIDTH,
    image_format: str = "png",
) -> list[Path]:
    _mkdir(images_dir)
    ext = image_format.lower()
    written: list[Path] = []

    for item in items:
        # Re-decode from disk; previews are never kept around for export.
        source = decode_image(item.source_path)
        rect = calculate_crop(source.size, item.aspect.ratio)
        if rect.is_empty:
            raise ImageTooSmallError(item.source_path, source.size, item.aspect.ratio)
        painting = cap_width(crop_to(source, rect), max_width)
        sanitized_id = sanitize_name(item.identifier or "")
        sanitized_stem = sanitize_name(item.filename_stem or "")

        for width, height in item.sizes():
            filename = f"{sanitized_id}_{sanitized_stem}_{width}x{height}.{ext}"
            target = images_dir / filename
            save_image(painting, target, image_format)
            written.append(target)
            bundle.add_painting(
                Painting(
                    id=f"{sanitized_id}_{width}x{height}",
                    filename=filename,
                    name=item.display_name or "",
                    artist=item.attribution or "",
                    width=width,
                    height=height,
                )
            )
    return written


def export(
    pack_name: str,
    version: str,
    pack_id: str,
    description: str,
    items: Sequence[ExportItem],
    export_root: str | Path,
    *,
    max_width: int = MAX_WIDTH,
    manifest_filename: str = MANIFEST_FILENAME,
    image_format: str = "png",
) -> ExportResult:
    """Write a pack directory with images, manifest and icon.

    Items are exported in order. Any failure aborts the whole export and leaves
    files already written in place.
    """
    _check_items(items)

    pack_dir = Path(export_root) / sanitize_name(pack_name)
    bundle = PaintingBundle(
        metadata=PackMetadata(
            name=pack_name,
            version=version,
            id=sanitize_pack_id(pack_id),
            description=description,
        )
    )
    logger.debug("exporting %d item(s) to %s", len(items), pack_dir)

    images = write_images(bundle, items, pack_dir / "images", max_width, image_format)

    manifest_path = pack_dir / manifest_filename
    try:
        write_manifest(bundle, manifest_path)
    except OSError as exc:
        raise ExportIOError(manifest_path, exc.strerror or str(exc)) from exc

    icon_path = pack_dir / ICON_NAME
    _write_bytes(icon_path, default_icon_bytes())

    logger.debug("export finished: %d painting record(s)", bundle.painting_count())
    return ExportResult(
        pack_dir=pack_dir,
        manifest_path=manifest_path,
        icon_path=icon_path,
        images=images,
        bundle=bundle,
    )
