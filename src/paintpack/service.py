from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from paintpack.aspect import AspectClass, iter_classes, parse_aspect
from paintpack.catalog import ExportCatalog, ExportItem
from paintpack.config import AppConfig
from paintpack.exporter import ExportResult, export
from paintpack.geometry import CropRect, calculate_crop
from paintpack.manifest import PackMetadata
from paintpack.media.image_io import crop_file_in_place, to_data_uri
from paintpack.preview import crop_single_image, generate_cropped_images, generate_data_uris


def _opt(value: Any) -> str | None:
    return None if value is None else str(value)


class PaintpackService:
    """State and entry points used by a calling shell (GUI or CLI)."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config
        self.catalog = ExportCatalog()
        self.pack = PackMetadata.default()

    def load_previews(self, path: str | Path) -> list[dict[str, Any]]:
        fmt = self.config.preview.image_format
        images = generate_cropped_images(path)
        uris = generate_data_uris(images, fmt)
        return [
            {
                "aspect": aspect.value,
                "ratio": aspect.label,
                "width": img.width,
                "height": img.height,
                "data_uri": uri,
            }
            for aspect, img, uri in zip(iter_classes(), images, uris)
        ]

    def preview(self, path: str | Path, aspect: AspectClass) -> str:
        return to_data_uri(crop_single_image(path, aspect), self.config.preview.image_format)

    def geometry(self, width: int, height: int) -> dict[AspectClass, CropRect]:
        return {aspect: calculate_crop((width, height), aspect.ratio) for aspect in iter_classes()}

    def crop_image(self, path: str | Path, x: int, y: int, width: int, height: int) -> CropRect:
        return crop_file_in_place(path, x, y, width, height)

    def assign(self, path: str | Path, aspect: AspectClass, **metadata: str | None) -> ExportItem:
        item = self.catalog.add(str(path), aspect)
        if metadata:
            self.catalog.update(item, **metadata)
        return item

    def set_pack_metadata(
        self,
        name: str = "",
        version: str = "",
        pack_id: str = "",
        description: str = "",
    ) -> PackMetadata:
        self.pack.set_name(name)
        self.pack.set_version(version)
        self.pack.set_id(pack_id)
        self.pack.set_description(description)
        return self.pack

    def load_pack_file(self, path: Path) -> int:
        """Load pack metadata and items from a YAML pack file into the catalog.

        Relative source paths resolve against the pack file's directory.
        Returns the number of items loaded.
        """
        data = yaml.safe_load(path.read_text())
        if not isinstance(data, dict):
            raise ValueError(f"pack file must be a mapping: {path}")
        self.set_pack_metadata(
            name=str(data.get("name") or ""),
            version=str(data.get("version") or ""),
            pack_id=str(data.get("id") or ""),
            description=str(data.get("description") or ""),
        )
        base = path.parent
        rows = data.get("items") or []
        if not isinstance(rows, list):
            raise ValueError(f"pack file items must be a list: {path}")
        for idx, row in enumerate(rows):
            if not isinstance(row, dict):
                raise ValueError(f"pack file item {idx} must be a mapping: {path}")
            if not isinstance(row.get("included", True), bool):
                raise ValueError(f"pack file item {idx}: included must be true or false")
        for row in rows:
            source = Path(str(row["source"])).expanduser()
            if not source.is_absolute():
                source = base / source
            item = self.assign(
                source,
                parse_aspect(str(row.get("aspect", "square"))),
                identifier=_opt(row.get("id")),
                filename_stem=_opt(row.get("filename")),
                display_name=_opt(row.get("name")),
                attribution=_opt(row.get("artist")),
            )
            self.catalog.set_included(item, row.get("included", True))
        return len(rows)

    def export(self, output_root: str | Path | None = None) -> ExportResult:
        cfg = self.config.export
        return export(
            self.pack.name,
            self.pack.version,
            self.pack.id,
            self.pack.description,
            self.catalog.included_items(),
            output_root if output_root is not None else cfg.export_root,
            max_width=cfg.max_width,
            manifest_filename=cfg.manifest_filename,
            image_format=cfg.image_format,
        )
