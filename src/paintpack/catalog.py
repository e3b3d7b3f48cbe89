from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from paintpack.aspect import AspectClass

_UNSET = object()


@dataclass(slots=True)
class ExportItem:
    source_path: str
    aspect: AspectClass
    identifier: str | None = None
    filename_stem: str | None = None
    display_name: str | None = None
    attribution: str | None = None
    included: bool = True

    def sizes(self) -> tuple[tuple[int, int], ...]:
        return self.aspect.sizes()

    def missing_fields(self) -> list[str]:
        missing: list[str] = []
        if not self.identifier:
            missing.append("identifier")
        if not self.filename_stem:
            missing.append("filename_stem")
        return missing


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return value if value.strip() else None


class ExportCatalog:
    """Pending export entries, in the order the user assigned them."""

    def __init__(self) -> None:
        self._items: list[ExportItem] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ExportItem]:
        return iter(self._items)

    def add(self, source_path: str, aspect: AspectClass) -> ExportItem:
        existing = self.find(source_path, aspect)
        if existing is not None:
            return existing
        item = ExportItem(source_path=source_path, aspect=aspect)
        self._items.append(item)
        return item

    def find(self, source_path: str, aspect: AspectClass) -> ExportItem | None:
        for item in self._items:
            if item.source_path == source_path and item.aspect == aspect:
                return item
        return None

    def remove(self, item: ExportItem) -> None:
        self._items = [x for x in self._items if x is not item]

    def update(
        self,
        item: ExportItem,
        *,
        identifier: str | None | object = _UNSET,
        filename_stem: str | None | object = _UNSET,
        display_name: str | None | object = _UNSET,
        attribution: str | None | object = _UNSET,
    ) -> ExportItem:
        # Omitted fields stay as they are; blank strings clear the field.
        if identifier is not _UNSET:
            item.identifier = _clean(identifier)  # type: ignore[arg-type]
        if filename_stem is not _UNSET:
            item.filename_stem = _clean(filename_stem)  # type: ignore[arg-type]
        if display_name is not _UNSET:
            item.display_name = _clean(display_name)  # type: ignore[arg-type]
        if attribution is not _UNSET:
            item.attribution = _clean(attribution)  # type: ignore[arg-type]
        return item

    def set_included(self, item: ExportItem, included: bool) -> None:
        item.included = bool(included)

    def included_items(self) -> list[ExportItem]:
        return [item for item in self._items if item.included]

    def clear(self) -> None:
        self._items.clear()
