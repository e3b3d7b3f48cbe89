from __future__ import annotations

from dataclasses import dataclass, field
import json
from pathlib import Path
import random
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

SCHEMA_URI = "http://json-schema.org/draft-07/schema#"
DEFAULT_VERSION = "1.0.0"
DEFAULT_DESCRIPTION = "A list of paintings in the gallery"
DEFAULT_ID_RANGE = (56000, 128000)


def check_no_input(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


class PackMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    schema_uri: str = Field(default=SCHEMA_URI, alias="$schema")
    version: str = DEFAULT_VERSION
    id: str
    description: str = DEFAULT_DESCRIPTION

    @classmethod
    def default(cls) -> PackMetadata:
        """Scaffold used before the user supplies pack metadata."""
        low, high = DEFAULT_ID_RANGE
        return cls(name="Default", id=str(random.randint(low, high)))

    def set_name(self, value: str) -> None:
        valid = check_no_input(value)
        if valid is not None:
            self.name = valid

    def set_version(self, value: str) -> None:
        valid = check_no_input(value)
        if valid is not None:
            self.version = valid

    def set_id(self, value: str) -> None:
        valid = check_no_input(value)
        if valid is not None:
            self.id = valid

    def set_description(self, value: str) -> None:
        valid = check_no_input(value)
        if valid is not None:
            self.description = valid


class Painting(BaseModel):
    id: str
    filename: str
    name: str
    artist: str
    width: int
    height: int


@dataclass(slots=True)
class PaintingBundle:
    metadata: PackMetadata
    paintings: list[Painting] = field(default_factory=list)

    def add_painting(self, painting: Painting) -> None:
        self.paintings.append(painting)

    def painting_count(self) -> int:
        return len(self.paintings)

    def separate(self) -> tuple[PackMetadata, list[Painting]]:
        return self.metadata.model_copy(), list(self.paintings)

    def to_dict(self) -> dict[str, Any]:
        out = self.metadata.model_dump(by_alias=True)
        out["paintings"] = [p.model_dump() for p in self.paintings]
        return out

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PaintingBundle:
        payload = dict(data)
        rows = payload.pop("paintings", None) or []
        return cls(
            metadata=PackMetadata.model_validate(payload),
            paintings=[Painting.model_validate(r) for r in rows],
        )

    @classmethod
    def from_json(cls, text: str) -> PaintingBundle:
        return cls.from_dict(json.loads(text))


def write_manifest(bundle: PaintingBundle, path: Path) -> Path:
    path.write_text(bundle.to_json(), encoding="utf-8")
    return path


def load_manifest(path: Path) -> PaintingBundle:
    return PaintingBundle.from_json(path.read_text(encoding="utf-8"))
