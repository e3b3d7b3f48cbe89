from __future__ import annotations

from enum import Enum
from math import gcd
from typing import Iterator


class AspectClass(str, Enum):
    SQUARE = "square"
    WIDE = "wide"
    LONG_RECTANGLE = "long_rectangle"
    TALL = "tall"
    TALL_RECTANGLE = "tall_rectangle"

    def sizes(self) -> tuple[tuple[int, int], ...]:
        """Concrete (width, height) size multiples, smallest first."""
        return ASPECT_SIZES[self]

    @property
    def ratio(self) -> tuple[int, int]:
        return ASPECT_SIZES[self][0]

    @property
    def label(self) -> str:
        w, h = self.ratio
        return f"{w}:{h}"


ASPECT_SIZES: dict[AspectClass, tuple[tuple[int, int], ...]] = {
    AspectClass.SQUARE: ((1, 1), (2, 2), (3, 3), (4, 4)),
    AspectClass.WIDE: ((2, 1), (4, 2)),
    AspectClass.LONG_RECTANGLE: ((4, 3),),
    AspectClass.TALL: ((1, 2), (2, 4)),
    AspectClass.TALL_RECTANGLE: ((3, 4),),
}


def iter_classes() -> Iterator[AspectClass]:
    return iter(AspectClass)


def reduce_ratio(width: int, height: int) -> tuple[int, int]:
    g = gcd(width, height)
    if g == 0:
        return (0, 0)
    return (width // g, height // g)


def parse_aspect(value: str) -> AspectClass:
    """Resolve an aspect class from its value, enum name or ``w:h`` label."""
    raw = value.strip().lower().replace("-", "_").replace(" ", "_")
    for aspect in AspectClass:
        if raw in {aspect.value, aspect.name.lower(), aspect.label}:
            return aspect
    # CamelCase spellings such as "LongRectangle".
    squashed = raw.replace("_", "")
    for aspect in AspectClass:
        if squashed == aspect.value.replace("_", ""):
            return aspect
    raise ValueError(f"unknown aspect class: {value}")
