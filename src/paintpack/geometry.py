from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class CropRect:
    x: int
    y: int
    width: int
    height: int

    @property
    def box(self) -> tuple[int, int, int, int]:
        """Pillow-style (left, upper, right, lower) box."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.x, self.y, self.width, self.height)


def calculate_crop(source_size: tuple[int, int], target_ratio: tuple[int, int]) -> CropRect:
    """Largest centered rectangle of ``target_ratio`` that fits in ``source_size``.

    Integer arithmetic only. The comparison cross-multiplies instead of dividing,
    so there is no floating point drift. Odd leftovers bias the crop toward the
    top-left corner. A source smaller than one ratio unit in its limiting
    dimension yields a zero-area rectangle rather than an error.
    """
    width, height = source_size
    ratio_w, ratio_h = target_ratio
    if ratio_w <= 0 or ratio_h <= 0:
        raise ValueError(f"target ratio must be positive: {ratio_w}:{ratio_h}")
    if width < 0 or height < 0:
        raise ValueError(f"source size must be non-negative: {width}x{height}")

    if width * ratio_h >= height * ratio_w:
        # Source is at least as wide as the target; height limits.
        scale = height // ratio_h
    else:
        scale = width // ratio_w

    crop_w = ratio_w * scale
    crop_h = ratio_h * scale
    return CropRect(
        x=(width - crop_w) // 2,
        y=(height - crop_h) // 2,
        width=crop_w,
        height=crop_h,
    )


def clamp_rect(source_size: tuple[int, int], x: int, y: int, width: int, height: int) -> CropRect:
    """Clamp a user supplied rectangle so it lies inside ``source_size``."""
    src_w, src_h = source_size
    x = max(0, min(x, src_w - 1))
    y = max(0, min(y, src_h - 1))
    width = max(0, min(width, src_w - x))
    height = max(0, min(height, src_h - y))
    return CropRect(x=x, y=y, width=width, height=height)
