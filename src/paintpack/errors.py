from __future__ import annotations

from pathlib import Path


class PaintpackError(Exception):
    """Base class for errors raised by paintpack."""


class DecodeError(PaintpackError):
    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"failed to decode image {self.path}: {reason}")


class ContractViolation(PaintpackError):
    """An export item is missing metadata the exporter requires."""


class ExportIOError(PaintpackError):
    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"failed to write {self.path}: {reason}")


class ImageTooSmallError(PaintpackError):
    """The source is smaller than one unit of the requested aspect ratio."""

    def __init__(self, path: str | Path, size: tuple[int, int], ratio: tuple[int, int]) -> None:
        self.path = str(path)
        self.size = size
        self.ratio = ratio
        super().__init__(
            f"image {self.path} ({size[0]}x{size[1]}) is too small for a {ratio[0]}:{ratio[1]} crop"
        )
