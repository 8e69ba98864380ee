from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Protocol, Sequence, Tuple, TypeVar


class Variant(IntEnum):
    NONE = 0
    Z = 1
    S = 2
    I = 3  # line
    T = 4
    O = 5  # square
    L = 6
    J = 7  # mirrored L


Coordinate = Tuple[int, int]

T = TypeVar("T")


class RandomSource(Protocol):
    """Anything that can pick one element of a sequence (e.g. ``random.Random``)."""

    def choice(self, seq: Sequence[T]) -> T: ...


# Offsets are (dx, dy) around the rotation pivot, dy pointing up.
BASE_CELLS = {
    Variant.NONE: ((0, 0), (0, 0), (0, 0), (0, 0)),
    Variant.Z: ((0, -1), (0, 0), (-1, 0), (-1, 1)),
    Variant.S: ((0, -1), (0, 0), (1, 0), (1, 1)),
    Variant.I: ((0, -1), (0, 0), (0, 1), (0, 2)),
    Variant.T: ((-1, 0), (0, 0), (1, 0), (0, 1)),
    Variant.O: ((0, 0), (1, 0), (0, 1), (1, 1)),
    Variant.L: ((-1, -1), (0, -1), (0, 0), (0, 1)),
    Variant.J: ((1, -1), (0, -1), (0, 0), (0, 1)),
}

PLAYABLE_VARIANTS: Tuple[Variant, ...] = tuple(v for v in Variant if v is not Variant.NONE)


@dataclass(frozen=True)
class Piece:
    variant: Variant = Variant.NONE
    cells: Tuple[Coordinate, ...] = BASE_CELLS[Variant.NONE]

    def __post_init__(self) -> None:
        if len(self.cells) != 4:
            raise ValueError(f"a piece has exactly 4 cells, got {len(self.cells)}")

    @classmethod
    def of(cls, variant: Variant) -> "Piece":
        return cls(Variant(variant), BASE_CELLS[Variant(variant)])

    @property
    def is_empty(self) -> bool:
        return self.variant == Variant.NONE

    def rotate_left(self) -> "Piece":
        # Square is exempt from rotation
        if self.variant == Variant.O:
            return self
        return Piece(self.variant, tuple((y, -x) for x, y in self.cells))

    def rotate_right(self) -> "Piece":
        if self.variant == Variant.O:
            return self
        return Piece(self.variant, tuple((-y, x) for x, y in self.cells))

    def min_x(self) -> int:
        return min(x for x, _ in self.cells)

    def min_y(self) -> int:
        return min(y for _, y in self.cells)

    def cells_at(self, origin_x: int, origin_y: int) -> List[Coordinate]:
        """Absolute board cells with the piece origin at ``(origin_x, origin_y)``.

        Board rows count up from the bottom while offsets point the other way,
        so the vertical offset is subtracted.
        """
        return [(origin_x + dx, origin_y - dy) for dx, dy in self.cells]


def spawn_random(rng: RandomSource) -> Piece:
    return Piece.of(rng.choice(PLAYABLE_VARIANTS))
