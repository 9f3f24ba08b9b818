"""
Size Table
==========
Maps each exponent on the golden-ratio ladder to a radius and a color.

Adjacency is measured in ladder positions, not by numeric difference: with
the default ladder (1, -1, -2, ...) the exponents 1 and -1 are neighbors.
"""
from __future__ import annotations

import colorsys
from dataclasses import dataclass
from typing import Iterable

from phipacking.config import (
    PHI, EXPONENTS, BASE_RADIUS, COLOR_SATURATION, COLOR_LIGHTNESS
)


@dataclass(frozen=True)
class SizeEntry:
    exponent: int
    radius: float
    color: tuple[float, float, float]  # RGB in [0, 1]

    @property
    def hex_color(self) -> str:
        r, g, b = (round(c * 255) for c in self.color)
        return f"#{r:02x}{g:02x}{b:02x}"

    @property
    def label(self) -> str:
        return f"φ^{self.exponent}"


class SizeTable:
    """Immutable lookup from exponent to radius/color."""

    def __init__(
        self,
        exponents: Iterable[int] = EXPONENTS,
        base_radius: float = BASE_RADIUS,
        ratio: float = PHI
    ) -> None:
        exps = tuple(int(e) for e in exponents)
        if not exps:
            raise ValueError("Size table needs at least one exponent.")
        if len(set(exps)) != len(exps):
            raise ValueError(f"Exponents must be pairwise distinct, got {exps}.")
        if base_radius <= 0.0 or ratio <= 0.0:
            raise ValueError(f"Base radius and ratio must be positive, got {base_radius} and {ratio}.")

        n = len(exps)
        self._entries: tuple[SizeEntry, ...] = tuple(
            SizeEntry(
                exponent=e,
                radius=base_radius * ratio ** e,
                color=colorsys.hls_to_rgb(i / n, COLOR_LIGHTNESS, COLOR_SATURATION),
            )
            for i, e in enumerate(exps)
        )
        self._index: dict[int, int] = {e: i for i, e in enumerate(exps)}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, exponent: int) -> bool:
        return exponent in self._index

    @property
    def exponents(self) -> tuple[int, ...]:
        return tuple(entry.exponent for entry in self._entries)

    def entries(self) -> tuple[SizeEntry, ...]:
        return self._entries

    def index_of(self, exponent: int) -> int:
        try:
            return self._index[exponent]
        except KeyError:
            raise ValueError(f"Exponent {exponent} is not on the size ladder {self.exponents}.") from None

    def entry(self, exponent: int) -> SizeEntry:
        return self._entries[self.index_of(exponent)]

    def radius_of(self, exponent: int) -> float:
        return self.entry(exponent).radius

    def color_of(self, exponent: int) -> tuple[float, float, float]:
        return self.entry(exponent).color

    def adjacent_index_distance(self, e1: int, e2: int) -> int:
        """Distance between two exponents measured in ladder positions."""
        return abs(self.index_of(e1) - self.index_of(e2))

    def are_adjacent(self, e1: int, e2: int) -> bool:
        return self.adjacent_index_distance(e1, e2) == 1


DEFAULT_SIZE_TABLE = SizeTable()
