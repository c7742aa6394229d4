"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Checkers is played on 8x8 here. Just in case we want to try the 10x10 variant, make it adjustable
BOARD_DIMENSIONS = (8, 8)

# (delta_row, delta_col)
Vector = tuple[int, int]


@dataclass(frozen=True)
class Square:
    row: int
    col: int

    @classmethod
    def from_key(cls, key: str) -> Square:
        """Keys look like 'row,col': '0,1' - '7,6'"""
        row, col = key.split(",")
        return cls(int(row), int(col))

    def to_key(self) -> str:
        return f"{self.row},{self.col}"

    @classmethod
    def from_dict(cls, data: dict[str, int]) -> Square:
        return cls(int(data["row"]), int(data["col"]))

    def to_dict(self) -> dict[str, int]:
        return {"row": self.row, "col": self.col}

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_DIMENSIONS[0]) and (
            0 <= self.col < BOARD_DIMENSIONS[1]
        )

    def is_dark(self) -> bool:
        """Only the dark squares are ever played on."""
        return (self.row + self.col) % 2 == 1

    def step(self, direction: Vector, distance: int = 1) -> Square:
        """The square `distance` steps away along `direction`. May lie outside the board."""
        d_row, d_col = direction
        return Square(self.row + d_row * distance, self.col + d_col * distance)
