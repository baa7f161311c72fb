"""
Board State Module - Cell codec and immutable 6x6 board representation.

Row 0 is the staging row: drags may start or end there but it never
changes. Rows 1-5 are playable.

Cell codes pack a piece type with two independent marks:

    code = piece + 10 * restriction + 100 * designation

Empty cells are -1 and carry no marks.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .exceptions import BoardFormatError


TOTAL_ROWS = 6
COLS = 6
PLAY_ROWS_START = 1  # row 0 is the staging row
PIECE_TYPES = 6
EMPTY = -1

Grid = Tuple[Tuple[int, ...], ...]
Position = Tuple[int, int]


class Restriction(IntEnum):
    """Per-cell movement restriction."""
    NONE = 0
    FORBIDDEN = 1       # never stepped on
    TERMINAL_ONLY = 2   # may only be the final step


class Designation(IntEnum):
    """Start / end designation of a cell."""
    NONE = 0
    START = 1
    END = 2


@dataclass(frozen=True)
class Cell:
    """
    Decoded cell value.

    Attributes:
        piece: Piece type 0-5, or EMPTY
        restriction: Movement restriction mark
        designation: Start/end designation mark
    """
    piece: int
    restriction: Restriction = Restriction.NONE
    designation: Designation = Designation.NONE

    @property
    def is_empty(self) -> bool:
        return self.piece == EMPTY


def piece_of(code: int) -> int:
    """Piece type of a cell code (EMPTY for empty cells)."""
    return EMPTY if code < 0 else code % 10


def restriction_of(code: int) -> int:
    return 0 if code < 0 else (code // 10) % 10


def designation_of(code: int) -> int:
    return 0 if code < 0 else code // 100


def decode(code: int) -> Cell:
    """
    Decode an integer cell code.

    Args:
        code: Packed cell code

    Returns:
        Cell with piece type and both marks
    """
    if code < 0:
        return Cell(EMPTY)
    return Cell(
        piece=piece_of(code),
        restriction=Restriction(restriction_of(code)),
        designation=Designation(designation_of(code)),
    )


def encode(piece: int,
           restriction: Restriction = Restriction.NONE,
           designation: Designation = Designation.NONE) -> int:
    """
    Pack a piece type and marks into a cell code.

    Raises:
        ValueError: Piece type out of range, or marks on an empty cell
    """
    if piece == EMPTY:
        if restriction or designation:
            raise ValueError("Empty cells cannot carry marks")
        return EMPTY
    if not 0 <= piece < PIECE_TYPES:
        raise ValueError(f"Piece type out of range: {piece}")
    return piece + int(restriction) * 10 + int(designation) * 100


def is_valid_code(code: int) -> bool:
    """Check that a code lies in the legal domain of decode()."""
    if not isinstance(code, int) or isinstance(code, bool):
        return False
    if code == EMPTY:
        return True
    if code < 0:
        return False
    return (code % 10 < PIECE_TYPES
            and restriction_of(code) <= Restriction.TERMINAL_ONLY
            and designation_of(code) <= Designation.END)


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < TOTAL_ROWS and 0 <= col < COLS


@dataclass(frozen=True)
class BoardState:
    """
    Immutable board state representation.

    Uses tuple-of-tuples of cell codes for hashability and immutability.

    Attributes:
        grid: 6x6 tuple of tuples of cell codes, row 0 first
    """
    grid: Grid

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> 'BoardState':
        """
        Create BoardState from a 2D sequence of cell codes.

        Raises:
            BoardFormatError: Wrong shape or undecodable code
        """
        if len(rows) != TOTAL_ROWS or any(len(row) != COLS for row in rows):
            raise BoardFormatError(
                f"Board must be {TOTAL_ROWS}x{COLS}, got "
                f"{len(rows)}x{[len(row) for row in rows]}"
            )
        for r, row in enumerate(rows):
            for c, code in enumerate(row):
                if not is_valid_code(code):
                    raise BoardFormatError(f"Invalid cell code {code!r} at ({r},{c})")
        return cls(grid=tuple(tuple(row) for row in rows))

    @classmethod
    def from_codes(cls, codes: Iterable[int]) -> 'BoardState':
        """
        Create BoardState from the flat row-major transfer format.

        Args:
            codes: 36 integer cell codes

        Raises:
            BoardFormatError: Wrong length or undecodable code
        """
        flat = list(codes)
        if len(flat) != TOTAL_ROWS * COLS:
            raise BoardFormatError(
                f"Expected {TOTAL_ROWS * COLS} cell codes, got {len(flat)}"
            )
        return cls.from_rows([flat[r * COLS:(r + 1) * COLS] for r in range(TOTAL_ROWS)])

    @classmethod
    def from_pieces(cls, rows: Sequence[Sequence[int]]) -> 'BoardState':
        """Create a mark-free board from piece types (EMPTY allowed)."""
        return cls.from_rows([[encode(p) for p in row] for row in rows])

    def to_codes(self) -> List[int]:
        """Flat row-major list of cell codes."""
        return [code for row in self.grid for code in row]

    def to_list(self) -> List[List[int]]:
        """Convert to mutable 2D list representation."""
        return [list(row) for row in self.grid]

    def get_cell(self, row: int, col: int) -> Optional[int]:
        """Cell code at a position, or None when out of bounds."""
        if in_bounds(row, col):
            return self.grid[row][col]
        return None

    def cell(self, row: int, col: int) -> Cell:
        return decode(self.grid[row][col])

    def with_marks(self, row: int, col: int,
                   restriction: Restriction = Restriction.NONE,
                   designation: Designation = Designation.NONE) -> 'BoardState':
        """Return a copy with the marks at one cell replaced."""
        new_grid = self.to_list()
        new_grid[row][col] = encode(piece_of(new_grid[row][col]), restriction, designation)
        return BoardState(grid=tuple(tuple(r) for r in new_grid))

    def find_designations(self) -> Dict[Designation, List[Position]]:
        """
        Locate all START and END marks.

        Returns:
            Mapping of designation to positions, in row-major order
        """
        found: Dict[Designation, List[Position]] = {
            Designation.START: [],
            Designation.END: [],
        }
        for r in range(TOTAL_ROWS):
            for c in range(COLS):
                mark = designation_of(self.grid[r][c])
                if mark:
                    found[Designation(mark)].append((r, c))
        return found

    def key(self) -> str:
        """Serialized form used by the result cache."""
        return ",".join(str(code) for code in self.to_codes())

    @property
    def rows(self) -> int:
        return len(self.grid)

    @property
    def cols(self) -> int:
        return len(self.grid[0]) if self.rows > 0 else 0

    def __str__(self) -> str:
        lines = []
        for r, row in enumerate(self.grid):
            cells = " ".join("." if piece_of(v) == EMPTY else str(piece_of(v)) for v in row)
            lines.append(f"{'S' if r == 0 else r} | {cells}")
        return "\n".join(lines)
