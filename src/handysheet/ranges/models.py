"""Value objects for cell ranges."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NumericRange:
    """A rectangular block of cells addressed by numbers.

    Columns use spreadsheet numbering (A=1, B=2, ...) and rows are the row
    numbers shown in A1 notation, so ``NumericRange(1, 1, 3, 3)`` is
    ``A1:C3``. Both corners are inclusive.
    """

    start_column: int
    start_row: int
    end_column: int
    end_row: int

    def is_ordered(self) -> bool:
        """True when the start corner is above and left of the end corner."""
        return self.start_column <= self.end_column and self.start_row <= self.end_row

    @property
    def column_count(self) -> int:
        return self.end_column - self.start_column + 1

    @property
    def row_count(self) -> int:
        return self.end_row - self.start_row + 1

    @property
    def cell_count(self) -> int:
        return self.column_count * self.row_count

    def to_literal(self) -> str:
        """Format as an A1 range such as ``"B2:D4"``."""
        from .codec import numeric_range_to_literal

        return numeric_range_to_literal(
            self.start_column, self.start_row, self.end_column, self.end_row
        )

    def __str__(self) -> str:
        return (
            f"{self.start_column}, {self.start_row}, "
            f"{self.end_column}, {self.end_row}"
        )
