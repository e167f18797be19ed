"""
Grid line drawing for the terminal board.
"""

from typing import Optional, Set, Tuple

from .config import DisplayConfig
from .screen import Screen

Point = Tuple[int, int]


class Line:
    """
    A straight horizontal or vertical line between two (row, col) points.

    Drawing adds every point to a set owned by the caller. Where a later
    line crosses a point already in the set an intersection character is
    drawn instead. Use a new set for each board.
    """

    def __init__(self, start: Point, stop: Point, config: Optional[DisplayConfig] = None):
        if start[0] != stop[0] and start[1] != stop[1]:
            raise ValueError(f"Line from {start} to {stop} is not straight")
        self.start = start
        self.stop = stop
        self.config = config or DisplayConfig()

    @property
    def is_horizontal(self) -> bool:
        return self.start[0] == self.stop[0]

    def points(self):
        """All (row, col) points on the line, start to stop."""
        start_row, start_col = self.start
        stop_row, stop_col = self.stop
        if self.is_horizontal:
            return [(start_row, col) for col in range(start_col, stop_col + 1)]
        return [(row, start_col) for row in range(start_row, stop_row + 1)]

    def draw(self, screen: Screen, drawn: Set[Point]) -> None:
        """
        Draw the line.

        Args:
            screen: Where to draw.
            drawn: Points already drawn on this board. Updated in place.
        """
        char = self.config.HORIZONTAL_CHAR if self.is_horizontal else self.config.VERTICAL_CHAR
        for point in self.points():
            if point in drawn:
                screen.write_at(*point, self.config.INTERSECTION_CHAR)
            else:
                screen.write_at(*point, char)
                drawn.add(point)
