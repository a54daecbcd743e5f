"""Navigation grid and A* path search over walkable, swimmable or flyable cells."""

from __future__ import annotations

import copy
import enum
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

Position = Tuple[int, int]


class MovementType(enum.Enum):
    """How an entity moves across the grid."""

    WALK = "walk"
    SWIM = "swim"
    FLY = "fly"


@dataclass(eq=False)
class NavigationCell:
    """A single cell of a navigation grid, plus the A* bookkeeping for it."""

    position: Position = (0, 0)
    is_walkable: bool = False
    is_swimmable: bool = False
    is_flyable: bool = False
    move_cost: float = 1.0
    parent: Optional["NavigationCell"] = field(default=None, repr=False)
    total_estimated_cost: float = 0.0
    distance_from_start: float = 0.0
    heuristic_distance: float = 0.0

    def allows(self, movement_type: MovementType) -> bool:
        """Whether an entity moving this way may enter the cell."""
        if movement_type is MovementType.WALK:
            return self.is_walkable
        if movement_type is MovementType.SWIM:
            return self.is_swimmable
        return self.is_flyable


def chebyshev_distance(a: Sequence[int], b: Sequence[int]) -> float:
    """Chebyshev distance between two grid positions."""
    return float(max(abs(a[0] - b[0]), abs(a[1] - b[1])))


class AStar:
    """A* search over a flat, row-major list of navigation cells."""

    def __init__(self, cells: List[NavigationCell], width: int, height: int) -> None:
        self._cells = cells
        self._width = width
        self._height = height

    def _cell_at(self, x: int, y: int) -> NavigationCell:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"position ({x}, {y}) is outside the navigation grid")
        index = x + y * self._width
        if index >= len(self._cells):
            raise IndexError(f"position ({x}, {y}) has no navigation cell")
        return self._cells[index]

    def _neighbors(self, node: NavigationCell, movement_type: MovementType) -> Iterable[NavigationCell]:
        px, py = node.position
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue
                x, y = px + dx, py + dy
                if 0 <= x < self._width and 0 <= y < self._height:
                    neighbor = self._cells[x + y * self._width]
                    if neighbor.allows(movement_type):
                        yield neighbor

    @staticmethod
    def _reconstruct(end_node: NavigationCell) -> List[NavigationCell]:
        path = []
        node: Optional[NavigationCell] = end_node
        while node is not None:
            path.append(copy.copy(node))
            node = node.parent
        path.reverse()
        return path

    def find_path(
        self, start: Sequence[int], end: Sequence[int], movement_type: MovementType
    ) -> List[NavigationCell]:
        """Return copies of the cells from start to end, or an empty list if unreachable."""
        end_position = (end[0], end[1])
        first = self._cell_at(start[0], start[1])
        first.parent = None
        first.distance_from_start = 0.0

        open_list: List[NavigationCell] = [first]
        closed: set = set()

        while open_list:
            current = min(open_list, key=lambda cell: cell.move_cost)
            if tuple(current.position) == end_position:
                return self._reconstruct(current)

            open_list.remove(current)
            closed.add(id(current))

            for neighbor in self._neighbors(current, movement_type):
                if id(neighbor) in closed:
                    continue

                tentative = current.distance_from_start + neighbor.move_cost
                if neighbor not in open_list:
                    open_list.append(neighbor)
                elif tentative >= neighbor.distance_from_start:
                    continue

                neighbor.parent = current
                neighbor.distance_from_start = tentative
                neighbor.heuristic_distance = chebyshev_distance(current.position, neighbor.position)
                neighbor.total_estimated_cost = neighbor.distance_from_start + neighbor.heuristic_distance

        return []


@dataclass
class NavigationGrid:
    """Navigation data for a map, laid out row by row."""

    width: int = 0
    height: int = 0
    cells: List[NavigationCell] = field(default_factory=list)

    def find_path(
        self, start: Sequence[int], end: Sequence[int], movement_type: MovementType
    ) -> List[NavigationCell]:
        """Find a path between two grid positions; empty if there is none."""
        return AStar(self.cells, self.width, self.height).find_path(start, end, movement_type)