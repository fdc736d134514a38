from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringRules:
    points_per_cell: int = 10
    line_clear_base: int = 500

    def placement_score(self, cells: int) -> int:
        return self.points_per_cell * max(0, int(cells))

    def line_bonus(self, lines: int) -> int:
        # Quadratic combo: 1 line=500, 2=2000, 3=4500, 4=8000
        if lines <= 0:
            return 0
        return self.line_clear_base * lines * lines
