from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    # Points for 1..4 rows in one lock, multiplied by the level (NES table)
    line_clear_scores: tuple[int, int, int, int] = (40, 100, 300, 1200)
    lines_per_level: int = 10
    levels_per_gravity_step: int = 5

    def score_for_lines(self, lines: int, level: int = 1) -> int:
        if lines <= 0:
            return 0
        return self.line_clear_scores[min(lines, 4) - 1] * level

    def level_for_lines(self, total_lines: int) -> int:
        """ceil((total_lines + 1) / lines_per_level), computed on integers."""
        return -(-(total_lines + 1) // self.lines_per_level)

    def gravity_interval(self, level: int) -> int:
        """Ticks between two gravity steps at ``level``."""
        return max(1, -(-level // self.levels_per_gravity_step))
