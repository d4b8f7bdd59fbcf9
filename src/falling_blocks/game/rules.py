from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_base: int = 100
    lines_per_level: int = 10
    base_interval_ms: int = 1000
    interval_step_ms: int = 100
    min_interval_ms: int = 100

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        # Quadratic: a double is worth 4 singles, four lines 16
        return lines * lines * self.line_clear_base

    def level_for_lines(self, total_lines: int) -> int:
        return max(0, total_lines) // self.lines_per_level + 1

    def drop_interval_ms(self, level: int) -> int:
        return max(self.min_interval_ms, self.base_interval_ms - (level - 1) * self.interval_step_ms)
