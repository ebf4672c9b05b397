from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_bonus: int = 100

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        return lines * self.line_clear_bonus
