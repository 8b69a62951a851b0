from __future__ import annotations

XP_PER_SCORE_POINT = 10
XP_PER_LEVEL = 100


def xp_from_best_scores(total_best_score: int) -> int:
    return max(0, total_best_score) * XP_PER_SCORE_POINT


def level_for_xp(xp: int) -> int:
    return max(1, xp // XP_PER_LEVEL + 1)
