"""Ranking engine and leaderboard service."""

from src.ranking.leaderboard import Leaderboard
from src.ranking.rankings import composite_score, rank_by_composite, rank_by_dimension

__all__ = ["Leaderboard", "composite_score", "rank_by_composite", "rank_by_dimension"]
