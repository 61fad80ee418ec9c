from .score_calculator import ScoreCalculator, compute_marks, classify

__all__ = ["ScoreCalculator", "compute_marks", "classify"]
