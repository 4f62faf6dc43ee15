from .curves import CompositeCurves, composite_curve, composite_curves
from .stats import exchanger_table, solution_stats, stream_balance

__all__ = [
    'CompositeCurves',
    'composite_curve',
    'composite_curves',
    'exchanger_table',
    'solution_stats',
    'stream_balance',
]
