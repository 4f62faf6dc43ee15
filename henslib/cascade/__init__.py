from .cascade import HeatTargets, compute_targets, solve_cascade
from .intervals import TemperatureInterval, build_intervals, shifted_breakpoints

__all__ = [
    'HeatTargets',
    'TemperatureInterval',
    'build_intervals',
    'compute_targets',
    'shifted_breakpoints',
    'solve_cascade',
]
