from .cascade import HeatTargets, compute_targets, solve_cascade
from .cases import build_case
from .common import (
    DEFAULT_MIN_APPROACH_TEMP,
    EPS,
    INFEASIBLE_EPS,
    Exchanger,
    InfeasibleError,
    InvalidStreamError,
)
from .compactor import compact_exchangers
from .feasibility import max_transferable
from .greedy import solve_greedy
from .streams import GlideStream, IsothermalStream, normalize_stream, normalize_streams

__version__ = "0.1.0"


def solve(
    hot_streams,
    cold_streams,
    min_approach_temp=DEFAULT_MIN_APPROACH_TEMP,
    method="cascade",
):
    """Synthesize a heat exchanger network.

    Args:
        hot_streams: Streams to be cooled (stream objects or records)
        cold_streams: Streams to be heated (stream objects or records)
        min_approach_temp: Minimum approach temperature [K]
        method: Synthesis engine, "cascade" (minimum utility) or "greedy"

    Returns:
        Compacted list of Exchanger records
    """
    if method == "cascade":
        return solve_cascade(hot_streams, cold_streams, min_approach_temp)
    elif method == "greedy":
        return compact_exchangers(
            solve_greedy(hot_streams, cold_streams, min_approach_temp)
        )
    else:
        raise ValueError("Invalid method: {}".format(method))


__all__ = [
    'EPS',
    'INFEASIBLE_EPS',
    'Exchanger',
    'GlideStream',
    'HeatTargets',
    'InfeasibleError',
    'InvalidStreamError',
    'IsothermalStream',
    'build_case',
    'compact_exchangers',
    'compute_targets',
    'max_transferable',
    'normalize_stream',
    'normalize_streams',
    'solve',
    'solve_cascade',
    'solve_greedy',
]
