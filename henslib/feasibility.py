"""
Feasibility of a heat exchange between the current states of a hot and a cold stream.

The driving force of a match is the temperature difference between the hot and the cold stream. As heat flows, a glide hot stream cools down and a glide cold stream warms up, so the driving force shrinks linearly with the exchanged heat until it reaches the minimum approach temperature. Isothermal streams keep their temperature.
"""

import math

from .common import EPS


def max_transferable(hot, cold, min_approach_temp):
    """
    Maximum heat that can flow from ``hot`` to ``cold`` without violating the minimum approach temperature or overshooting the target temperature of a glide stream.

    Parameters
    ----------
    hot : StreamState
        Current state of the hot stream.
    cold : StreamState
        Current state of the cold stream.
    min_approach_temp : float
        Minimum allowed temperature difference between the hot and the cold stream [K].

    Returns
    -------
    float or None
        The transferable heat [MW], ``math.inf`` when both streams are isothermal (the caller caps it by the remaining duties), or None when no positive amount of heat can be exchanged.
    """
    driving_force = hot.temp - cold.temp
    if driving_force < min_approach_temp - EPS:
        return None
    excess = driving_force - min_approach_temp

    kinds = (hot.isothermal, cold.isothermal)
    if kinds == (False, False):
        slope = 1.0 / hot.rate + 1.0 / cold.rate
        if slope <= EPS:
            return None
        limit = min(excess / slope, hot.heat_to_target(), cold.heat_to_target())
    elif kinds == (True, False):
        limit = min(excess * cold.rate, cold.heat_to_target())
    elif kinds == (False, True):
        limit = min(excess * hot.rate, hot.heat_to_target())
    else:
        return math.inf

    if limit <= 0:
        return None
    return limit
