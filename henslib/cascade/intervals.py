"""
Temperature intervals of the heat cascade.

Cold stream temperatures are shifted up by the minimum approach temperature, so that heat released by a hot stream at some temperature can be absorbed by any cold stream at the same or a lower shifted temperature. The inlet and outlet temperatures of all streams on this shifted axis ("breakpoints") split it into intervals. In each interval a glide stream contributes its rate times the overlap of its temperature range with the interval, and an isothermal stream contributes its whole load in the interval whose upper breakpoint matches its temperature. Isothermal streams sitting on the lowest breakpoint are collected by a final boundary interval of zero width.
"""

from ..common import EPS


def overlap(a0, a1, lo, hi):
    """Length of the intersection of the temperature range [a0, a1] (in any order) with [lo, hi]."""
    start = max(min(a0, a1), lo)
    end = min(max(a0, a1), hi)
    return end - start if end > start else 0.0


def shifted_breakpoints(hot_streams, cold_streams, min_approach_temp):
    """
    Distinct inlet and outlet temperatures of all streams on the shifted axis.

    Returns
    -------
    list of float
        Breakpoints in descending order; values closer than ``EPS`` to the previous one are dropped.
    """
    temps = []
    for stream in hot_streams:
        temps.extend((stream.in_temp, stream.out_temp))
    for stream in cold_streams:
        temps.extend(
            (stream.in_temp + min_approach_temp, stream.out_temp + min_approach_temp)
        )
    breakpoints = []
    for t in sorted(temps, reverse=True):
        if not breakpoints or abs(t - breakpoints[-1]) > EPS:
            breakpoints.append(t)
    return breakpoints


def _contributions(streams, shift, t_hi, t_lo):
    heat = []
    for stream in streams:
        q = 0.0
        if stream.isothermal:
            if abs(stream.temp + shift - t_hi) <= EPS and stream.load > EPS:
                q = stream.load
        elif t_hi > t_lo:
            dt = overlap(stream.in_temp + shift, stream.out_temp + shift, t_lo, t_hi)
            if dt > EPS:
                q = stream.rate * dt
        heat.append(q)
    return heat


class TemperatureInterval(object):
    """
    One interval of the heat cascade on the shifted temperature axis.

    Attributes
    ----------
    t_hi : float
        Upper breakpoint [K].
    t_lo : float
        Lower breakpoint [K]. Equal to ``t_hi`` for the boundary interval.
    hot_heat : list of float
        Heat released in the interval by each hot stream [MW].
    cold_heat : list of float
        Heat demanded in the interval by each cold stream [MW].
    """

    def __init__(self, t_hi, t_lo, hot_heat, cold_heat):
        self.t_hi = t_hi
        self.t_lo = t_lo
        self.hot_heat = hot_heat
        self.cold_heat = cold_heat

    @property
    def is_boundary(self):
        return self.t_hi == self.t_lo

    @property
    def hot_total(self):
        return sum(self.hot_heat)

    @property
    def cold_total(self):
        return sum(self.cold_heat)

    @property
    def surplus(self):
        return self.hot_total - self.cold_total

    def __repr__(self):
        return "TemperatureInterval({:.6g} -> {:.6g}: hot {:.6g}, cold {:.6g})".format(
            self.t_hi, self.t_lo, self.hot_total, self.cold_total
        )


def build_intervals(hot_streams, cold_streams, min_approach_temp):
    """
    Split the shifted temperature axis into cascade intervals.

    Parameters
    ----------
    hot_streams : list of stream
        Validated hot streams.
    cold_streams : list of stream
        Validated cold streams.
    min_approach_temp : float
        Shift applied to cold stream temperatures [K].

    Returns
    -------
    list of TemperatureInterval
        Intervals from the hottest breakpoint down, followed by the zero-width boundary interval at the lowest breakpoint. Empty when there are no streams.
    """
    breakpoints = shifted_breakpoints(hot_streams, cold_streams, min_approach_temp)
    if not breakpoints:
        return []

    intervals = []
    for t_hi, t_lo in zip(breakpoints, breakpoints[1:]):
        intervals.append(
            TemperatureInterval(
                t_hi,
                t_lo,
                _contributions(hot_streams, 0.0, t_hi, t_lo),
                _contributions(cold_streams, min_approach_temp, t_hi, t_lo),
            )
        )
    t_last = breakpoints[-1]
    intervals.append(
        TemperatureInterval(
            t_last,
            t_last,
            _contributions(hot_streams, 0.0, t_last, t_last),
            _contributions(cold_streams, min_approach_temp, t_last, t_last),
        )
    )
    return intervals
