"""
Case studies of heat exchanger network synthesis.

``yee_grossmann`` is example 1 of the Yee & Grossmann, 1990 paper "Simultaneous optimization models for heat integration--II" (two hot and two cold streams, rates in kW/K). The other cases are small networks exercising the limits of the engines:

- ``counter_current``: one hot and one cold glide stream overlapping in temperature; the whole duty can be recovered counter-currently.
- ``close_approach``: the streams are never the minimum approach temperature apart, so everything goes to utilities.
- ``phase_change``: a condensing hot stream heating a boiling cold stream.

References:
    Yee, T. F., & Grossmann, I. E. (1990). Simultaneous optimization models for heat integration--II. Heat exchanger network synthesis. Computers & Chemical Engineering, 14(10), 1165–1184. https://doi.org/10.1016/0098-1354(90)85010-8
"""

from .streams import normalize_streams


def _yee_grossmann():
    hot = [
        {"in": 443, "out": 333, "rate": 30},
        {"in": 423, "out": 303, "rate": 15},
    ]
    cold = [
        {"in": 293, "out": 408, "rate": 20},
        {"in": 353, "out": 413, "rate": 40},
    ]
    return (
        normalize_streams(hot, power_unit="kW"),
        normalize_streams(cold, power_unit="kW"),
        10.0,
    )


def _counter_current():
    hot = [{"in": 500, "out": 400, "rate": 2}]
    cold = [{"in": 350, "out": 450, "rate": 2}]
    return normalize_streams(hot), normalize_streams(cold), 20.0


def _close_approach():
    hot = [{"in": 320, "out": 310, "rate": 5}]
    cold = [{"in": 315, "out": 325, "rate": 5}]
    return normalize_streams(hot), normalize_streams(cold), 20.0


def _phase_change():
    hot = [{"in": 400, "load": 100}]
    cold = [{"in": 370, "load": 100}]
    return normalize_streams(hot), normalize_streams(cold), 20.0


CASES = {
    "yee_grossmann": _yee_grossmann,
    "counter_current": _counter_current,
    "close_approach": _close_approach,
    "phase_change": _phase_change,
}


def build_case(case="yee_grossmann"):
    """
    Build the streams of a case study.

    Args:
        case: Name of the case study, one of ``CASES``.

    Returns:
        Tuple of the hot streams, the cold streams and the minimum approach temperature [K].
    """
    if case not in CASES:
        raise ValueError("Invalid case: {}".format(case))
    return CASES[case]()


__all__ = ['CASES', 'build_case']
