"""
Compaction of an exchanger list.

The cascade engine allocates heat interval by interval, so one logical match can be emitted several times. Compaction merges such duplicates into a single exchanger and drops negligible loads.
"""

from .common import EPS, Exchanger

# Sort key of a missing stream end: after every real stream index.
_MISSING_END = float("inf")


def _end_key(index):
    return _MISSING_END if index is None else index


def _pair_key(exchanger):
    return (_end_key(exchanger.hot), _end_key(exchanger.cold))


def compact_exchangers(exchangers):
    """
    Merge exchangers connecting the same pair of stream ends.

    Parameters
    ----------
    exchangers : iterable of Exchanger
        Raw exchangers, in any order.

    Returns
    -------
    list of Exchanger
        Exchangers sorted by ``(hot, cold)`` with missing ends last on each axis, one per distinct pair, each with a load above ``EPS``.
    """
    merged = []
    for ex in sorted((ex for ex in exchangers if ex.load > EPS), key=_pair_key):
        if merged and _pair_key(merged[-1]) == _pair_key(ex):
            last = merged[-1]
            merged[-1] = last._replace(load=last.load + ex.load)
        else:
            merged.append(Exchanger(ex.hot, ex.cold, float(ex.load)))
    return [ex for ex in merged if ex.load > EPS]
