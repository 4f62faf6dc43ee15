"""
Common elements of the heat exchanger network synthesis engines.

This file provides the numeric tolerances, default settings, the exchanger record and the error types shared by the greedy matching engine, the heat cascade engine and the transshipment targeting model.
An exchanger is a match between a hot stream and a cold stream (a "cell"), or an external utility: a heater when the hot end is missing, a cooler when the cold end is missing.

References:
    Linnhoff, B., & Hindmarsh, E. (1983). The pinch design method for heat exchanger networks. Chemical Engineering Science, 38(5), 745-763. https://doi.org/10.1016/0009-2509(83)80185-7
"""

from collections import namedtuple

# Zero/equality tolerance used throughout the engines.
EPS = 1e-6
# Deficit beyond this is a genuine infeasibility, not floating-point noise.
INFEASIBLE_EPS = 1e-4

DEFAULT_MIN_APPROACH_TEMP = 20.0
DEFAULT_UTILITY_OFFSET = 30.0
DEFAULT_TEMP_UNIT = "K"
DEFAULT_POWER_UNIT = "MW"
DEFAULT_LP_SOLVER = "glpk"

HOT = "hot"
COLD = "cold"


class InfeasibleError(Exception):
    """
    Exception raised when a heat exchanger network cannot be synthesized.
    """

    pass


class InvalidStreamError(InfeasibleError):
    """
    Exception raised when a stream record is malformed (non-positive rate or load where one is required, missing or negative temperatures).
    """

    pass


class Exchanger(namedtuple("Exchanger", ["hot", "cold", "load"])):
    """
    A heat exchanger of the network.

    Attributes
    ----------
    hot : int or None
        Index of the hot stream, None for a heater.
    cold : int or None
        Index of the cold stream, None for a cooler.
    load : float
        Heat duty of the exchanger [MW].
    """

    __slots__ = ()

    @property
    def is_cell(self):
        return self.hot is not None and self.cold is not None

    @property
    def is_heater(self):
        return self.hot is None and self.cold is not None

    @property
    def is_cooler(self):
        return self.hot is not None and self.cold is None

    @property
    def is_utility(self):
        return self.is_heater or self.is_cooler

    @property
    def kind(self):
        if self.is_cell:
            return "cell"
        elif self.is_heater:
            return "heater"
        elif self.is_cooler:
            return "cooler"
        return "invalid"
