"""
Minimum utility targeting as a linear transshipment problem.

This is the LP form of the heat cascade of Papoulias & Grossmann (1983). Heat flows from the hot utility into the hottest temperature interval, cascades down through the intervals as non-negative residual heat flows, and leaves the coldest interval into the cold utility. Each interval balances the residual heat it receives and passes on with the heat released by the hot streams and absorbed by the cold streams in that interval. Minimizing the hot utility gives the same target as the problem table algorithm of the cascade engine, which makes this model a cross-check of the engine and a starting point for utility cost models.

The temperature intervals are the ones of :func:`henslib.cascade.build_intervals`, so both formulations see exactly the same data.

References:
    Papoulias, S. A., & Grossmann, I. E. (1983). A structural optimization approach in process synthesis-II: Heat recovery networks. Computers & Chemical Engineering, 7(6), 707-721. https://doi.org/10.1016/0098-1354(83)85023-6
"""

from pyomo.environ import (
    ConcreteModel,
    Constraint,
    minimize,
    NonNegativeReals,
    Objective,
    Param,
    RangeSet,
    SolverFactory,
    value,
    Var,
)
from pyomo.opt import TerminationCondition

from ..cascade.intervals import build_intervals
from ..common import DEFAULT_LP_SOLVER, DEFAULT_MIN_APPROACH_TEMP, InfeasibleError
from ..streams import prepare_streams


def build_model(
    hot_streams, cold_streams, min_approach_temp=DEFAULT_MIN_APPROACH_TEMP
):
    """
    Constructs a Pyomo concrete model of the heat cascade as a transshipment problem.

    Parameters
    ----------
    hot_streams : sequence of stream or dict
        Streams to be cooled, as stream objects or records.
    cold_streams : sequence of stream or dict
        Streams to be heated.
    min_approach_temp : float
        Minimum approach temperature used to shift the cold stream temperatures [K].

    Returns
    -------
    Pyomo.ConcreteModel
        A linear model whose optimal solution is the minimum hot utility, the corresponding cold utility and the residual heat flow between consecutive intervals.

    Raises
    ------
    InvalidStreamError
        If a stream is malformed.
    """
    hot, cold = prepare_streams(hot_streams, cold_streams)
    intervals = build_intervals(hot, cold, min_approach_temp)

    m = ConcreteModel(name="Minimum utility heat cascade")
    m.intervals = RangeSet(len(intervals), doc="Temperature intervals, hottest first")

    m.min_approach_temp = Param(
        initialize=min_approach_temp, doc="Minimum approach temperature [K]"
    )
    m.upper_temp = Param(
        m.intervals,
        initialize={k: iv.t_hi for k, iv in enumerate(intervals, start=1)},
        doc="Upper shifted temperature of the interval [K]",
    )
    m.lower_temp = Param(
        m.intervals,
        initialize={k: iv.t_lo for k, iv in enumerate(intervals, start=1)},
        doc="Lower shifted temperature of the interval [K]",
    )
    m.hot_heat = Param(
        m.intervals,
        initialize={k: iv.hot_total for k, iv in enumerate(intervals, start=1)},
        doc="Heat released by the hot streams in the interval [MW]",
    )
    m.cold_heat = Param(
        m.intervals,
        initialize={k: iv.cold_total for k, iv in enumerate(intervals, start=1)},
        doc="Heat absorbed by the cold streams in the interval [MW]",
    )

    m.hot_utility = Var(
        domain=NonNegativeReals, initialize=0, doc="External heating [MW]"
    )
    m.cold_utility = Var(
        domain=NonNegativeReals, initialize=0, doc="External cooling [MW]"
    )
    m.residual = Var(
        m.intervals,
        domain=NonNegativeReals,
        initialize=0,
        doc="Heat cascaded from the interval to the one below [MW]",
    )

    @m.Constraint(m.intervals)
    def interval_heat_balance(m, k):
        """
        Heat balance of temperature interval k: the residual heat leaving the interval equals the heat entering it from above (the hot utility for the first interval) plus the surplus of the hot streams over the cold streams in the interval.

        Parameters
        ----------
        m : Pyomo.ConcreteModel
            The heat cascade model.
        k : int
            Index of the temperature interval.

        Returns
        -------
        Pyomo.Constraint
            The interval heat balance.
        """
        inflow = m.hot_utility if k == m.intervals.first() else m.residual[k - 1]
        return m.residual[k] == inflow + m.hot_heat[k] - m.cold_heat[k]

    if len(intervals) > 0:
        m.cold_utility_balance = Constraint(
            expr=m.cold_utility == m.residual[m.intervals.last()],
            doc="Heat leaving the coldest interval goes to the cold utility",
        )
    else:
        m.cold_utility_balance = Constraint(
            expr=m.cold_utility == m.hot_utility,
            doc="Without streams all external heat goes to the cold utility",
        )

    m.objective = Objective(
        expr=m.hot_utility, sense=minimize, doc="Minimize the external heating"
    )
    return m


def solve_targeting_model(
    hot_streams,
    cold_streams,
    min_approach_temp=DEFAULT_MIN_APPROACH_TEMP,
    solver=DEFAULT_LP_SOLVER,
    tee=False,
):
    """
    Build and solve the transshipment model.

    Parameters
    ----------
    hot_streams : sequence of stream or dict
        Streams to be cooled.
    cold_streams : sequence of stream or dict
        Streams to be heated.
    min_approach_temp : float
        Minimum approach temperature [K].
    solver : str
        Name of a Pyomo LP solver, e.g. ``"glpk"``.
    tee : bool
        Whether to print the solver output.

    Returns
    -------
    tuple of float
        The minimum hot utility and the corresponding cold utility [MW].

    Raises
    ------
    InfeasibleError
        If the solver does not report an optimal solution.
    """
    m = build_model(hot_streams, cold_streams, min_approach_temp)
    results = SolverFactory(solver).solve(m, tee=tee)
    condition = results.solver.termination_condition
    if condition != TerminationCondition.optimal:
        raise InfeasibleError(
            "Heat cascade model terminated with condition '{}'".format(condition)
        )
    return value(m.hot_utility), value(m.cold_utility)
