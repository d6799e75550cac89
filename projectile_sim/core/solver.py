"""
Axis solver: runs the equation catalogue against one axis until it stalls.
"""

import logging
from typing import Optional, Sequence

import numpy as np

from projectile_sim.constants import MAX_ROUNDS
from projectile_sim.core.equations import CATALOGUE, Rule, apply_catalogue
from projectile_sim.core.variable import Quantity
from projectile_sim.core.variable_set import AxisState

log = logging.getLogger(__name__)


class AxisSolver:
    """
    Bounded fixpoint iteration of the catalogue over one axis.

    Each round sweeps the whole catalogue; a rule late in the list can use a
    value produced earlier in the same round. Iteration stops at the first
    round in which no rule fires, or after max_rounds. Quantities still
    unknown at that point are under-determined by the input, which is not
    an error.

    Parameters:
        max_rounds: Hard cap on catalogue sweeps per solve
        catalogue: Rule list (defaults to the full kinematic catalogue)

    Example:
        >>> solver = AxisSolver()
        >>> rounds = solver.solve(variables.x)
    """

    def __init__(self, max_rounds: int = MAX_ROUNDS, catalogue: Optional[Sequence[Rule]] = None):
        if max_rounds < 1:
            raise ValueError(f"max_rounds must be at least 1, got {max_rounds}")

        self.max_rounds = max_rounds
        self.catalogue = CATALOGUE if catalogue is None else catalogue

    def solve(self, axis: AxisState) -> int:
        """
        Infer what can be inferred on one axis and write it back.

        Works on local copies of the values and known flags, then stores
        every newly known value whose variable is not user-set. Fired rules
        are added to axis.provenance.

        Args:
            axis: AxisState to solve in place

        Returns:
            Number of catalogue rounds run
        """
        values = np.array([var.value for var in axis], dtype=float)
        known = np.array([var.known for var in axis], dtype=bool)

        rounds = 0
        for rounds in range(1, self.max_rounds + 1):
            fired = apply_catalogue(values, known, self.catalogue)
            for rule_id in fired:
                axis.record(rule_id)
            if not fired:
                break

        for q in Quantity:
            var = axis[q]
            if known[q] and not var.known:
                var.derive(values[q])

        log.debug("axis %s solved in %d round(s): %r", axis.axis.value, rounds, axis)
        return rounds
