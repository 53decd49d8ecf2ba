# foil_solver/solver_rolls_cp_sat.py
# Exact roll count check (OR-Tools CP-SAT) for the first-fit-decreasing packer.
#
# Per roll width this is plain 1-D bin packing: strips (integer mm) into rolls of fixed length,
# minimize the number of rolls opened. The FFD result is used as the upper bound on rolls,
# so the model stays small for real pools (a few dozen strips at most).
#
# Used for reporting only: the heuristic packing is what the rest of the pipeline consumes.

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from ortools.sat.python import cp_model

from .config import DEFAULTS
from .types import RollAllocation


@dataclass(frozen=True)
class SolverParams:
    time_limit_s: float = 10.0
    num_search_workers: int = 2


@dataclass(frozen=True)
class ExactRollCount:
    roll_width: float
    heuristic_rolls: int
    exact_rolls: Optional[int]  # None if the solver found nothing within the time limit
    optimal: bool

    @property
    def gap(self) -> Optional[int]:
        if self.exact_rolls is None:
            return None
        return self.heuristic_rolls - self.exact_rolls


def _to_mm(x: float) -> int:
    # floor: float noise must never make a fitting roll infeasible
    return int(math.floor(x * 1000 + 1e-6))


def solve_min_rolls(
    lengths: Sequence[float],
    max_rolls: int,
    roll_length: float = DEFAULTS.roll_length,
    params: Optional[SolverParams] = None,
) -> Optional[Tuple[int, bool]]:
    """
    Minimum number of rolls holding all `lengths`.
    Returns (roll_count, is_optimal) or None when no solution was found.
    """
    params = params or SolverParams()
    n = len(lengths)
    if n == 0:
        return 0, True

    cap = _to_mm(roll_length) + _to_mm(DEFAULTS.length_tolerance)
    sizes = [_to_mm(x) for x in lengths]
    nb = max(1, int(max_rolls))

    m = cp_model.CpModel()

    # x[i][b]: strip i is cut from roll b
    x = [[m.NewBoolVar(f"x[{i},{b}]") for b in range(nb)] for i in range(n)]
    used = [m.NewBoolVar(f"used[{b}]") for b in range(nb)]

    for i in range(n):
        m.AddExactlyOne(x[i])

    for b in range(nb):
        m.Add(sum(sizes[i] * x[i][b] for i in range(n)) <= cap * used[b])

    # Symmetry break: opened rolls are contiguous from index 0
    for b in range(nb - 1):
        m.Add(used[b] >= used[b + 1])

    # Longest strip goes on roll 0
    longest = max(range(n), key=lambda i: sizes[i])
    m.Add(x[longest][0] == 1)

    m.Minimize(sum(used))

    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = float(params.time_limit_s)
    solver.parameters.num_search_workers = int(params.num_search_workers)

    status = solver.Solve(m)
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        return None

    count = sum(int(solver.Value(u)) for u in used)
    return count, status == cp_model.OPTIMAL


def exact_roll_counts(rolls: Sequence[RollAllocation], params: Optional[SolverParams] = None) -> List[ExactRollCount]:
    """Compare the packed rolls against the exact minimum, one entry per roll width (wide first)."""
    by_width: Dict[float, List[RollAllocation]] = {}
    for r in rolls:
        by_width.setdefault(r.roll_width, []).append(r)

    out: List[ExactRollCount] = []
    for width in sorted(by_width, reverse=True):
        group = by_width[width]
        lengths = [s.length for r in group for s in r.strips]
        res = solve_min_rolls(lengths, max_rolls=len(group), roll_length=group[0].roll_length, params=params)
        if res is None:
            out.append(ExactRollCount(width, len(group), None, False))
        else:
            out.append(ExactRollCount(width, len(group), res[0], res[1]))
    return out
