"""CP-SAT word assignment using OR-Tools.

Alternative to :class:`~wordgrid.engine.assigner.WordAssigner` for large
pools. Unlike the backtracking search it makes no promise about which
satisfying assignment is returned.
"""

from __future__ import annotations

from itertools import combinations
from typing import Dict, List, Optional, Sequence

from ortools.sat.python import cp_model

from ..core.models import AssignmentResult
from ..utils.logger import get_logger
from .topology import GridTopology

LOGGER = get_logger(__name__)

# CP-SAT seeds are int32.
MAX_SOLVER_SEED = 2**31 - 1


def solve_assignment(
    candidates: Sequence[str],
    topology: GridTopology,
    timeout: float = 10.0,
    random_seed: Optional[int] = None,
) -> AssignmentResult:
    """Fill every slot via CP-SAT.

    Args:
        candidates: Word pool; duplicates and wrong-length entries are dropped.
        topology: Slot layout and intersection constraints.
        timeout: Solver time limit in seconds.
        random_seed: Optional seed; when given the solver runs single-threaded
            so the same pool and seed return the same words.

    Returns:
        An :class:`AssignmentResult`; ``success`` is ``False`` when the model is
        infeasible or the time limit expires without a solution.
    """
    slot_count = topology.slot_count
    length = topology.word_length
    pool = list(dict.fromkeys(w for w in candidates if len(w) == length))
    failure = AssignmentResult(words=tuple([None] * slot_count), success=False)
    if len(pool) < slot_count:
        LOGGER.debug("CP-SAT: pool of %d words cannot fill %d slots", len(pool), slot_count)
        return failure

    alphabet = sorted({ch for word in pool for ch in word})
    codes: Dict[str, int] = {ch: i for i, ch in enumerate(alphabet)}
    tuples = [[codes[ch] for ch in word] for word in pool]

    model = cp_model.CpModel()

    # ------------------------------------------------------------------
    # Step 1: letter variables per slot position + table constraints
    # ------------------------------------------------------------------
    letters: List[List[cp_model.IntVar]] = []
    for slot in range(slot_count):
        slot_vars = [
            model.new_int_var(0, len(alphabet) - 1, f"L_{slot}_{pos}") for pos in range(length)
        ]
        model.add_allowed_assignments(slot_vars, tuples)
        letters.append(slot_vars)

    # ------------------------------------------------------------------
    # Step 2: intersections
    # ------------------------------------------------------------------
    for slot_a, slot_b, pos_a, pos_b in topology.constraints:
        model.add(letters[slot_a][pos_a] == letters[slot_b][pos_b])

    # ------------------------------------------------------------------
    # Step 3: no word used twice
    # ------------------------------------------------------------------
    for slot_a, slot_b in combinations(range(slot_count), 2):
        _add_differ_constraint(model, letters, slot_a, slot_b)

    # ------------------------------------------------------------------
    # Step 4: solve
    # ------------------------------------------------------------------
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    if random_seed is None:
        solver.parameters.num_workers = 4
    else:
        # seeded runs are single-threaded
        solver.parameters.num_workers = 1
        solver.parameters.random_seed = random_seed % MAX_SOLVER_SEED

    LOGGER.info(
        "CP-SAT: %d slots, %d candidates, solving (timeout=%0.1fs)...",
        slot_count,
        len(pool),
        timeout,
    )
    status = solver.solve(model)
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        LOGGER.warning("CP-SAT: no solution found (status=%s)", solver.status_name(status))
        return failure

    LOGGER.info("CP-SAT: solution found in %.2fs", solver.wall_time)
    words = tuple(
        "".join(alphabet[solver.value(var)] for var in slot_vars) for slot_vars in letters
    )
    return AssignmentResult(words=words, success=True)


def _add_differ_constraint(
    model: cp_model.CpModel,
    letters: List[List[cp_model.IntVar]],
    slot_a: int,
    slot_b: int,
) -> None:
    """Ensure two slots do not spell the same word."""
    diffs = []
    for pos, (v1, v2) in enumerate(zip(letters[slot_a], letters[slot_b])):
        b = model.new_bool_var(f"d_{slot_a}_{slot_b}_{pos}")
        model.add(v1 != v2).only_enforce_if(b)
        model.add(v1 == v2).only_enforce_if(~b)
        diffs.append(b)
    model.add_bool_or(diffs)
