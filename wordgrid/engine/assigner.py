"""Backtracking word assignment over the fixed slot constraints."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Set, Tuple

from ..core.models import AssignmentResult
from ..utils.logger import get_logger
from .topology import GridTopology

LOGGER = get_logger(__name__)

# (earlier_slot, position_in_this_slot, position_in_earlier_slot)
_Check = Tuple[int, int, int]


class WordAssigner:
    """Pick one distinct word per slot so every intersection letter matches.

    Candidates are tried in pool order and the first complete assignment is
    returned. The search keeps an explicit trail of placed words and a cursor
    per open slot instead of recursing, so backtracking is a ``pop``.
    """

    def __init__(self, topology: GridTopology) -> None:
        self.topology = topology
        self._checks: Dict[int, List[_Check]] = self._build_checks(topology)

    @staticmethod
    def _build_checks(topology: GridTopology) -> Dict[int, List[_Check]]:
        """Index constraints by the later of their two slots.

        When a slot is filled only constraints against already-filled slots
        can be evaluated; the rest are checked once their other slot is set.
        """
        checks: Dict[int, List[_Check]] = {i: [] for i in range(topology.slot_count)}
        for slot_a, slot_b, pos_a, pos_b in topology.constraints:
            if slot_a < slot_b:
                checks[slot_b].append((slot_a, pos_b, pos_a))
            else:
                checks[slot_a].append((slot_b, pos_a, pos_b))
        return checks

    def assign(self, candidates: Sequence[str]) -> AssignmentResult:
        pool = list(candidates)
        slot_count = self.topology.slot_count
        trail: List[str] = []
        used: Set[str] = set()
        cursors: List[int] = [0]
        steps = 0

        while len(trail) < slot_count:
            slot = len(trail)
            found: Optional[int] = None
            index = cursors[-1]
            while index < len(pool):
                word = pool[index]
                index += 1
                if word in used:
                    continue
                steps += 1
                if self._fits(slot, word, trail):
                    found = index - 1
                    break

            if found is None:
                cursors.pop()
                if not trail:
                    LOGGER.debug("Candidate pool exhausted after %d placements", steps)
                    return AssignmentResult(
                        words=tuple([None] * slot_count), success=False, steps=steps
                    )
                used.discard(trail.pop())
                continue

            cursors[-1] = found + 1
            word = pool[found]
            trail.append(word)
            used.add(word)
            cursors.append(0)

        LOGGER.debug("Assigned %s after %d placements", trail, steps)
        return AssignmentResult(words=tuple(trail), success=True, steps=steps)

    def _fits(self, slot: int, word: str, trail: Sequence[str]) -> bool:
        for other, pos, other_pos in self._checks[slot]:
            if word[pos] != trail[other][other_pos]:
                return False
        return True


def assign_words(candidates: Sequence[str], topology: GridTopology) -> AssignmentResult:
    """Functional form of :meth:`WordAssigner.assign`."""
    return WordAssigner(topology).assign(candidates)


def satisfies(words: Sequence[Optional[str]], topology: GridTopology) -> bool:
    """True when every constraint between two assigned slots holds."""
    for slot_a, slot_b, pos_a, pos_b in topology.constraints:
        word_a, word_b = words[slot_a], words[slot_b]
        if word_a is None or word_b is None:
            continue
        if word_a[pos_a] != word_b[pos_b]:
            return False
    return True
