"""
Selection module for pairing core and fiber circle candidates.
Applies the containment rule: the fiber center must lie inside the core circle.
"""

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Sequence, Tuple

from .config import Circle
from .measurement import Feature


@dataclass(frozen=True)
class SelectionResult:
    """Outcome of pairing the two candidate lists."""
    pair: Optional[Tuple[Circle, Circle]] = None
    core_candidates: List[Circle] = field(default_factory=list)
    fiber_candidates: List[Circle] = field(default_factory=list)
    missing: FrozenSet[Feature] = frozenset()

    @property
    def succeeded(self) -> bool:
        return self.pair is not None


class CandidateSelector:
    """Picks the accepted core/fiber pair from ranked detector output."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def select(self, core_candidates: Sequence[Circle], fiber_candidates: Sequence[Circle]) -> SelectionResult:
        core_candidates = list(core_candidates)
        fiber_candidates = list(fiber_candidates)

        missing = set()
        if not core_candidates:
            missing.add(Feature.CORE)
        if not fiber_candidates:
            missing.add(Feature.FIBER)
        if missing:
            self.logger.debug(f"Selection failed, empty candidate list(s): {sorted(f.value for f in missing)}")
            return SelectionResult(
                core_candidates=core_candidates,
                fiber_candidates=fiber_candidates,
                missing=frozenset(missing)
            )

        core = core_candidates[0]
        contained = self.filter_fibers(core, fiber_candidates)

        if not contained:
            self.logger.debug(
                f"None of {len(fiber_candidates)} fiber candidate(s) lies within core radius {core.radius:.1f}"
            )
            return SelectionResult(
                core_candidates=core_candidates,
                fiber_candidates=contained,
                missing=frozenset({Feature.FIBER})
            )

        fiber = contained[0]
        self.logger.info(
            f"Selected core ({core.x:.1f}, {core.y:.1f}) r={core.radius:.1f}, "
            f"fiber ({fiber.x:.1f}, {fiber.y:.1f}) r={fiber.radius:.1f}"
        )
        return SelectionResult(
            pair=(core, fiber),
            core_candidates=core_candidates,
            fiber_candidates=contained
        )

    def filter_fibers(self, core: Circle, fiber_candidates: Sequence[Circle]) -> List[Circle]:
        """Keep fiber candidates whose center is strictly inside the core circle, in detector order."""
        return [c for c in fiber_candidates if c.distance_to(core) < core.radius]
