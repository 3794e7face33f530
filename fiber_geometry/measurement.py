"""
Measurement module for fiber end-face geometry.
Derives diameters and center offset from the accepted core/fiber pair.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, List

from .config import Circle


class Feature(Enum):
    CORE = "core"
    FIBER = "fiber"


@dataclass(frozen=True)
class MeasurementResult:
    """Geometry of a successfully detected core/fiber pair, in pixels."""
    core: Circle
    fiber: Circle
    core_diameter: float
    fiber_diameter: float
    center_distance: float
    elapsed_seconds: float

    def summary_lines(self) -> List[str]:
        return [
            f"Core diameter: {self.core_diameter:g}",
            f"Fiber diameter: {self.fiber_diameter:g}",
            f"Core center x: {self.core.x:g} y: {self.core.y:g}",
            f"Fiber center x: {self.fiber.x:g} y: {self.fiber.y:g}",
            f"Distance: {self.center_distance:g}",
            f"Total time: {self.elapsed_seconds:g}",
        ]

    def to_dict(self) -> Dict:
        return {
            "core": {"x": self.core.x, "y": self.core.y, "radius": self.core.radius},
            "fiber": {"x": self.fiber.x, "y": self.fiber.y, "radius": self.fiber.radius},
            "core_diameter": self.core_diameter,
            "fiber_diameter": self.fiber_diameter,
            "center_distance": self.center_distance,
            "elapsed_seconds": self.elapsed_seconds,
        }


@dataclass(frozen=True)
class DiagnosticResult:
    """Reports which features could not be found."""
    missing: FrozenSet[Feature]

    @property
    def core_not_found(self) -> bool:
        return Feature.CORE in self.missing

    @property
    def fiber_not_found(self) -> bool:
        return Feature.FIBER in self.missing

    def summary_lines(self) -> List[str]:
        lines = []
        if self.core_not_found:
            lines.append("Can't find any core circle.")
        if self.fiber_not_found:
            lines.append("Can't find any fiber circle.")
        return lines

    def to_dict(self) -> Dict:
        return {
            "core_not_found": self.core_not_found,
            "fiber_not_found": self.fiber_not_found,
        }


class MeasurementComputer:
    """Computes the measurement result for an accepted pair."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def measure(self, core: Circle, fiber: Circle, elapsed_seconds: float) -> MeasurementResult:
        result = MeasurementResult(
            core=core,
            fiber=fiber,
            core_diameter=core.diameter,
            fiber_diameter=fiber.diameter,
            center_distance=core.distance_to(fiber),
            elapsed_seconds=elapsed_seconds,
        )
        self.logger.info(
            f"Measured: core={result.core_diameter:.1f}px, fiber={result.fiber_diameter:.1f}px, "
            f"distance={result.center_distance:.2f}px, time={elapsed_seconds:.3f}s"
        )
        return result
