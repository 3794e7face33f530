"""
Configuration module for the fiber end-face geometry pipeline.
Contains the Hough detection profiles, the pipeline settings and the circle type.
"""

import math
import numbers
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Circle:
    """A detected circle in pixel coordinates."""
    x: float
    y: float
    radius: float

    def __post_init__(self):
        if self.radius < 0:
            raise ValueError(f"Circle radius must be >= 0, got {self.radius}")

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def diameter(self) -> float:
        return self.radius * 2.0

    def distance_to(self, other: "Circle") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class DetectionProfile:
    """Parameters of one cv2.HoughCircles pass."""
    name: str
    dp: float               # inverse ratio of accumulator resolution
    min_dist: float         # minimum distance between detected centers
    param1: float           # upper Canny threshold
    param2: float           # accumulator threshold for centers
    min_radius: int
    max_radius: int

    def __post_init__(self):
        for attr in ("dp", "min_dist", "param1", "param2"):
            if getattr(self, attr) <= 0:
                raise ValueError(f"{self.name} profile: {attr} must be positive")
        for attr in ("min_radius", "max_radius"):
            value = getattr(self, attr)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ValueError(f"{self.name} profile: {attr} must be an integer, got {value!r}")
        if not 0 <= self.min_radius <= self.max_radius:
            raise ValueError(
                f"{self.name} profile: invalid radius band [{self.min_radius}, {self.max_radius}]"
            )


# OpenCV clamps dp below 1.0 to 1.0 for HOUGH_GRADIENT.
CORE_PROFILE = DetectionProfile(
    name="core",
    dp=1.0,
    min_dist=300,
    param1=50,
    param2=30,
    min_radius=500,
    max_radius=600,
)

FIBER_PROFILE = DetectionProfile(
    name="fiber",
    dp=1.0,
    min_dist=50,
    param1=20,
    param2=30,
    min_radius=50,
    max_radius=400,
)


def _is_color(value) -> bool:
    return len(value) == 3 and all(0 <= int(c) <= 255 for c in value)


@dataclass
class GeometryConfig:
    """Configuration for the geometry pipeline."""
    log_dir: str = "logs"
    log_filename: Optional[str] = None
    log_prefix: str = "fiber_geometry"
    log_postfix: str = "pipeline"
    max_log_size: int = 50  # MB
    backup_count: int = 5
    logging_level: str = "INFO"

    # Preprocessing
    blur_kernel_size: Tuple[int, int] = (9, 9)
    blur_sigma: float = 3.0

    # Detection
    core_profile: DetectionProfile = CORE_PROFILE
    fiber_profile: DetectionProfile = FIBER_PROFILE
    parallel_detection: bool = True

    # Annotation (BGR)
    core_color: Tuple[int, int, int] = (255, 0, 0)
    fiber_color: Tuple[int, int, int] = (0, 255, 0)
    center_marker_radius: int = 3
    outline_thickness: int = 2
    line_type: int = 8  # cv2.LINE_8
    annotate_on_failure: bool = True

    def validate(self):
        kw, kh = self.blur_kernel_size
        if kw <= 0 or kh <= 0 or kw % 2 == 0 or kh % 2 == 0:
            raise ValueError(f"Blur kernel must be positive and odd, got {self.blur_kernel_size}")
        if self.blur_sigma <= 0:
            raise ValueError(f"Blur sigma must be positive, got {self.blur_sigma}")
        if self.center_marker_radius <= 0 or self.outline_thickness <= 0:
            raise ValueError("Marker radius and outline thickness must be positive")
        if not (_is_color(self.core_color) and _is_color(self.fiber_color)):
            raise ValueError("Annotation colors must be BGR triples in 0..255")
        if self.max_log_size <= 0 or self.backup_count < 0:
            raise ValueError("Invalid log rotation settings")
        return self
