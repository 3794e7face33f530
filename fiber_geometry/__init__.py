"""
Fiber End-Face Geometry Package

Locates the core and fiber circles of an optical-fiber end-face image and measures them.
"""

__version__ = "1.0.0"

from .config import GeometryConfig, DetectionProfile, Circle, CORE_PROFILE, FIBER_PROFILE
from .detection import ImagePreprocessor, CircleDetector, InvalidImage
from .selection import CandidateSelector, SelectionResult
from .measurement import MeasurementComputer, MeasurementResult, DiagnosticResult, Feature
from .annotation import Annotator
from .pipeline import GeometryPipeline, GeometryOutcome, PipelineState

__all__ = [
    "GeometryConfig",
    "DetectionProfile",
    "Circle",
    "CORE_PROFILE",
    "FIBER_PROFILE",
    "ImagePreprocessor",
    "CircleDetector",
    "InvalidImage",
    "CandidateSelector",
    "SelectionResult",
    "MeasurementComputer",
    "MeasurementResult",
    "DiagnosticResult",
    "Feature",
    "Annotator",
    "GeometryPipeline",
    "GeometryOutcome",
    "PipelineState"
]
