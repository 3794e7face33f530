"""
Pipeline module for the fiber end-face geometry system.
Orchestrates preprocessing, the two detection passes, selection, measurement and annotation.
"""

import logging
import time
import numpy as np
import cv2
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

from .config import Circle, GeometryConfig
from .detection import ImagePreprocessor, CircleDetector
from .selection import CandidateSelector
from .measurement import MeasurementComputer, MeasurementResult, DiagnosticResult
from .annotation import Annotator


class PipelineState(Enum):
    IDLE = "idle"
    PREPROCESSING = "preprocessing"
    DETECTING = "detecting"
    SELECTING = "selecting"
    MEASURING = "measuring"
    REPORTING = "reporting"
    ANNOTATING = "annotating"
    DONE = "done"


@dataclass(frozen=True)
class GeometryOutcome:
    """Annotated image plus either a measurement or a diagnostic."""
    image: np.ndarray
    result: Union[MeasurementResult, DiagnosticResult]
    core_candidates: List[Circle] = field(default_factory=list)
    fiber_candidates: List[Circle] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return isinstance(self.result, MeasurementResult)


class GeometryPipeline:
    """Runs the full geometry extraction on one image per call."""

    def __init__(self, config: Optional[GeometryConfig] = None):
        self.config = (config or GeometryConfig()).validate()
        self.logger = logging.getLogger(__name__)

        self.preprocessor = ImagePreprocessor(self.config)
        self.detector = CircleDetector()
        self.selector = CandidateSelector()
        self.measurement = MeasurementComputer()
        self.annotator = Annotator(self.config)
        self.state = PipelineState.IDLE

        self.logger.info("Pipeline initialized.")

    def _set_state(self, state: PipelineState):
        self.logger.debug(f"State: {self.state.value} -> {state.value}")
        self.state = state

    def process(self, image: np.ndarray) -> GeometryOutcome:
        """Run one image through the pipeline; state returns to IDLE if a stage raises."""
        try:
            return self._run(image)
        except Exception:
            self._set_state(PipelineState.IDLE)
            raise

    def _run(self, image: np.ndarray) -> GeometryOutcome:
        self._set_state(PipelineState.IDLE)
        start_time = time.perf_counter()

        self._set_state(PipelineState.PREPROCESSING)
        gray = self.preprocessor.preprocess(image)

        self._set_state(PipelineState.DETECTING)
        core_candidates, fiber_candidates = self._detect(gray)

        self._set_state(PipelineState.SELECTING)
        selection = self.selector.select(core_candidates, fiber_candidates)
        elapsed = time.perf_counter() - start_time

        canvas = self._color_copy(image)

        if selection.succeeded:
            self._set_state(PipelineState.MEASURING)
            core, fiber = selection.pair
            result = self.measurement.measure(core, fiber, elapsed)

            self._set_state(PipelineState.ANNOTATING)
            self.annotator.annotate(canvas, selection.core_candidates, self.config.core_color)
            self.annotator.annotate(canvas, selection.fiber_candidates, self.config.fiber_color)
        else:
            self._set_state(PipelineState.REPORTING)
            result = DiagnosticResult(missing=selection.missing)
            for line in result.summary_lines():
                self.logger.warning(line)

            self._set_state(PipelineState.ANNOTATING)
            if self.config.annotate_on_failure:
                self.annotator.annotate(canvas, core_candidates, self.config.core_color)
                self.annotator.annotate(canvas, fiber_candidates, self.config.fiber_color)

        self._set_state(PipelineState.DONE)
        return GeometryOutcome(
            image=canvas,
            result=result,
            core_candidates=selection.core_candidates,
            fiber_candidates=selection.fiber_candidates
        )

    def _detect(self, gray: np.ndarray) -> Tuple[List[Circle], List[Circle]]:
        core_profile, fiber_profile = self.config.core_profile, self.config.fiber_profile

        if not self.config.parallel_detection:
            return (self.detector.detect(gray, core_profile),
                    self.detector.detect(gray, fiber_profile))

        with ThreadPoolExecutor(max_workers=2) as executor:
            core_future = executor.submit(self.detector.detect, gray, core_profile)
            fiber_future = executor.submit(self.detector.detect, gray, fiber_profile)
            return core_future.result(), fiber_future.result()

    def _color_copy(self, image: np.ndarray) -> np.ndarray:
        if image.ndim == 2:
            return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
        if image.shape[2] == 1:
            return cv2.cvtColor(image[:, :, 0], cv2.COLOR_GRAY2BGR)
        if image.shape[2] == 4:
            return cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
        return image.copy()
