"""
Annotation module: draws detected circles onto the color image for visual review.
"""

import cv2
import logging
import numpy as np
from typing import Sequence, Tuple

from .config import Circle, GeometryConfig


class Annotator:
    """Draws a filled center marker and an outline for each circle."""

    def __init__(self, config: GeometryConfig):
        self.config = config
        self.logger = logging.getLogger(__name__)

    def annotate(self, image: np.ndarray, circles: Sequence[Circle], color: Tuple[int, int, int]) -> np.ndarray:
        """Draw circles in place and return the same image."""
        for circle in circles:
            center = (int(round(circle.x)), int(round(circle.y)))
            radius = int(round(circle.radius))
            cv2.circle(image, center, self.config.center_marker_radius, color, -1, self.config.line_type, 0)
            cv2.circle(image, center, radius, color, self.config.outline_thickness, self.config.line_type, 0)

        if circles:
            self.logger.debug(f"Annotated {len(circles)} circle(s) in color {tuple(color)}")
        return image
