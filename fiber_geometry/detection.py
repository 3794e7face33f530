"""
Detection module for fiber end-face images.
Handles grayscale preprocessing and Hough circle search for the core and fiber passes.
"""

import cv2
import logging
import numpy as np
import traceback
from typing import List

from .config import Circle, DetectionProfile, GeometryConfig


class InvalidImage(ValueError):
    """Raised when an image cannot be processed at all."""


def validate_image(image) -> np.ndarray:
    if image is None:
        raise InvalidImage("No image provided")
    if not isinstance(image, np.ndarray):
        raise InvalidImage(f"Expected numpy.ndarray, got {type(image).__name__}")
    if image.size == 0 or image.ndim not in (2, 3) or 0 in image.shape[:2]:
        raise InvalidImage(f"Empty or malformed image with shape {image.shape}")
    if image.ndim == 3 and image.shape[2] not in (1, 3, 4):
        raise InvalidImage(f"Unsupported channel count: {image.shape[2]}")
    if image.dtype != np.uint8:
        raise InvalidImage(f"Expected uint8 pixels, got {image.dtype}")
    if not np.any(image):
        raise InvalidImage("Image is all zero")
    return image


class ImagePreprocessor:
    """Converts a color frame into a smoothed grayscale image for circle search."""

    def __init__(self, config: GeometryConfig):
        self.config = config
        self.logger = logging.getLogger(__name__)

    def preprocess(self, image: np.ndarray) -> np.ndarray:
        image = validate_image(image)

        if image.ndim == 2:
            gray = image.copy()
        elif image.shape[2] == 1:
            gray = image[:, :, 0].copy()
        elif image.shape[2] == 4:
            gray = cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
        else:
            gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)

        sigma = self.config.blur_sigma
        blurred = cv2.GaussianBlur(gray, tuple(self.config.blur_kernel_size), sigma, sigmaY=sigma)
        self.logger.debug(f"Preprocessed image {blurred.shape[1]}x{blurred.shape[0]}")
        return blurred


class CircleDetector:
    """Runs a Hough gradient circle search with a given detection profile."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def detect(self, gray: np.ndarray, profile: DetectionProfile) -> List[Circle]:
        """
        Find circles in a single-channel image.

        Circles come back in the detector's ranking, strongest response first.
        An empty list means nothing cleared the profile's thresholds.
        """
        gray = validate_image(gray)
        if gray.ndim != 2:
            raise InvalidImage(f"Circle detection needs a single-channel image, got shape {gray.shape}")

        try:
            raw = cv2.HoughCircles(
                gray,
                cv2.HOUGH_GRADIENT,
                dp=profile.dp,
                minDist=profile.min_dist,
                param1=profile.param1,
                param2=profile.param2,
                minRadius=profile.min_radius,
                maxRadius=profile.max_radius
            )
        except cv2.error as e:
            self.logger.error(f"HoughCircles failed for {profile.name} profile: {e}")
            self.logger.error(f"Traceback: {traceback.format_exc()}")
            raise InvalidImage(f"Circle detection failed: {e}") from e

        if raw is None:
            self.logger.info(f"No {profile.name} circles found")
            return []

        candidates = [Circle(float(x), float(y), float(r)) for x, y, r in raw[0][:, :3]]
        circles = self._enforce_min_dist(candidates, profile.min_dist)

        self.logger.info(f"Found {len(circles)} {profile.name} circle(s)")
        for c in circles:
            self.logger.debug(f"{profile.name} candidate: ({c.x:.1f}, {c.y:.1f}) r={c.radius:.1f}")
        return circles

    def _enforce_min_dist(self, circles: List[Circle], min_dist: float) -> List[Circle]:
        """Drop lower-ranked circles whose center is closer than min_dist to an accepted one."""
        accepted: List[Circle] = []
        for circle in circles:
            if all(circle.distance_to(kept) >= min_dist for kept in accepted):
                accepted.append(circle)
            else:
                self.logger.debug(f"Suppressed near-duplicate circle at ({circle.x:.1f}, {circle.y:.1f})")
        return accepted
