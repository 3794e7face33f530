"""
Image loading helpers used at the application boundary.
"""

import cv2
import logging
import os
import numpy as np

from .detection import InvalidImage

logger = logging.getLogger(__name__)


def load_image(path: str) -> np.ndarray:
    if not os.path.isfile(path):
        raise InvalidImage(f"Image file not found: {path}")
    image = cv2.imread(path, cv2.IMREAD_COLOR)
    if image is None:
        raise InvalidImage(f"Unable to decode image: {path}")
    logger.info(f"Loaded {path} ({image.shape[1]}x{image.shape[0]})")
    return image


def describe_image(path: str, image: np.ndarray) -> str:
    """Status line in the form: Opened "<path>", <w>x<h>, Depth: <bits>."""
    height, width = image.shape[:2]
    channels = 1 if image.ndim == 2 else image.shape[2]
    depth = image.dtype.itemsize * 8 * channels
    return f'Opened "{os.path.normpath(path)}", {width}x{height}, Depth: {depth}'
