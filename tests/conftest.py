import cv2
import numpy as np
import pytest

from fiber_geometry.config import GeometryConfig

HEIGHT, WIDTH = 1200, 1600


@pytest.fixture
def config(tmp_path):
    return GeometryConfig(log_dir=str(tmp_path / "logs"))


@pytest.fixture
def single_disk_image():
    """One bright disk of radius 550 at (800, 600) and nothing else."""
    image = np.zeros((HEIGHT, WIDTH, 3), dtype=np.uint8)
    cv2.circle(image, (800, 600), 550, (200, 200, 200), -1)
    return image


@pytest.fixture
def endface_image():
    """Large disk at (800, 600) r=550 with a brighter inner disk at (805, 598) r=120."""
    image = np.zeros((HEIGHT, WIDTH, 3), dtype=np.uint8)
    cv2.circle(image, (800, 600), 550, (120, 120, 120), -1)
    cv2.circle(image, (805, 598), 120, (255, 255, 255), -1)
    return image
