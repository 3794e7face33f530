import itertools

import cv2
import numpy as np
import pytest

from fiber_geometry.config import CORE_PROFILE, FIBER_PROFILE
from fiber_geometry.detection import CircleDetector, ImagePreprocessor, InvalidImage


def test_preprocess_keeps_size_and_returns_single_channel(config, single_disk_image):
    gray = ImagePreprocessor(config).preprocess(single_disk_image)
    assert gray.shape == single_disk_image.shape[:2]
    assert gray.ndim == 2
    assert gray.dtype == np.uint8


def test_preprocess_accepts_bgra_and_gray(config, single_disk_image):
    preprocessor = ImagePreprocessor(config)
    bgra = np.dstack([single_disk_image, np.full(single_disk_image.shape[:2], 255, np.uint8)])
    gray_input = single_disk_image[:, :, 0].copy()

    assert preprocessor.preprocess(bgra).shape == (1200, 1600)
    assert preprocessor.preprocess(gray_input).shape == (1200, 1600)


def test_preprocess_does_not_modify_input(config, single_disk_image):
    before = single_disk_image.copy()
    ImagePreprocessor(config).preprocess(single_disk_image)
    np.testing.assert_array_equal(single_disk_image, before)


def test_preprocess_smooths_edges(config, single_disk_image):
    gray = ImagePreprocessor(config).preprocess(single_disk_image)
    # a hard 0 -> 200 step becomes a ramp after blurring
    row = gray[600, 230:270]
    assert len(np.unique(row)) > 2


@pytest.mark.parametrize("image", [
    None,
    np.zeros((0, 0, 3), dtype=np.uint8),
    np.zeros((10, 0), dtype=np.uint8),
    np.zeros((50, 50, 3), dtype=np.uint8),
    np.ones((50, 50, 3), dtype=np.float32),
    np.ones((50, 50, 2), dtype=np.uint8),
    np.ones((5, 5, 5, 3), dtype=np.uint8),
    [[1, 2], [3, 4]],
])
def test_preprocess_rejects_invalid_images(config, image):
    with pytest.raises(InvalidImage):
        ImagePreprocessor(config).preprocess(image)


def test_detect_rejects_color_input(single_disk_image):
    with pytest.raises(InvalidImage):
        CircleDetector().detect(single_disk_image, CORE_PROFILE)


def test_core_profile_finds_single_large_disk(config, single_disk_image):
    gray = ImagePreprocessor(config).preprocess(single_disk_image)
    circles = CircleDetector().detect(gray, CORE_PROFILE)

    assert len(circles) == 1
    core = circles[0]
    assert core.x == pytest.approx(800, abs=5)
    assert core.y == pytest.approx(600, abs=5)
    assert core.radius == pytest.approx(550, abs=10)


def test_fiber_profile_finds_nothing_without_inner_feature(config, single_disk_image):
    gray = ImagePreprocessor(config).preprocess(single_disk_image)
    assert CircleDetector().detect(gray, FIBER_PROFILE) == []


def test_fiber_profile_finds_inner_disk(config, endface_image):
    gray = ImagePreprocessor(config).preprocess(endface_image)
    circles = CircleDetector().detect(gray, FIBER_PROFILE)

    assert circles
    fiber = circles[0]
    assert fiber.x == pytest.approx(805, abs=5)
    assert fiber.y == pytest.approx(598, abs=5)
    assert fiber.radius == pytest.approx(120, abs=8)


def test_detect_returns_empty_list_when_hough_finds_nothing(monkeypatch):
    monkeypatch.setattr("fiber_geometry.detection.cv2.HoughCircles", lambda *args, **kwargs: None)
    gray = np.full((100, 100), 10, dtype=np.uint8)
    assert CircleDetector().detect(gray, FIBER_PROFILE) == []


def test_detect_enforces_min_dist_in_rank_order(monkeypatch):
    raw = np.array([[[100, 100, 60], [110, 100, 65], [300, 300, 70], [320, 300, 80]]], dtype=np.float32)
    monkeypatch.setattr("fiber_geometry.detection.cv2.HoughCircles", lambda *args, **kwargs: raw)
    gray = np.full((400, 400), 10, dtype=np.uint8)

    circles = CircleDetector().detect(gray, FIBER_PROFILE)

    assert [(c.x, c.y, c.radius) for c in circles] == [(100, 100, 60), (300, 300, 70)]


def test_detected_centers_respect_min_dist(config):
    image = np.zeros((800, 800, 3), dtype=np.uint8)
    for center in [(150, 150), (400, 150), (650, 150), (150, 450), (400, 450), (650, 450)]:
        cv2.circle(image, center, 80, (230, 230, 230), -1)

    gray = ImagePreprocessor(config).preprocess(image)
    circles = CircleDetector().detect(gray, FIBER_PROFILE)

    for a, b in itertools.combinations(circles, 2):
        assert a.distance_to(b) >= FIBER_PROFILE.min_dist
