import numpy as np

from fiber_geometry.annotation import Annotator
from fiber_geometry.config import Circle, GeometryConfig


def test_annotate_draws_in_place():
    image = np.zeros((200, 200, 3), dtype=np.uint8)
    result = Annotator(GeometryConfig()).annotate(image, [Circle(100.4, 99.6, 50)], (0, 255, 0))

    assert result is image
    assert tuple(image[100, 100]) == (0, 255, 0)   # center marker
    assert tuple(image[100, 150]) == (0, 255, 0)   # outline
    assert tuple(image[100, 125]) == (0, 0, 0)     # interior untouched


def test_annotate_empty_list_is_noop():
    image = np.full((50, 50, 3), 7, dtype=np.uint8)
    before = image.copy()
    Annotator(GeometryConfig()).annotate(image, [], (255, 0, 0))
    np.testing.assert_array_equal(image, before)


def test_annotate_uses_configured_marker_radius():
    config = GeometryConfig(center_marker_radius=6)
    image = np.zeros((100, 100, 3), dtype=np.uint8)
    Annotator(config).annotate(image, [Circle(50, 50, 40)], (255, 0, 0))

    assert tuple(image[50, 55]) == (255, 0, 0)
    assert tuple(image[50, 60]) == (0, 0, 0)
