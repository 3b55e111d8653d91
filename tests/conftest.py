"""
Pytest fixtures for Scratchr tests.
"""

import numpy as np
import pytest

from scratchr.qt import QtCore
from scratchr.core.layer import Layer


@pytest.fixture(scope="session", autouse=True)
def qcore_app():
    """Signals need an application object; no display is required."""
    app = QtCore.QCoreApplication.instance() or QtCore.QCoreApplication([])
    yield app


def solid(color=(200, 100, 50), width=20, height=10) -> np.ndarray:
    img = np.empty((height, width, 3), dtype=np.uint8)
    img[:, :] = color
    return img


@pytest.fixture
def make_layer():
    """Factory for a reset, active layer of the given size."""
    def _make(width: int = 100, height: int = 100, index: int = 0, active: bool = True) -> Layer:
        layer = Layer(index=index, source_image=solid())
        layer.reset(None, width, height)
        layer.active = active
        return layer
    return _make


@pytest.fixture
def three_images():
    return [solid((255, 0, 0)), solid((0, 255, 0)), solid((0, 0, 255))]
