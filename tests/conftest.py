"""
Shared fixtures for the dot field tests.

Everything here runs headless: no camera, no microphone, no window.
"""

import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from params import Params  # noqa: E402


def make_hand(up=(False, False, False, False, False), x=0.5):
    """21 normalised landmarks with the given fingers (thumb..pinky) raised."""
    pts = [(x, 0.8)] * 21
    bases = {4: 2, 8: 5, 12: 9, 16: 13, 20: 17}
    for (tip, base), raised in zip(sorted(bases.items()), up):
        pts[base] = (x, 0.6)
        pts[tip] = (x, 0.4 if raised else 0.7)
    return pts


@pytest.fixture
def params():
    return Params()


@pytest.fixture
def canvas():
    return np.zeros((600, 800, 3), dtype=np.uint8)


@pytest.fixture
def hand():
    return make_hand
