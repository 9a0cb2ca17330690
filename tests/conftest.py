import os
import sys

import pytest

# Allow running the tests without installing the package
_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _root not in sys.path:
    sys.path.insert(0, _root)

from chunk_builder import ROT_A, ROT_B, frame_datagram, skeleton_datagram  # noqa: E402


@pytest.fixture
def two_bone_skeleton_bytes():
    return skeleton_datagram([(0, 0, ROT_A), (1, 0, ROT_B)])


@pytest.fixture
def frame_bytes():
    return frame_datagram(7, 1000, [(3, ROT_B)])
