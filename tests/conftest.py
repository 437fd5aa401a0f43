import numpy as np
import pytest

from diskpack.disk import Disk
from diskpack.geometry import Box


@pytest.fixture
def box():
    return Box(10.0, 10.0)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def pair():
    # 0.2 만큼 겹친 두 원판
    return [Disk.at(4.0, 5.0, 1.0), Disk.at(5.8, 5.0, 1.0)]
