"""
Pytest configuration and fixtures for sparse-pga tests.
"""

import math

import numpy as np
import pytest
import torch

from sparse_pga.pga import blades
from sparse_pga.pga.algebra import Line, Motor, Plane, Point, Rotor, Translator
from sparse_pga.utils.config import Config, set_config


NAMED_SHAPES = {
    'scalar': blades.SCALAR,
    'complex': blades.COMPLEX,
    'dual_number': blades.DUAL_NUMBER,
    'plane': blades.PLANE,
    'line': blades.LINE,
    'point': blades.POINT,
    'rotor': blades.ROTOR,
    'translator': blades.TRANSLATOR,
    'motor': blades.MOTOR,
    'full': blades.FULL,
}


@pytest.fixture(autouse=True)
def default_config():
    """Every test starts and ends with the default configuration."""
    config = set_config(Config())
    yield config
    set_config(Config())


@pytest.fixture
def rng():
    """Seeded numpy generator."""
    return np.random.default_rng(0)


@pytest.fixture
def generator():
    """Seeded torch generator."""
    return torch.Generator().manual_seed(0)


@pytest.fixture
def named_shapes():
    return dict(NAMED_SHAPES)


@pytest.fixture
def sample_plane():
    """The plane x + 2y + 3z + 4 = 0."""
    return Plane(1.0, 2.0, 3.0, 4.0)


@pytest.fixture
def sample_point():
    """Normalized point (1, 2, 3)."""
    return Point(e021=3.0, e013=2.0, e032=1.0, e123=1.0)


@pytest.fixture
def sample_line():
    return Line(e01=0.5, e02=-1.0, e03=2.0, e12=1.0, e31=-0.5, e23=0.25)


@pytest.fixture
def sample_motor():
    """Unit motor: 60 degrees about z, then a translation by (1, -2, 0.5)."""
    c, s = math.cos(math.pi / 6), math.sin(math.pi / 6)
    r = Rotor(scalar=c, e12=-s)
    t = Translator(scalar=1.0, e01=-0.5, e02=1.0, e03=-0.25)
    return (t * r).cast(Motor)


@pytest.fixture
def random_mv(generator):
    """Factory for multivectors with standard normal float64 tensor components."""
    def make(cls, batch=()):
        values = torch.randn(len(cls.BLADES), *batch, generator=generator, dtype=torch.float64)
        return cls(*values.unbind(0))
    return make


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
