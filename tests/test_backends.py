"""
Tests for scalar backends and differentiable evaluation.

The product engines only use + - * / on component values; backends supply
literals, variables and elementary functions.
"""

import logging
import math

import numpy as np
import pytest
import torch

from sparse_pga.backends import (
    FloatBackend,
    NumpyBackend,
    TorchBackend,
    backend_for,
    default_backend,
    get_backend,
    to_numpy,
)
from sparse_pga.pga.algebra import Plane, inner_product
from sparse_pga.pga.motors import rotor_from_axis_angle
from sparse_pga.pga.primitives import point, point_to_cartesian
from sparse_pga.pga.transforms import transform
from sparse_pga.utils.config import set_config


class TestBackendRegistry:
    """Tests for backend lookup."""

    def test_get_backend(self):
        assert isinstance(get_backend('float'), FloatBackend)
        assert isinstance(get_backend('numpy'), NumpyBackend)
        assert isinstance(get_backend('torch'), TorchBackend)

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown scalar backend"):
            get_backend('decimal')

    def test_backend_instance_passes_through(self):
        backend = TorchBackend(dtype='float32')
        assert get_backend(backend) is backend

    def test_backend_for_value(self):
        assert isinstance(backend_for(1.0), FloatBackend)
        assert isinstance(backend_for(np.float64(1.0)), NumpyBackend)
        assert isinstance(backend_for(np.ones(3)), NumpyBackend)
        assert isinstance(backend_for(torch.tensor(1.0)), TorchBackend)

    def test_backend_for_matches_tensor_dtype(self):
        backend = backend_for(torch.tensor(1.0, dtype=torch.float32))
        assert backend.dtype == torch.float32


class TestLiterals:
    """Tests for literal and variable construction."""

    def test_float_literal(self):
        assert FloatBackend().literal(2) == 2.0

    def test_numpy_literal_like_array(self):
        value = NumpyBackend().literal(0.0, like=np.ones(3))
        assert value.shape == (3,)
        assert not value.any()

    def test_torch_literal(self):
        value = TorchBackend().literal(3.0)
        assert value.dtype == torch.float64
        assert not value.requires_grad

    def test_torch_literal_like_variable_is_constant(self):
        x = TorchBackend().variable(1.0)
        zero = TorchBackend().zero(like=x)
        assert not zero.requires_grad

    def test_constant_with_variable_flag(self):
        backend = TorchBackend()
        assert backend.is_variable(backend.constant(2.0, variable=True))
        assert not backend.is_variable(backend.constant(2.0))

    def test_float_variable_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger='sparse_pga.backends'):
            value = FloatBackend().variable(2.0)
        assert value == 2.0
        assert any('cannot track derivatives' in m for m in caplog.messages)

    def test_to_numpy_detaches(self):
        x = TorchBackend().variable(1.5)
        assert to_numpy(x) == 1.5

    def test_default_backend_follows_config(self):
        assert isinstance(default_backend(), FloatBackend)
        set_config(default_backend='torch', torch_dtype='float32')
        backend = default_backend()
        assert isinstance(backend, TorchBackend)
        assert backend.dtype == torch.float32

    def test_default_zero_components(self):
        set_config(default_backend='torch')
        p = Plane()
        assert isinstance(p.e1, torch.Tensor)
        assert p.e1.dtype == torch.float64

    def test_elementary_functions(self):
        assert FloatBackend().cos(0.0) == 1.0
        assert NumpyBackend().sqrt(np.float64(4.0)) == 2.0
        assert torch.isclose(TorchBackend().sin(torch.tensor(math.pi / 2)), torch.tensor(1.0, dtype=torch.float64))


class TestDivision:
    """Division by zero gives IEEE inf/NaN on every backend."""

    def test_float_divide_by_zero(self):
        backend = FloatBackend()
        assert backend.divide(1.0, 0.0) == math.inf
        assert backend.divide(-2.0, 0.0) == -math.inf
        assert math.isnan(backend.divide(0.0, 0.0))
        assert type(backend.divide(1.0, 0.0)) is float

    def test_float_divide(self):
        assert FloatBackend().divide(3.0, 2.0) == 1.5

    def test_float_divide_defers_to_tensor(self):
        result = FloatBackend().divide(torch.tensor([1.0, 0.0]), 0.0)
        assert torch.isinf(result[0])
        assert torch.isnan(result[1])

    def test_float_sqrt_of_negative_is_nan(self):
        assert math.isnan(FloatBackend().sqrt(-1.0))

    def test_numpy_divide_by_zero(self):
        result = NumpyBackend().divide(np.array([1.0, 0.0]), 0.0)
        assert np.isposinf(result[0])
        assert np.isnan(result[1])

    def test_torch_divide_by_zero(self):
        result = TorchBackend().divide(torch.tensor(1.0), torch.tensor(0.0))
        assert torch.isinf(result)


class TestDifferentiation:
    """Products are differentiable through torch autograd."""

    def test_gradient_of_plane_square(self):
        x = TorchBackend().variable(2.0)
        p = Plane(x, 0.0, 0.0, 1.0)
        inner_product(p, p).scalar.backward()
        assert x.grad.item() == pytest.approx(4.0)

    def test_gradient_of_rotated_point(self):
        theta = TorchBackend().variable(0.3)
        rotated = transform(point(1.0, 0.0, 0.0), rotor_from_axis_angle((0.0, 0.0, 1.0), theta))
        x, y, _ = point_to_cartesian(rotated)
        x.backward()
        assert theta.grad.item() == pytest.approx(-math.sin(0.3))
        assert y.item() == pytest.approx(math.sin(0.3))

    def test_fresh_gradient_per_pass(self):
        x = TorchBackend().variable(3.0)
        grads = []
        for _ in range(2):
            p = Plane(x, x, 0.0, 0.0)
            inner_product(p, p).scalar.backward()
            grads.append(x.grad.item())
            x.grad = None
        assert grads == [pytest.approx(12.0), pytest.approx(12.0)]
