"""
Scalar backends for sparse multivectors.

A multivector stores one value per present blade; those values can be plain
Python floats, numpy values (scalars or arrays, for batched evaluation) or
torch tensors. The torch backend is the differentiable one: a variable is a
leaf tensor with ``requires_grad=True`` and autograd supplies derivatives,
so every backward pass yields fresh gradients without touching shared state.
"""

import logging
import math
from typing import Any, Dict, Optional, Union

import numpy as np
import torch

from .core.base import ScalarBackend
from .utils.config import get_config
from .core.constants import (
    BACKEND_FLOAT,
    BACKEND_NUMPY,
    BACKEND_TORCH,
    DEFAULT_TORCH_DTYPE,
)

logger = logging.getLogger(__name__)


class FloatBackend(ScalarBackend):
    """
    Plain Python floats.

    Python raises where IEEE arithmetic gives inf or NaN, so division goes
    through numpy float64 and the square root of a negative number is NaN.
    """

    name = BACKEND_FLOAT

    def literal(self, value: float, like: Optional[Any] = None) -> float:
        return float(value)

    def variable(self, value: float) -> float:
        logger.warning(
            f"FloatBackend cannot track derivatives; returning constant {value!r}"
        )
        return float(value)

    def is_variable(self, value: Any) -> bool:
        return False

    def sqrt(self, value: float) -> float:
        if value >= 0:
            return math.sqrt(value)
        return math.nan

    def divide(self, numerator: Any, denominator: Any) -> Any:
        if not isinstance(numerator, (int, float)) or not isinstance(denominator, (int, float)):
            return numerator / denominator
        with np.errstate(divide='ignore', invalid='ignore'):
            return float(np.float64(numerator) / np.float64(denominator))

    def sin(self, value: float) -> float:
        return math.sin(value)

    def cos(self, value: float) -> float:
        return math.cos(value)

    def to_float(self, value: Any) -> float:
        return float(value)


class NumpyBackend(ScalarBackend):
    """numpy float64 values; arrays broadcast through every product."""

    name = BACKEND_NUMPY

    def __init__(self, dtype: Union[str, np.dtype] = np.float64):
        self.dtype = np.dtype(dtype)

    def literal(self, value: float, like: Optional[Any] = None) -> Any:
        if isinstance(like, np.ndarray):
            return np.full_like(like, value, dtype=np.result_type(like, self.dtype))
        return self.dtype.type(value)

    def variable(self, value: float) -> Any:
        logger.warning(
            f"NumpyBackend cannot track derivatives; returning constant {value!r}"
        )
        return self.literal(value)

    def is_variable(self, value: Any) -> bool:
        return False

    def sqrt(self, value: Any) -> Any:
        return np.sqrt(value)

    def sin(self, value: Any) -> Any:
        return np.sin(value)

    def cos(self, value: Any) -> Any:
        return np.cos(value)

    def divide(self, numerator: Any, denominator: Any) -> Any:
        with np.errstate(divide='ignore', invalid='ignore'):
            return numerator / denominator

    def to_float(self, value: Any) -> float:
        return float(value)

    def __repr__(self) -> str:
        return f"NumpyBackend(dtype={self.dtype})"


class TorchBackend(ScalarBackend):
    """
    torch tensors.

    Args:
        dtype: Floating point dtype for new literals and variables
        device: Device for new literals and variables

    Example:
        >>> backend = TorchBackend()
        >>> x = backend.variable(2.0)
        >>> y = x * x
        >>> y.backward()
        >>> x.grad
        tensor(4., dtype=torch.float64)
    """

    name = BACKEND_TORCH

    def __init__(
        self,
        dtype: Union[str, torch.dtype] = DEFAULT_TORCH_DTYPE,
        device: Union[str, torch.device] = 'cpu',
    ):
        if isinstance(dtype, str):
            dtype = getattr(torch, dtype)
        self.dtype = dtype
        self.device = torch.device(device)

    def literal(self, value: float, like: Optional[Any] = None) -> torch.Tensor:
        if isinstance(like, torch.Tensor):
            return torch.full_like(like, value).detach()
        return torch.tensor(value, dtype=self.dtype, device=self.device)

    def variable(self, value: float) -> torch.Tensor:
        return torch.tensor(
            value, dtype=self.dtype, device=self.device, requires_grad=True
        )

    def is_variable(self, value: Any) -> bool:
        return isinstance(value, torch.Tensor) and value.requires_grad

    def sqrt(self, value: Any) -> torch.Tensor:
        return torch.sqrt(torch.as_tensor(value, dtype=self.dtype))

    def sin(self, value: Any) -> torch.Tensor:
        return torch.sin(torch.as_tensor(value, dtype=self.dtype))

    def cos(self, value: Any) -> torch.Tensor:
        return torch.cos(torch.as_tensor(value, dtype=self.dtype))

    def to_float(self, value: Any) -> float:
        if isinstance(value, torch.Tensor):
            return float(value.detach().cpu())
        return float(value)

    def __repr__(self) -> str:
        return f"TorchBackend(dtype={self.dtype}, device={self.device})"


_BACKENDS: Dict[str, ScalarBackend] = {
    BACKEND_FLOAT: FloatBackend(),
    BACKEND_NUMPY: NumpyBackend(),
    BACKEND_TORCH: TorchBackend(),
}


def register_backend(backend: ScalarBackend) -> None:
    """Register (or replace) a backend under its name."""
    if backend.name in _BACKENDS:
        logger.debug(f"Replacing scalar backend '{backend.name}' with {backend!r}")
    _BACKENDS[backend.name] = backend


def get_backend(name: Union[str, ScalarBackend]) -> ScalarBackend:
    """
    Look up a backend by name.

    Args:
        name: 'float', 'numpy', 'torch', a registered name, or a backend

    Returns:
        ScalarBackend instance

    Raises:
        ValueError: If no backend is registered under name
    """
    if isinstance(name, ScalarBackend):
        return name
    try:
        return _BACKENDS[name]
    except KeyError:
        raise ValueError(
            f"Unknown scalar backend '{name}'. Available: {sorted(_BACKENDS)}"
        ) from None


def backend_for(value: Any) -> ScalarBackend:
    """Pick the backend matching a value's type."""
    if isinstance(value, torch.Tensor):
        backend = _BACKENDS[BACKEND_TORCH]
        if isinstance(backend, TorchBackend) and (
            backend.dtype != value.dtype or backend.device != value.device
        ):
            if value.is_floating_point():
                return TorchBackend(dtype=value.dtype, device=value.device)
            return TorchBackend(device=value.device)
        return backend
    if isinstance(value, (np.ndarray, np.generic)):
        return _BACKENDS[BACKEND_NUMPY]
    return _BACKENDS[BACKEND_FLOAT]


def default_backend() -> ScalarBackend:
    """Backend named by the current configuration."""
    config = get_config()
    if config.default_backend == BACKEND_TORCH:
        backend = _BACKENDS[BACKEND_TORCH]
        if isinstance(backend, TorchBackend) and str(backend.dtype) != f"torch.{config.torch_dtype}":
            return TorchBackend(dtype=config.torch_dtype, device=backend.device)
        return backend
    return get_backend(config.default_backend)


def to_numpy(value: Any) -> np.ndarray:
    """Detached numpy view of a scalar value of any backend."""
    if isinstance(value, torch.Tensor):
        return value.detach().cpu().numpy()
    return np.asarray(value)
