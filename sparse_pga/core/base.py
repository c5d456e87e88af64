"""
Abstract base class for scalar backends.

The product engines never inspect component values beyond binary ``+ - * /``
and unary ``-``. Everything else a caller might need from a scalar type
(building literals, marking free variables, square roots for norms) is
supplied by a ScalarBackend.

Class Hierarchy:
    ScalarBackend (abstract)
    ├── FloatBackend   (plain Python floats)
    ├── NumpyBackend   (numpy float64 scalars and arrays)
    └── TorchBackend   (torch tensors, differentiable through autograd)
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class ScalarBackend(ABC):
    """
    Abstract base class for the scalar types a multivector can hold.

    Subclasses must implement:
        - literal(): build a constant from a Python number
        - variable(): build a value that derivatives are taken with respect to
        - is_variable(): tell whether a value is a free variable
        - sqrt(), sin(), cos(): elementary functions used by norms and rotors
        - to_float(): convert a value back to a Python float

    divide() defaults to the scalar type's own division, which must follow
    IEEE semantics (inf/NaN, never an exception) for a zero denominator.

    Example:
        backend = get_backend('torch')
        x = backend.variable(2.0)
        y = backend.constant(3.0)
    """

    name: str = "abstract"

    @abstractmethod
    def literal(self, value: float, like: Optional[Any] = None) -> Any:
        """
        Build a constant from a numeric literal.

        Args:
            value: Python number
            like: Optional existing value whose dtype/device should be matched

        Returns:
            Constant scalar of this backend's type
        """
        pass

    @abstractmethod
    def variable(self, value: float) -> Any:
        """Build a free variable (a value derivatives are taken against)."""
        pass

    @abstractmethod
    def is_variable(self, value: Any) -> bool:
        """Whether value is a free variable."""
        pass

    @abstractmethod
    def sqrt(self, value: Any) -> Any:
        pass

    @abstractmethod
    def sin(self, value: Any) -> Any:
        pass

    @abstractmethod
    def cos(self, value: Any) -> Any:
        pass

    @abstractmethod
    def to_float(self, value: Any) -> float:
        pass

    def constant(self, value: float, variable: bool = False) -> Any:
        """
        Build a scalar from a literal and a "free variable" flag.

        This is the construction the generic scalar contract asks for:
        the same call produces a plain constant or a differentiable variable.
        """
        if variable:
            return self.variable(value)
        return self.literal(value)

    def zero(self, like: Optional[Any] = None) -> Any:
        return self.literal(0.0, like=like)

    def one(self, like: Optional[Any] = None) -> Any:
        return self.literal(1.0, like=like)

    def divide(self, numerator: Any, denominator: Any) -> Any:
        """numerator / denominator; a zero denominator gives inf or NaN."""
        return numerator / denominator

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
