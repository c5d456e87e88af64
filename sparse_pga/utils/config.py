"""
Configuration management for sparse-pga.

Provides the configuration dataclass, JSON load/save helpers and the
process-wide default configuration read by formatting, comparisons and
zero-literal creation.
"""

import json
import logging
from dataclasses import dataclass, field, asdict
from typing import Optional, Dict, Any
from pathlib import Path

from ..core.constants import (
    BACKEND_FLOAT,
    BACKEND_NUMPY,
    BACKEND_TORCH,
    DEFAULT_ATOL,
    DEFAULT_BACKEND,
    DEFAULT_PRINT_PRECISION,
    DEFAULT_RTOL,
    DEFAULT_TORCH_DTYPE,
)

logger = logging.getLogger(__name__)

_KNOWN_BACKENDS = (BACKEND_FLOAT, BACKEND_NUMPY, BACKEND_TORCH)


@dataclass
class Config:
    """
    Configuration for sparse-pga.

    Attributes:
        # Formatting
        print_precision: Significant digits in the debug text representation

        # Comparisons
        atol: Absolute tolerance for allclose
        rtol: Relative tolerance for allclose

        # Scalars
        default_backend: Backend for multivectors built without values
            ('float', 'numpy', 'torch')
        torch_dtype: dtype name used when the default backend is 'torch'
    """

    # Formatting
    print_precision: int = DEFAULT_PRINT_PRECISION

    # Comparisons
    atol: float = DEFAULT_ATOL
    rtol: float = DEFAULT_RTOL

    # Scalars
    default_backend: str = DEFAULT_BACKEND
    torch_dtype: str = DEFAULT_TORCH_DTYPE

    # Additional fields
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.print_precision < 1:
            raise ValueError(
                f"print_precision must be positive, got {self.print_precision}"
            )
        if self.atol < 0 or self.rtol < 0:
            raise ValueError(
                f"Tolerances must be non-negative, got atol={self.atol}, rtol={self.rtol}"
            )
        if self.default_backend not in _KNOWN_BACKENDS:
            logger.debug(
                f"default_backend '{self.default_backend}' is not built in; "
                f"it must be registered before use"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'Config':
        """Create config from dictionary."""
        # Extract known fields
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        known_kwargs = {k: v for k, v in config_dict.items() if k in known_fields}
        extra_kwargs = {k: v for k, v in config_dict.items() if k not in known_fields}

        config = cls(**known_kwargs)
        config.extra.update(extra_kwargs)
        return config

    def update(self, **kwargs) -> 'Config':
        """Return a new config with updated values."""
        config_dict = self.to_dict()
        config_dict.update(kwargs)
        return Config.from_dict(config_dict)


_config = Config()


def get_config() -> Config:
    """Return the process-wide default configuration."""
    return _config


def set_config(config: Optional[Config] = None, **kwargs) -> Config:
    """
    Replace the process-wide default configuration.

    Args:
        config: New configuration (defaults to the current one)
        **kwargs: Field overrides applied on top of config

    Returns:
        The configuration now in effect
    """
    global _config
    config = config if config is not None else _config
    if kwargs:
        config = config.update(**kwargs)
    _config = config
    logger.debug(f"Default configuration set to {config}")
    return config


def load_config(filepath: str) -> Config:
    """
    Load configuration from JSON file.

    Args:
        filepath: Path to JSON config file

    Returns:
        Config object
    """
    filepath = Path(filepath)
    with open(filepath, 'r') as f:
        config_dict = json.load(f)
    logger.info(f"Loaded configuration from {filepath}")
    return Config.from_dict(config_dict)


def save_config(config: Config, filepath: str) -> None:
    """
    Save configuration to JSON file.

    Args:
        config: Config object to save
        filepath: Output file path
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)
    logger.info(f"Saved configuration to {filepath}")
