"""
Debug text representation of multivectors.

Format: walk the 16 blades in display order

    1, e0, e1, e2, e3, e01, e02, e03, e12, e31, e23, e021, e013, e032, e123, e0123

and print every nonzero component as ``<value><blade-name>`` (no name for the
scalar), joined by ``" + "``. An all-zero multivector prints as ``0``. The
text always ends with a newline.

Example:
    >>> format_multivector(Plane(1.0, 0.0, 0.5, 2.0))
    '2e0 + 1e1 + 0.5e3\\n'
"""

import logging
import sys
from typing import Any, Optional, TextIO

import numpy as np

from ..backends import to_numpy
from ..utils.config import get_config
from .blades import DISPLAY_ORDER

logger = logging.getLogger(__name__)


def _format_value(value: Any, precision: int) -> str:
    array = to_numpy(value)
    if array.ndim == 0:
        return '%0.*g' % (precision, float(array))
    return np.array2string(array, precision=precision, separator=', ')


def format_multivector(mv, precision: Optional[int] = None) -> str:
    """
    Render a multivector in display order.

    Args:
        mv: Multivector of any shape
        precision: Significant digits (defaults to the configured print_precision)

    Returns:
        Newline-terminated text
    """
    if precision is None:
        precision = get_config().print_precision

    terms = []
    for blade in DISPLAY_ORDER:
        value = mv.get(blade)
        if value is None or not np.any(to_numpy(value)):
            continue
        terms.append(_format_value(value, precision) + blade.display_name)

    if not terms:
        return '0\n'
    return ' + '.join(terms) + '\n'


def print_multivector(mv, name: Optional[str] = None, file: Optional[TextIO] = None) -> None:
    """Write the debug text to a stream, optionally prefixed with 'name = '."""
    file = file if file is not None else sys.stdout
    prefix = f"{name} = " if name else ''
    file.write(prefix + format_multivector(mv))


def log_multivector(mv, name: Optional[str] = None, level: int = logging.DEBUG) -> None:
    """Emit the debug text through this module's logger."""
    if logger.isEnabledFor(level):
        text = format_multivector(mv).rstrip('\n')
        logger.log(level, f"{name} = {text}" if name else text)
