"""
Rendering of recorded values to their canonical text form.
"""
from __future__ import annotations

import sys
from enum import Enum
from typing import Any

# Optional numpy import - only used to render arrays without summarisation
try:
    import numpy as np
    HAS_NUMPY = True
except ImportError:
    np = None  # type: ignore
    HAS_NUMPY = False


class Rendering(str, Enum):
    """How a value is turned into text before it is stored or compared."""

    DISPLAY = "display"
    DEBUG = "debug"


def render(value: Any, rendering: Rendering = Rendering.DISPLAY) -> str:
    """Render a value with the given strategy.

    DISPLAY uses ``str`` and DEBUG uses ``repr``. Numpy arrays, including
    arrays nested in containers, are printed in full.
    """
    rendering = Rendering(rendering)
    func = str if rendering is Rendering.DISPLAY else repr

    if HAS_NUMPY and np is not None:
        with np.printoptions(threshold=sys.maxsize):
            return func(value)
    return func(value)
