"""
py-frame: a Pythonic, zero-dependency keyed table library

Observations live at (row key, column key) crossings and can be reached
row-wise or column-wise with equal ease: every Frame keeps a row-major
and a column-major map in lockstep.

Main classes:
    - Series: 1D keyed sequence of observations (a mutable mapping)
    - Frame: 2D table keyed by row and column
    - FrameSeries: live row/column view of a Frame; writes go back to it

Zero external dependencies - pure Python stdlib only.
"""

import logging

from .series import Series
from .frame import Frame, FrameSeries, transpose
from .typing import DataType, infer_dtype
from .errors import PyFrameError, PyFrameKeyError, PyFrameValueError, PyFrameTypeError

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
	"Series",
	"Frame",
	"FrameSeries",
	"transpose",
	"DataType",
	"infer_dtype",
	"PyFrameError",
	"PyFrameKeyError",
	"PyFrameValueError",
	"PyFrameTypeError"
]
