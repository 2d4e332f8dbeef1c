class PyFrameError(Exception):
	"""Base exception for py-frame library."""
	pass


class PyFrameKeyError(PyFrameError, KeyError):
	"""Raised when a row, column or series key is missing."""
	pass


class PyFrameTypeError(PyFrameError, TypeError):
	"""Raised when an observation cannot be cast or converted, or a view is misused."""
	pass


class PyFrameValueError(PyFrameError, ValueError):
	"""Raised for invalid arguments or mismatched sizes."""
	pass
