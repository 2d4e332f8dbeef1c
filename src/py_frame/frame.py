import logging

from collections.abc import Mapping

from .display import _printr
from .errors import PyFrameKeyError
from .errors import PyFrameTypeError
from .errors import PyFrameValueError
from .series import Series
from .typing import cast_value
from .typing import infer_dtype

_log = logging.getLogger(__name__)


def _missing_key_error(axis, key):
	return PyFrameKeyError(f"{axis} {key!r} not found in Frame")


def _pairs(entries):
	"""(key, value) pairs from a mapping or an iterable of pairs."""
	if isinstance(entries, Mapping):
		return entries.items()
	return entries


def transpose(mapping):
	"""
	Regroup ``{outer: {inner: value}}`` as ``{inner: {outer: value}}``.

	Every dict in the result is new; values are carried over as they are.
	Outer keys with no entries have nothing to contribute and do not appear.

	Examples
	--------
	>>> transpose({'r1': {'a': 1, 'b': 2}, 'r2': {'a': 3}})
	{'a': {'r1': 1, 'r2': 3}, 'b': {'r1': 2}}
	"""
	out = {}
	for outer, entries in mapping.items():
		for inner, value in entries.items():
			if inner not in out:
				out[inner] = {}
			out[inner][outer] = value
	return out


class FrameSeries(Series):
	"""
	Live view of one row or column of a Frame.

	The view reads straight from the frame's own entry for its key, so it
	always shows the current state. Every write is routed through the
	frame, which updates the row-major and column-major maps together.
	"""

	def __init__(self, basis, setter, as_row=False):
		# basis is the frame's dict for this key, shared on purpose
		self._basis = basis
		self._as_row = as_row
		self._setter = setter

	def _set(self, key, value):
		self._setter(key, value)

	def __delitem__(self, key):
		raise PyFrameTypeError("Frame views do not support deletion; select a sub-frame instead")


class Frame:
	"""
	Observations keyed by (row, column).

	Two maps hold the same cells: ``_row_major`` groups them by row and
	``_col_major`` by column. For every recorded (row, col),
	``_row_major[row][col] == _col_major[col][row]``, and a row or column
	key exists only while it has at least one cell.
	"""

	def __init__(self):
		self._row_major = {}
		self._col_major = {}

	@classmethod
	def _from_maps(cls, row_major, col_major):
		frame = cls.__new__(cls)
		frame._row_major = row_major
		frame._col_major = col_major
		return frame

	#-----------------------------------------------------
	# Bulk construction
	#-----------------------------------------------------

	@classmethod
	def from_rows(cls, rows):
		"""
		Build a frame from ``{row: {col: value}}`` or ``(row, entries)`` pairs.

		Each row's entries may be a mapping or (col, value) pairs. Rows with
		no entries are skipped.
		"""
		row_major = {}
		for row, entries in _pairs(rows):
			entries = dict(_pairs(entries))
			if entries:
				row_major[row] = entries
		frame = cls._from_maps(row_major, transpose(row_major))
		_log.debug("Built %d×%d frame from rows", *frame.shape)
		return frame

	@classmethod
	def from_columns(cls, cols):
		"""Build a frame from ``{col: {row: value}}`` or ``(col, entries)`` pairs."""
		col_major = {}
		for col, entries in _pairs(cols):
			entries = dict(_pairs(entries))
			if entries:
				col_major[col] = entries
		frame = cls._from_maps(transpose(col_major), col_major)
		_log.debug("Built %d×%d frame from columns", *frame.shape)
		return frame

	@classmethod
	def from_triples(cls, records):
		"""
		Build a frame from ``(row, col, value)`` records.

		A repeated (row, col) pair keeps the last value seen.
		"""
		row_major = {}
		for row, col, value in records:
			if row not in row_major:
				row_major[row] = {}
			row_major[row][col] = value
		frame = cls._from_maps(row_major, transpose(row_major))
		_log.debug("Built %d×%d frame from records", *frame.shape)
		return frame

	from_records = from_triples

	#-----------------------------------------------------
	# Cell access
	#-----------------------------------------------------

	def _ensure(self, row, col):
		"""
		Record a null cell at (row, col) in both maps if it is missing.

		Returns True when a cell was added. Both keys are checked before
		either map is touched.
		"""
		try:
			hash(row), hash(col)
		except TypeError as exc:
			raise PyFrameTypeError(f"Frame keys must be hashable, got ({row!r}, {col!r})") from exc
		if col in self._row_major.get(row, ()):
			return False
		self._row_major.setdefault(row, {})[col] = None
		self._col_major.setdefault(col, {})[row] = None
		return True

	def _write(self, row, col, value):
		# the only place cells are written after construction
		self._ensure(row, col)
		self._row_major[row][col] = value
		self._col_major[col][row] = value

	def get(self, row, col):
		"""
		Observation at (row, col).

		Reading a cell that was never written records it as None in both
		maps, so the row and column become visible in ``shape``. Use
		``peek`` to read without that side effect.
		"""
		if self._ensure(row, col):
			_log.debug("Materializing empty cell (%r, %r) on read", row, col)
		return self._row_major[row][col]

	def get_by_col(self, col, row):
		"""Same read as ``get(row, col)``, served from the column-major map."""
		if self._ensure(row, col):
			_log.debug("Materializing empty cell (%r, %r) on read", row, col)
		return self._col_major[col][row]

	def peek(self, row, col, default=None):
		"""Observation at (row, col), or ``default``; never materializes anything."""
		entries = self._row_major.get(row)
		if entries is None or col not in entries:
			return default
		return entries[col]

	def set(self, row, col, value):
		self._write(row, col, value)

	def set_by_col(self, col, row, value):
		self._write(row, col, value)

	def __getitem__(self, key):
		""" Get item(s) from self. Behavior varies by input type:
			# (row, col): the observation in that cell
			# (row, [cols]): column views for cols, see row_slice
			# ([rows], col): row views for rows, see col_slice
			# [cols]: an independent sub-frame of those columns
			# col: live view of that column

		Tuple-valued column keys must go through ``col`` / ``get``.
		"""
		if isinstance(key, tuple) and len(key) == 2:
			first, second = key
			if isinstance(first, list) and isinstance(second, list):
				raise PyFrameTypeError(
					"Cannot index a Frame by row and column lists at once; "
					"use select_rows(...).select_cols(...)"
				)
			if isinstance(second, list):
				return self.row_slice(first, second)
			if isinstance(first, list):
				return self.col_slice(second, first)
			return self.get(first, second)
		if isinstance(key, list):
			return self.select_cols(key)
		return self.col(key)

	def __setitem__(self, key, value):
		"""
		frame[row, col] = value writes one cell; frame[col] = {row: value, ...}
		writes each given cell of a column.
		"""
		if isinstance(key, tuple) and len(key) == 2:
			self._write(key[0], key[1], value)
			return
		if not isinstance(value, Mapping):
			raise PyFrameTypeError(
				f"Column assignment needs a mapping of row keys to values, not {type(value).__name__}"
			)
		for row, observation in value.items():
			self._write(row, key, observation)

	#-----------------------------------------------------
	# Views
	#-----------------------------------------------------

	def row(self, row):
		"""Live view of one row, keyed by column."""
		if row not in self._row_major:
			raise _missing_key_error("Row", row)
		return FrameSeries(
			self._row_major[row],
			lambda col, value: self._write(row, col, value),
			as_row=True)

	def col(self, col):
		"""Live view of one column, keyed by row."""
		if col not in self._col_major:
			raise _missing_key_error("Column", col)
		return FrameSeries(
			self._col_major[col],
			lambda row, value: self._write(row, col, value),
			as_row=False)

	@property
	def rows(self):
		return Series((row, self.row(row)) for row in self._row_major)

	@property
	def cols(self):
		return Series(((col, self.col(col)) for col in self._col_major), as_row=True)

	@property
	def row_keys(self):
		return list(self._row_major)

	@property
	def col_keys(self):
		return list(self._col_major)

	def row_slice(self, row, cols):
		"""
		Column views for ``cols``, keyed by column, taken alongside ``row``.

		``row`` must exist. The result is a series of live views, not a frame.
		"""
		if row not in self._row_major:
			raise _missing_key_error("Row", row)
		return Series(((col, self.col(col)) for col in cols), as_row=True)

	def col_slice(self, col, rows):
		"""Row views for ``rows``, keyed by row, taken alongside ``col``."""
		if col not in self._col_major:
			raise _missing_key_error("Column", col)
		return Series((row, self.row(row)) for row in rows)

	#-----------------------------------------------------
	# Sub-frames
	#-----------------------------------------------------

	def _entries(self, major, axis, key):
		try:
			return major[key]
		except KeyError:
			raise _missing_key_error(axis, key) from None

	def select_cols(self, cols):
		"""Independent frame holding only ``cols``."""
		return type(self).from_columns(
			(col, self._entries(self._col_major, "Column", col)) for col in cols)

	def select_rows(self, rows):
		"""Independent frame holding only ``rows``."""
		return type(self).from_rows(
			(row, self._entries(self._row_major, "Row", row)) for row in rows)

	@property
	def T(self):
		"""Independent frame with rows and columns swapped."""
		return self._from_maps(transpose(self._row_major), transpose(self._col_major))

	#-----------------------------------------------------
	# Search
	#-----------------------------------------------------

	def find(self, target, kind=None):
		"""
		(row, col) of the first observation matching ``target``.

		Rows are scanned in order, and the columns of each row in order.
		``target`` is either a predicate or a value compared with ``==``;
		None cells never equal a value. With ``kind``, each observation is
		cast to ``kind`` before it is tested.

		Raises
		------
		PyFrameKeyError
			Nothing matched
		PyFrameTypeError
			An observation visited before the match is not a ``kind``
		"""
		found, keys = self.try_find(target, kind)
		if not found:
			raise PyFrameKeyError("No matching observation found")
		return keys

	def try_find(self, target, kind=None):
		"""Same scan as ``find``; returns (True, (row, col)) or (False, None)."""
		if callable(target):
			predicate = target
		else:
			predicate = lambda observation: observation is not None and observation == target

		for row, entries in self._row_major.items():
			for col, observation in entries.items():
				if kind is not None:
					observation = cast_value(observation, kind)
				if predicate(observation):
					return True, (row, col)
		return False, None

	#-----------------------------------------------------
	# Shape & export
	#-----------------------------------------------------

	@property
	def shape(self):
		return (len(self._row_major), len(self._col_major))

	def __len__(self):
		return len(self._row_major)

	def __iter__(self):
		return iter(self._row_major)

	def __eq__(self, other):
		if not isinstance(other, Frame):
			return NotImplemented
		return self._row_major == other._row_major

	__hash__ = None

	def records(self):
		"""(row, col, value) for every cell, in row-major order."""
		for row, entries in self._row_major.items():
			for col, value in entries.items():
				yield row, col, value

	def to_dict(self, by="rows"):
		"""Copy of the nested map grouped ``by`` rows or cols."""
		if by == "rows":
			major = self._row_major
		elif by == "cols":
			major = self._col_major
		else:
			raise PyFrameValueError(f"by must be 'rows' or 'cols', not {by!r}")
		return {key: dict(entries) for key, entries in major.items()}

	def schema(self):
		"""Inferred DataType of each column."""
		return Series(
			((col, infer_dtype(entries.values())) for col, entries in self._col_major.items()),
			as_row=True)

	def __repr__(self):
		return _printr(self)
