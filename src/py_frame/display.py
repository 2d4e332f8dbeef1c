"""Display and repr logic for Series and Frame."""

from __future__ import annotations
from collections.abc import Mapping
from datetime import date
from typing import List

from .typing import infer_dtype


# Separators and padding used by the text dumps
COL_SEPARATOR = " : "
ENTRY_SEPARATOR = " => "
MIN_KEY_WIDTH = 4

# How a missing observation is drawn in a frame cell / a series entry
NULL_CELL = ""
NULL_ENTRY = "null"


def _format_value(v, null: str) -> str:
	"""Single observation (or key) as display text."""
	if v is None:
		return null
	if isinstance(v, bool):
		return str(v)
	if isinstance(v, float):
		# shortest round-tripping text, never truncated
		return repr(v)
	if isinstance(v, date):
		return v.isoformat()
	if isinstance(v, Mapping):
		# nested series / views stay on one line
		return f"<{type(v).__name__} ({len(v)})>"
	return str(v)


def _kind_name(values) -> str:
	return infer_dtype(values).name


def _format_column(entries, row_keys, header: str) -> List[str]:
	"""Header followed by one padded cell per row key; numeric right, others left."""
	cells = [_format_value(entries.get(row), NULL_CELL) for row in row_keys]
	width = max(len(header), *(len(c) for c in cells))
	if infer_dtype(entries.values()).is_numeric:
		return [s.rjust(width) for s in [header] + cells]
	return [s.ljust(width) for s in [header] + cells]


def _repr_series(s) -> str:
	"""Pretty repr for a Series: one ``ordinal : key => value`` line per entry."""
	basis = s._basis
	x, y = s.shape
	title = f"Series[{_kind_name(basis.keys())} ({x}) x {_kind_name(basis.values())} ({y})]"
	if not basis:
		return title

	int_width = len(str(len(basis)))
	keys = [_format_value(k, NULL_ENTRY) for k in basis]
	values = [_format_value(v, NULL_ENTRY) for v in basis.values()]
	key_width = max(len(k) for k in keys)
	value_width = max(len(v) for v in values)

	lines = [title]
	for i, (k, v) in enumerate(zip(keys, values)):
		line = f"{str(i).ljust(int_width)}{COL_SEPARATOR}{k.ljust(key_width)}{ENTRY_SEPARATOR}{v.ljust(value_width)}"
		lines.append(line.rstrip())
	return "\n".join(lines)


def _repr_frame(f) -> str:
	"""Pretty repr for a Frame: header of column keys, gutter of ordinal and row key."""
	rows, cols = f.shape
	title = f"Frame[{_kind_name(f._row_major)} ({rows}) x {_kind_name(f._col_major)} ({cols})]"
	if not rows:
		return title

	row_keys = list(f._row_major)
	int_width = len(str(rows))
	labels = [_format_value(r, NULL_ENTRY) for r in row_keys]
	key_width = max(MIN_KEY_WIDTH, *(len(label) for label in labels))

	# Reads go through .get so rendering never materializes cells
	columns = [
		_format_column(entries, row_keys, _format_value(col, NULL_ENTRY))
		for col, entries in f._col_major.items()
	]

	header = [" " * int_width, "Key".ljust(key_width)] + [c[0] for c in columns]
	lines = [title, COL_SEPARATOR.join(header).rstrip()]
	for i, label in enumerate(labels):
		parts = [str(i).rjust(int_width), label.ljust(key_width)] + [c[i + 1] for c in columns]
		lines.append(COL_SEPARATOR.join(parts).rstrip())
	return "\n".join(lines)


def _printr(obj) -> str:
	"""Entry point used by Series.__repr__ and Frame.__repr__."""
	if hasattr(obj, "_row_major"):
		return _repr_frame(obj)
	return _repr_series(obj)
