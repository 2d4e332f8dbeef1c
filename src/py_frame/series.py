import warnings

from collections.abc import MutableMapping
from collections.abc import Sized
from types import FunctionType

from .display import _printr
from .errors import PyFrameKeyError
from .errors import PyFrameTypeError
from .errors import PyFrameValueError
from .typing import DataType
from .typing import convert_value
from .typing import infer_dtype

# Reindexing by key equality compares every old key against every new key
LARGE_SERIES_WARNING = 1000

_MISSING = object()


def _missing_key_error(key, context="Series"):
	return PyFrameKeyError(f"Key {key!r} not found in {context}")


def _is_collection(value) -> bool:
	return isinstance(value, Sized) and not isinstance(value, (str, bytes, bytearray))


class _KeysWhere:
	"""Keys whose value satisfies a predicate. Recomputed on every iteration, never cached."""
	__slots__ = ('_basis', '_predicate')

	def __init__(self, basis, predicate):
		self._basis = basis
		self._predicate = predicate

	def __iter__(self):
		predicate = self._predicate
		for key, value in self._basis.items():
			if predicate(value):
				yield key

	def __repr__(self):
		return f"KeysWhere({list(self)!r})"


class Series(MutableMapping):
	""" Keyed sequence of observations backed by a dict """

	def __init__(self, initial=(), as_row=False):
		"""
		Build a series from a mapping or an iterable of (key, value) pairs.

		The data is always copied; ``as_row`` only changes the reported shape.
		Use ``from_values`` for bare observations keyed by position.
		"""
		self._basis = dict(initial)
		self._as_row = as_row

	@classmethod
	def from_values(cls, observations, as_row=False):
		"""
		Positional series: the i-th observation is stored under key i.

		>>> Series.from_values(['x', 'y'])[1]
		'y'
		"""
		return cls(enumerate(observations), as_row=as_row)

	def _new(self, initial):
		"""Independent series with this series' orientation."""
		return Series(initial, as_row=self._as_row)

	#-----------------------------------------------------
	# Point access hooks (overridden by frame views)
	#-----------------------------------------------------

	def _get(self, key):
		try:
			return self._basis[key]
		except KeyError:
			raise _missing_key_error(key) from None

	def _set(self, key, value):
		self._basis[key] = value

	#-----------------------------------------------------
	# Mapping protocol
	#-----------------------------------------------------

	def __getitem__(self, key):
		""" Get item(s) from self. Behavior varies by input type:
			# list of keys: a new Series holding exactly those keys
			# plain function or lambda (not itself a key): lazy iterable of keys whose value satisfies it
			# anything else: the observation stored under that key

		Other callables (types, builtins, bound methods) are looked up as keys.
		"""
		if isinstance(key, list):
			return self.get_many(key)
		if isinstance(key, FunctionType) and key not in self:
			return self.keys_where(key)
		return self._get(key)

	def __setitem__(self, key, value):
		if isinstance(key, list):
			self.set_many(key, value)
			return
		self._set(key, value)

	def __delitem__(self, key):
		try:
			del self._basis[key]
		except KeyError:
			raise _missing_key_error(key) from None

	def __contains__(self, key):
		try:
			return key in self._basis
		except TypeError:
			# unhashable keys can never be present
			return False

	def __iter__(self):
		return iter(self._basis)

	def __len__(self):
		return len(self._basis)

	def __repr__(self):
		return _printr(self)

	#-----------------------------------------------------
	# Batch access
	#-----------------------------------------------------

	def get_many(self, keys):
		"""New series holding ``keys``; every key must be present."""
		return self._new((key, self._get(key)) for key in keys)

	def set_many(self, keys, other):
		"""
		Copy ``other[key]`` into self for every key in ``keys``.

		Every key is checked against ``other`` before anything is written.
		"""
		keys = list(keys)
		for key in keys:
			if key not in other:
				raise _missing_key_error(key, "source series")
		for key in keys:
			self._set(key, other[key])

	#-----------------------------------------------------
	# Filtering
	#-----------------------------------------------------

	def filter_by_key(self, predicate):
		return self._new((k, v) for k, v in self._basis.items() if predicate(k))

	def filter_by_value(self, predicate):
		return self._new((k, v) for k, v in self._basis.items() if predicate(v))

	def filter_by_entry(self, predicate):
		"""Entries for which ``predicate(key, value)`` holds."""
		return self._new((k, v) for k, v in self._basis.items() if predicate(k, v))

	def keys_where(self, predicate):
		"""
		Keys whose value satisfies ``predicate``.

		The result is lazy and restartable: each iteration rescans the
		series, so later writes are reflected.

		Examples
		--------
		>>> s = Series({'a': 1, 'b': 5})
		>>> list(s.keys_where(lambda v: v > 2))
		['b']
		"""
		return _KeysWhere(self._basis, predicate)

	#-----------------------------------------------------
	# Re-keying and functional application
	#-----------------------------------------------------

	def reindex(self, new_index=None, kind=None):
		"""
		Return a new series with the same observations under new keys.

		Parameters
		----------
		new_index : callable or collection, optional
			A callable maps each old key to its new key. A collection is
			matched against the old keys by equality: each old key takes the
			first new key that compares equal to it.
		kind : type, optional
			Convert each old key to ``kind`` (used when ``new_index`` is None).

		Raises
		------
		PyFrameValueError
			Collection size differs from the series size, or new keys collide
		PyFrameKeyError
			An old key has no equal counterpart in the collection
		PyFrameTypeError
			A key cannot be converted to ``kind``
		"""
		if callable(new_index):
			pairs = [(new_index(k), v) for k, v in self._basis.items()]
		elif new_index is not None:
			pairs = self._match_keys(new_index)
		elif kind is not None:
			pairs = [(convert_value(k, kind), v) for k, v in self._basis.items()]
		else:
			raise PyFrameValueError("reindex needs a key function, a collection of new keys or a kind")

		out = {}
		for key, value in pairs:
			if key in out:
				raise PyFrameValueError(f"Reindexed keys collide on {key!r}")
			out[key] = value
		return self._new(out)

	def _match_keys(self, new_keys):
		new_keys = list(new_keys)
		if len(new_keys) != len(self._basis):
			raise PyFrameValueError(
				f"Number of new keys ({len(new_keys)}) must match the number of observations ({len(self._basis)})"
			)
		if len(new_keys) > LARGE_SERIES_WARNING:
			warnings.warn('Reindexing by key equality is sub-optimal for large series; prefer a key function')

		pairs = []
		for old, value in self._basis.items():
			new = next((k for k in new_keys if k == old), _MISSING)
			if new is _MISSING:
				raise _missing_key_error(old, "new keys")
			pairs.append((new, value))
		return pairs

	def combine(self, other, op):
		"""
		Apply ``op(self[key], other[key])`` for every key of this series.

		The result has exactly this series' keys; ``other`` must hold all of them.
		"""
		out = {}
		for key, value in self._basis.items():
			if key not in other:
				raise _missing_key_error(key, "other series")
			out[key] = op(value, other[key])
		return self._new(out)

	def map_values(self, selector=None, kind=None):
		"""
		Convert each observation with ``selector``, or to ``kind`` by default conversion.
		"""
		if selector is None:
			if kind is None:
				raise PyFrameValueError("map_values needs a selector or a kind")
			selector = lambda value: convert_value(value, kind)

		out = {}
		for key, value in self._basis.items():
			try:
				out[key] = selector(value)
			except (TypeError, ValueError) as exc:
				raise PyFrameTypeError(
					f"Conversion failed at key {key!r}: {value!r} could not be converted"
				) from exc
		return self._new(out)

	#-----------------------------------------------------
	# Shape, schema, copies
	#-----------------------------------------------------

	@property
	def shape(self):
		"""
		(count, width) or, for a row-oriented series, (width, count).

		``width`` is the largest size among values that are collections,
		or 1 when every value is a scalar.
		"""
		widths = [len(v) for v in self._basis.values() if _is_collection(v)]
		width = max(widths) if widths else 1
		count = len(self._basis)
		if self._as_row:
			return (width, count)
		return (count, width)

	def schema(self) -> DataType:
		"""Get the inferred DataType of the observations."""
		return infer_dtype(self._basis.values())

	def copy(self):
		return Series(self._basis, as_row=self._as_row)

	@property
	def T(self):
		return Series(self._basis, as_row=not self._as_row)
