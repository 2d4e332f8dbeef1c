"""Series operations - access, batch access, filtering, reindexing, combining, shape"""
import operator
import warnings

import pytest
from py_frame import Series
from py_frame.errors import PyFrameKeyError, PyFrameValueError, PyFrameTypeError


class TestCreation:
    """Test basic series creation"""

    def test_creation_empty(self):
        s = Series()
        assert len(s) == 0
        assert not s

    def test_creation_from_dict(self):
        s = Series({'a': 1, 'b': 2})
        assert s['a'] == 1
        assert list(s) == ['a', 'b']

    def test_creation_from_pairs(self):
        s = Series([('x', 10), ('y', 20)])
        assert dict(s) == {'x': 10, 'y': 20}

    def test_creation_copies_source(self):
        source = {'a': 1}
        s = Series(source)
        s['a'] = 99
        assert source['a'] == 1

    def test_creation_from_values_keys_by_position(self):
        s = Series.from_values([10, 20, 30])
        assert dict(s) == {0: 10, 1: 20, 2: 30}
        assert s.shape == (3, 1)

    def test_creation_from_values_row_oriented(self):
        s = Series.from_values(('x', 'y'), as_row=True)
        assert s[1] == 'y'
        assert s.shape == (1, 2)

    def test_bare_values_are_not_pairs(self):
        with pytest.raises(TypeError):
            Series([10, 20, 30])

    def test_unbuilt_series_has_no_basis(self):
        s = Series.__new__(Series)
        with pytest.raises(AttributeError, match="_basis"):
            len(s)


class TestPointAccess:
    """Test get / set by key"""

    def test_set_inserts_and_overwrites(self):
        s = Series()
        s['a'] = 1
        s['a'] = 2
        s['b'] = 3
        assert dict(s) == {'a': 2, 'b': 3}

    def test_missing_key_raises(self):
        s = Series({'a': 1})
        with pytest.raises(PyFrameKeyError, match="'z'"):
            _ = s['z']

    def test_missing_key_is_a_keyerror(self):
        s = Series({'a': 1})
        assert s.get('z', 'default') == 'default'

    def test_contains_unhashable(self):
        s = Series({'a': 1})
        assert 'a' in s
        assert ['a'] not in s

    def test_missing_callable_key_raises(self):
        s = Series({int: 1})
        assert s[int] == 1
        with pytest.raises(PyFrameKeyError):
            _ = s[str]
        with pytest.raises(PyFrameKeyError):
            _ = s[len]

    def test_function_key_is_looked_up_before_filtering(self):
        def double(v):
            return v * 2
        s = Series({double: 'stored'})
        assert s[double] == 'stored'

    def test_mapping_equality(self):
        assert Series({'a': 1, 'b': 2}) == {'b': 2, 'a': 1}
        assert Series({'a': 1}) != Series({'a': 2})


class TestBatchAccess:
    """Test get_many / set_many"""

    def test_get_many(self):
        s = Series({'a': 1, 'b': 2, 'c': 3})
        sub = s.get_many(['a', 'c'])
        assert dict(sub) == {'a': 1, 'c': 3}

    def test_get_many_by_list_index(self):
        s = Series({'a': 1, 'b': 2, 'c': 3})
        assert dict(s[['b']]) == {'b': 2}

    def test_get_many_missing(self):
        s = Series({'a': 1})
        with pytest.raises(PyFrameKeyError):
            s.get_many(['a', 'q'])

    def test_set_many(self):
        s = Series({'a': 1, 'b': 2})
        s.set_many(['a', 'c'], Series({'a': 10, 'c': 30, 'd': 40}))
        assert dict(s) == {'a': 10, 'b': 2, 'c': 30}

    def test_set_many_by_list_index(self):
        s = Series({'a': 1, 'b': 2})
        s[['a', 'b']] = {'a': 5, 'b': 6}
        assert dict(s) == {'a': 5, 'b': 6}

    def test_set_many_missing_source_key_writes_nothing(self):
        s = Series({'a': 1, 'b': 2})
        with pytest.raises(PyFrameKeyError):
            s.set_many(['a', 'b'], {'a': 100})
        assert dict(s) == {'a': 1, 'b': 2}


class TestFiltering:
    """Test filter_by_* and keys_where"""

    def setup_method(self):
        self.s = Series({'a': 1, 'b': 5, 'c': 3, 'd': 8})

    def test_filter_by_key(self):
        out = self.s.filter_by_key(lambda k: k in ('a', 'd'))
        assert dict(out) == {'a': 1, 'd': 8}

    def test_filter_by_value(self):
        out = self.s.filter_by_value(lambda v: v > 2)
        assert dict(out) == {'b': 5, 'c': 3, 'd': 8}

    def test_filter_by_entry(self):
        out = self.s.filter_by_entry(lambda k, v: k > 'a' and v < 6)
        assert dict(out) == {'b': 5, 'c': 3}

    def test_filter_never_mutates_source(self):
        out = self.s.filter_by_value(lambda v: v > 2)
        out['b'] = 0
        assert self.s['b'] == 5
        assert len(self.s) == 4

    def test_keys_where(self):
        assert list(self.s.keys_where(lambda v: v % 2 == 1)) == ['a', 'b', 'c']

    def test_keys_where_by_callable_index(self):
        assert list(self.s[lambda v: v > 4]) == ['b', 'd']

    def test_keys_where_is_recomputed(self):
        keys = self.s.keys_where(lambda v: v > 4)
        assert list(keys) == ['b', 'd']
        self.s['a'] = 100
        assert list(keys) == ['a', 'b', 'd']
        # restartable
        assert list(keys) == ['a', 'b', 'd']


class TestReindex:
    """Test the three reindex forms"""

    def test_reindex_with_function(self):
        s = Series({1: 'x', 2: 'y'})
        out = s.reindex(lambda k: k * 10)
        assert dict(out) == {10: 'x', 20: 'y'}

    def test_reindex_with_kind(self):
        s = Series({'1': 'x', '2': 'y'})
        out = s.reindex(kind=int)
        assert dict(out) == {1: 'x', 2: 'y'}

    def test_reindex_with_kind_failure(self):
        s = Series({'one': 'x'})
        with pytest.raises(PyFrameTypeError):
            s.reindex(kind=int)

    def test_reindex_with_collection(self):
        s = Series({1: 'x', 2: 'y'})
        out = s.reindex([2.0, 1.0])
        assert dict(out) == {1.0: 'x', 2.0: 'y'}
        assert all(isinstance(k, float) for k in out)

    def test_reindex_collection_size_mismatch(self):
        s = Series({1: 'x', 2: 'y'})
        with pytest.raises(PyFrameValueError, match="must match"):
            s.reindex([1, 2, 3])

    def test_reindex_collection_no_counterpart(self):
        s = Series({1: 'x', 2: 'y'})
        with pytest.raises(PyFrameKeyError):
            s.reindex([1, 3])

    def test_reindex_collision(self):
        s = Series({1: 'x', 2: 'y'})
        with pytest.raises(PyFrameValueError, match="collide"):
            s.reindex(lambda k: 0)

    def test_reindex_needs_an_argument(self):
        with pytest.raises(PyFrameValueError):
            Series({1: 'x'}).reindex()

    def test_reindex_large_collection_warns(self):
        s = Series({i: i for i in range(1001)})
        with pytest.warns(UserWarning, match="sub-optimal"):
            s.reindex(list(range(1001)))

    def test_reindex_small_collection_does_not_warn(self):
        s = Series({i: i for i in range(10)})
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            s.reindex(list(range(10)))


class TestCombine:
    """Test elementwise combination"""

    def test_combine(self):
        a = Series({'x': 1, 'y': 2})
        b = Series({'x': 10, 'y': 20, 'z': 30})
        out = a.combine(b, operator.add)
        assert dict(out) == {'x': 11, 'y': 22}

    def test_combine_key_set_is_left_only(self):
        a = Series({'x': 1})
        b = Series({'x': 2, 'y': 3})
        assert list(a.combine(b, operator.mul)) == ['x']

    def test_combine_requires_superset(self):
        a = Series({'x': 1, 'y': 2})
        b = Series({'x': 10})
        with pytest.raises(PyFrameKeyError, match="'y'"):
            a.combine(b, operator.add)


class TestMapValues:
    """Test value conversion"""

    def test_map_values_with_kind(self):
        s = Series({'a': '1', 'b': '2'})
        assert dict(s.map_values(kind=int)) == {'a': 1, 'b': 2}

    def test_map_values_with_selector(self):
        s = Series({'a': 1, 'b': 2})
        assert dict(s.map_values(lambda v: v * 2)) == {'a': 2, 'b': 4}

    def test_map_values_keeps_none(self):
        s = Series({'a': '1', 'b': None})
        assert dict(s.map_values(kind=float)) == {'a': 1.0, 'b': None}

    def test_map_values_failure(self):
        s = Series({'a': '1', 'b': 'two'})
        with pytest.raises(PyFrameTypeError, match="'b'"):
            s.map_values(kind=int)

    def test_map_values_selector_failure(self):
        s = Series({'a': 'x'})
        with pytest.raises(PyFrameTypeError):
            s.map_values(int)


class TestShape:
    """Test reported shape and orientation"""

    @pytest.mark.parametrize("initial,as_row,expected", [
        ({}, False, (0, 1)),
        ({'a': 1, 'b': 2}, False, (2, 1)),
        ({'a': 1, 'b': 2}, True, (1, 2)),
        ({'a': [1, 2, 3], 'b': [1]}, False, (2, 3)),
        ({'a': 'long string', 'b': 1}, False, (2, 1)),
        ({'a': (1, 2), 'b': 7}, True, (2, 2)),
    ])
    def test_shape(self, initial, as_row, expected):
        assert Series(initial, as_row=as_row).shape == expected

    def test_transpose_flips_orientation(self):
        s = Series({'a': 1, 'b': 2, 'c': 3})
        assert s.T.shape == (1, 3)
        assert s.T.T.shape == (3, 1)

    def test_schema(self):
        assert Series({'a': 1, 'b': 2.5}).schema().kind is float
        assert Series({'a': 1, 'b': None}).schema().nullable
