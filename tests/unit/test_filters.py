"""Tests for the filter operator table."""
import pytest

from pgrest.core.api.request import FILTER_OPERATORS, format_filter, format_value, to_query_value
from pgrest.core.exceptions import UnknownFilterError

OPERATORS = ['eq', 'gt', 'lt', 'gte', 'lte', 'like', 'ilike', 'is', 'in', 'not']


class TestOperatorTable:
    """Test suite for FILTER_OPERATORS."""

    def test_table_contains_known_operators(self):
        """Test every PostgREST shortcut is registered."""
        assert sorted(FILTER_OPERATORS) == sorted(OPERATORS)

    @pytest.mark.parametrize('operator', OPERATORS)
    def test_scalar_value(self, operator):
        """Test scalar values are stringified."""
        assert format_filter('col', operator, 'v') == f"col={operator}.v"

    @pytest.mark.parametrize('operator', OPERATORS)
    def test_list_value(self, operator):
        """Test list values are comma-joined."""
        assert format_filter('col', operator, ['a', 'b']) == f"col={operator}.a,b"

    def test_unknown_operator(self):
        """Test operators outside the table are rejected."""
        with pytest.raises(UnknownFilterError, match="fts"):
            format_filter('col', 'fts', 'x')


class TestValueFormatting:
    """Test suite for value rendering."""

    def test_none_is_null(self):
        assert to_query_value(None) == 'null'

    def test_booleans_are_lowercase(self):
        assert to_query_value(True) == 'true'
        assert to_query_value(False) == 'false'

    def test_numbers(self):
        assert to_query_value(18) == '18'
        assert to_query_value(1.5) == '1.5'

    def test_tuple_is_joined(self):
        assert format_value((1, 2, 3)) == '1,2,3'

    def test_string_is_not_split(self):
        """Test strings are treated as scalars, not sequences."""
        assert format_value('abc') == 'abc'

    def test_is_null_filter(self):
        """Test the common is.null idiom."""
        assert format_filter('deleted_at', 'is', None) == 'deleted_at=is.null'


class TestBuilderShortcuts:
    """Test suite for the named shortcuts on RequestBuilder."""

    @pytest.mark.parametrize('method, operator', [
        ('eq', 'eq'), ('gt', 'gt'), ('lt', 'lt'), ('gte', 'gte'), ('lte', 'lte'),
        ('like', 'like'), ('ilike', 'ilike'), ('is_', 'is'), ('in_', 'in'), ('not_', 'not'),
    ])
    def test_shortcut_pushes_fragment(self, builder, method, operator):
        """Test each shortcut pushes an unencoded fragment."""
        getattr(builder, method)('col', 'v')
        getattr(builder, method)('col', ['a', 'b'])

        assert builder.query_parts == [f"col={operator}.v", f"col={operator}.a,b"]
        assert builder.query_params == {}

    def test_generic_filter(self, builder):
        """Test filter() dispatches through the table."""
        builder.filter('age', 'gte', 18)

        assert builder.query_parts == ['age=gte.18']

    def test_generic_filter_unknown(self, builder):
        """Test filter() leaves the builder unchanged on error."""
        with pytest.raises(UnknownFilterError):
            builder.filter('age', 'between', [1, 2])

        assert builder.query_parts == []
