"""Tests for response handling."""
import pytest

from pgrest.core.api.request import ContentRange, PagedList, ResponseHandler


class TestContentRange:
    """Test suite for Content-Range parsing."""

    def test_parse(self):
        """Test a well-formed header."""
        assert ContentRange.parse('0-9/42') == ContentRange(start=0, end=9, total=42)

    def test_leading_zeros_are_decimal(self):
        """Test totals are parsed base 10."""
        assert ContentRange.parse('00-09/010').total == 10

    @pytest.mark.parametrize('header', [
        None, '', '0-9/*', '*/0', '0-9', '-1-9/10', '0-9/42 ', 'a-b/c',
        '\u0660-\u0669/\u0664\u0662', '0-9/42\n',
    ])
    def test_malformed(self, header):
        """Test anything but start-end/total parses to None."""
        assert ContentRange.parse(header) is None


class TestAnnotate:
    """Test suite for ResponseHandler.annotate."""

    def test_list_with_header(self):
        """Test list bodies become PagedList."""
        result = ResponseHandler.annotate([1, 2], '0-1/2')

        assert isinstance(result, PagedList)
        assert result == [1, 2]
        assert result.full_length == 2
        assert result.content_range == ContentRange(0, 1, 2)

    def test_list_without_header(self):
        """Test the same list object is returned."""
        body = [1, 2]

        assert ResponseHandler.annotate(body, None) is body

    def test_non_ascii_digits_not_annotated(self):
        """Test Arabic-Indic digits are not read as a total."""
        body = [1]

        result = ResponseHandler.annotate(body, '\u0660-\u0669/\u0664\u0662')

        assert result is body
        assert not hasattr(result, 'full_length')

    def test_dict_with_header(self):
        """Test objects are never annotated."""
        body = {'id': 1}

        assert ResponseHandler.annotate(body, '0-0/1') is body

    def test_scalar_body(self):
        """Test scalar bodies such as rpc results pass through."""
        assert ResponseHandler.annotate(7, '0-0/1') == 7

    def test_empty_page(self):
        """Test an empty page past the end still reports the total."""
        result = ResponseHandler.annotate([], '0-0/0')

        assert result == []
        assert result.full_length == 0

    def test_paged_list_repr(self):
        """Test repr includes the total."""
        assert repr(ResponseHandler.annotate([1], '0-0/5')) == 'PagedList([1], full_length=5)'


class TestProcessResponse:
    """Test suite for ResponseHandler.process_response."""

    @pytest.mark.asyncio
    async def test_header_lookup_is_case_insensitive(self, response_factory):
        """Test the content-range header is found whatever its case."""
        response = response_factory([1], headers={'CONTENT-RANGE': '0-0/3'})

        result = await ResponseHandler.process_response(response)

        assert result.full_length == 3
