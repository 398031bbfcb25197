"""
Unit tests for the value formatter
"""

import json
import pytest
from datetime import date, datetime, timezone, timedelta
from export.formatters.value_formatter import ValueFormatter
from export.formatters.date_formatter import StrftimeDateFormatter, epoch_millis
from models.base import ColumnType
from models.row import LinkList
from schemas.table import ColumnSpec


class TestValueFormatter:
    """Test per-type formatting rules"""

    @pytest.fixture
    def formatter(self, date_formatter):
        return ValueFormatter(date_formatter=date_formatter)

    @pytest.mark.parametrize("column_type", [
        ColumnType.INTEGER,
        ColumnType.BOOLEAN,
        ColumnType.STRING,
        ColumnType.BINARY,
        ColumnType.FLOAT,
        ColumnType.DOUBLE,
        ColumnType.DATE,
        ColumnType.UNSUPPORTED_DATE,
        ColumnType.OBJECT,
        ColumnType.INTEGER_LIST,
        ColumnType.STRING_LIST,
        ColumnType.DATE_LIST,
    ])
    def test_null_values_use_sentinel(self, formatter, column_type):
        """Test every nullable type falls back to the null sentinel"""
        assert formatter.format(column_type, None) == "[null]"

    def test_custom_null_sentinel(self):
        """Test the configured sentinel is used verbatim"""
        formatter = ValueFormatter(null_value="<none>")
        assert formatter.format(ColumnType.STRING, None) == "<none>"
        assert formatter.format(ColumnType.OBJECT, None) == "<none>"

    def test_native_scalars(self, formatter):
        """Test integers, booleans and strings pass through"""
        assert formatter.format(ColumnType.INTEGER, 42) == 42
        assert formatter.format(ColumnType.BOOLEAN, False) is False
        assert formatter.format(ColumnType.STRING, "") == ""
        assert formatter.format(ColumnType.STRING, "héllo") == "héllo"

    def test_non_finite_floats(self, formatter):
        """Test NaN and infinities become strings"""
        for column_type in (ColumnType.FLOAT, ColumnType.DOUBLE):
            assert formatter.format(column_type, float("nan")) == "NaN"
            assert formatter.format(column_type, float("inf")) == "Infinity"
            assert formatter.format(column_type, float("-inf")) == "-Infinity"

    def test_finite_floats_round_trip(self, formatter):
        """Test finite floats stay numbers with the same value"""
        for value in (0.0, -0.5, 1e-300, 3.141592653589793, 1.7976931348623157e308):
            result = formatter.format(ColumnType.DOUBLE, value)
            assert isinstance(result, float)
            assert json.loads(json.dumps(result)) == value

    def test_date_has_epoch_suffix(self, formatter):
        """Test dates are rendered with their epoch milliseconds"""
        value = datetime(2024, 1, 15, 10, 0, 0, 123456, tzinfo=timezone.utc)
        assert formatter.format(ColumnType.DATE, value) == "2024-01-15 10:00:00 (1705312800123)"

    def test_naive_date_is_utc(self, formatter):
        """Test naive datetimes are read as UTC"""
        assert formatter.format(ColumnType.DATE, datetime(1970, 1, 1, 0, 0, 1)).endswith("(1000)")

    def test_date_without_time(self, formatter):
        """Test plain dates are treated as midnight"""
        assert formatter.format(ColumnType.DATE, date(1970, 1, 2)).endswith("(86400000)")

    def test_binary_uses_default_text_form(self, formatter):
        """Test binary values are stringified, not base64 encoded"""
        assert formatter.format(ColumnType.BINARY, b"\x00ab") == "b'\\x00ab'"
        assert formatter.format(ColumnType.BINARY, bytearray(b"x")) == "b'x'"

    def test_link_is_shallow(self, formatter):
        """Test single links export the target row index"""
        assert formatter.format(ColumnType.OBJECT, 5) == 5

    def test_link_list(self, formatter):
        """Test link lists use the target table and ids in order"""
        assert formatter.format(ColumnType.LIST, LinkList("class_Dog", [3, 1, 2])) == "class_Dog{3,1,2}"
        assert formatter.format(ColumnType.LIST, LinkList("class_Dog")) == "class_Dog{}"

    def test_link_list_from_plain_ids(self, formatter):
        """Test plain id sequences take the target table from the column"""
        column = ColumnSpec(name="dogs", column_type=ColumnType.LIST, target_table="class_Dog")
        assert formatter.format_column(column, [4, 5]) == "class_Dog{4,5}"

    def test_null_link_list_is_never_sentinel(self, formatter):
        """Test a null link list is exported as an empty list"""
        column = ColumnSpec(name="dogs", column_type=ColumnType.LIST, target_table="class_Dog")
        assert formatter.format_column(column, None) == "class_Dog{}"

    def test_scalar_lists(self, formatter):
        """Test scalar lists are tagged with their type name"""
        assert formatter.format(ColumnType.INTEGER_LIST, [1, 2, 3]) == "INTEGER_LIST{1,2,3}"
        assert formatter.format(ColumnType.BOOLEAN_LIST, [True, False]) == "BOOLEAN_LIST{true,false}"
        assert formatter.format(ColumnType.STRING_LIST, ["a", None]) == "STRING_LIST{a,null}"
        assert formatter.format(ColumnType.DOUBLE_LIST, [0.5, float("nan")]) == "DOUBLE_LIST{0.5,NaN}"
        assert formatter.format(ColumnType.FLOAT_LIST, []) == "FLOAT_LIST{}"
        assert formatter.format(
            ColumnType.DATE_LIST, [datetime(2024, 1, 15, 10, 0)]
        ) == "DATE_LIST{2024-01-15T10:00:00}"

    def test_unknown_column_types(self, formatter):
        """Test unknown types produce a diagnostic marker"""
        assert formatter.format(ColumnType.UNSUPPORTED_MIXED, 1) == "Unknown column type: UNSUPPORTED_MIXED"
        assert formatter.format("DECIMAL128", "1.0") == "Unknown column type: DECIMAL128"

    def test_column_spec_coerces_type_names(self, formatter):
        """Test columns declared by name dispatch like enum members"""
        column = ColumnSpec(name="count", column_type="integer")
        assert column.column_type == ColumnType.INTEGER
        assert formatter.format_column(column, 3) == 3


class TestDateFormatter:
    """Test the default date formatter"""

    def test_strftime_pattern_in_given_zone(self):
        formatter = StrftimeDateFormatter("%Y/%m/%d %H:%M", tz=timezone(timedelta(hours=2)))
        assert formatter.format(datetime(2024, 1, 15, 10, 0)) == "2024/01/15 12:00"

    def test_epoch_millis_floors_before_epoch(self):
        assert epoch_millis(datetime(1969, 12, 31, 23, 59, 59, 999500)) == -1
