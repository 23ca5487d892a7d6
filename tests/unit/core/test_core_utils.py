"""
Test core query-string helpers
"""
import pytest

from core.exceptions import ValidationError
from core.utils import is_blank, parse_coordinates, parse_flag, parse_float, require_params, truncate


class TestRequireParams:
    def test_returns_stripped_values(self):
        assert require_params(address=" 1 Main St ") == {"address": "1 Main St"}

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing_value_raises(self, value):
        with pytest.raises(ValidationError) as exc_info:
            require_params("address required", address=value)

        assert exc_info.value.message == "address required"
        assert exc_info.value.status_code == 400
        assert exc_info.value.details["missing"] == ["address"]

    def test_generated_message_lists_all_names(self):
        with pytest.raises(ValidationError, match="west, south required"):
            require_params(west="1", south=None)

    def test_is_blank(self):
        assert is_blank(None)
        assert is_blank("  ")
        assert not is_blank("0")


class TestParseCoordinates:
    def test_valid_pair(self):
        assert parse_coordinates("36.1", "-115.2") == (36.1, -115.2)

    @pytest.mark.parametrize("lat,lon", [(None, "-115"), ("36", None), ("", ""), (None, None)])
    def test_missing_values(self, lat, lon):
        with pytest.raises(ValidationError, match="lat and lon required"):
            parse_coordinates(lat, lon)

    @pytest.mark.parametrize("lat,lon", [("abc", "1"), ("1", "nan"), ("inf", "1")])
    def test_non_numeric_values(self, lat, lon):
        with pytest.raises(ValidationError, match="must be a"):
            parse_coordinates(lat, lon)

    def test_zero_is_a_valid_coordinate(self):
        assert parse_coordinates("0", "0") == (0.0, 0.0)

    @pytest.mark.parametrize("lat,lon", [("91", "0"), ("-90.5", "0"), ("0", "181"), ("0", "-180.1")])
    def test_out_of_range(self, lat, lon):
        with pytest.raises(ValidationError, match="between"):
            parse_coordinates(lat, lon)


class TestParseFlag:
    @pytest.mark.parametrize("value", ["true", "TRUE", "1", "yes", " Yes "])
    def test_true_values(self, value):
        assert parse_flag(value, "commonOwnership") is True

    @pytest.mark.parametrize("value", ["false", "0", "no"])
    def test_false_values(self, value):
        assert parse_flag(value, "commonOwnership") is False

    def test_absent_uses_default(self):
        assert parse_flag(None, "commonOwnership") is False
        assert parse_flag("", "commonOwnership", default=True) is True

    def test_unrecognized_value_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_flag("maybe", "commonOwnership")

        assert exc_info.value.details["field"] == "commonOwnership"


def test_parse_float():
    assert parse_float("-0.5", "west") == -0.5
    with pytest.raises(ValidationError, match="west must be a number"):
        parse_float("west", "west")


def test_truncate():
    assert truncate("short") == "short"
    assert truncate("x" * 10, limit=4) == "xxxx..."
