import pytest

from src.port.user_repository import MAX_USER_ID, parse_user_id


class TestParseUserId:

    @pytest.mark.parametrize("raw,expected", [
        (1, 1),
        ("1", 1),
        (" 42 ", 42),
        (str(MAX_USER_ID), MAX_USER_ID),
    ])
    def test_valid_ids(self, raw, expected):
        assert parse_user_id(raw) == expected

    @pytest.mark.parametrize("raw", [
        "abc",
        "",
        "1_0",
        "+1",
        "-1",
        "1.0",
        "０１",
        0,
        -5,
        True,
        MAX_USER_ID + 1,
        "99999999999999999999",
    ])
    def test_invalid_ids_are_none(self, raw):
        assert parse_user_id(raw) is None
