"""
tests.test_schema_check

Key scanning and structural drift detection.
"""

from __future__ import annotations

from order_ingest.domain.order import decode
from order_ingest.domain.schema_check import diff_keys, extract_keys, key_counts, matches


def test_extract_keys_includes_nested_objects() -> None:
    text = '{"a":1,"b":{"c":"x","a":2},"d":[{"c":3}]}'

    assert extract_keys(text) == ["a", "b", "c", "a", "d", "c"]


def test_values_are_not_keys() -> None:
    assert extract_keys('{"k":"v","t":"2021-11-26T06:22:19Z","l":["x","y"]}') == ["k", "t", "l"]


def test_whitespace_between_key_and_colon() -> None:
    assert extract_keys('{\n  "a" : 1,\n  "b"\t:\n 2\n}') == ["a", "b"]


def test_escaped_quotes_do_not_split_strings() -> None:
    text = r'{"name":"say \"hi\": now","brand":"a\\"}'

    assert extract_keys(text) == ["name", "brand"]


def test_closing_quote_at_end_of_input() -> None:
    assert extract_keys('"abc"') == []
    assert extract_keys('{"a":"b"') == ["a"]


def test_unterminated_string() -> None:
    assert extract_keys('{"a":1,"b') == ["a"]


def test_key_counts_accepts_bytes() -> None:
    counts = key_counts(b'{"x":{"x":1}}')

    assert counts == {"x": 2}


def test_valid_payload_matches(payload: bytes) -> None:
    assert matches(decode(payload), payload)


def test_pretty_printed_payload_matches(payload_factory) -> None:
    raw = payload_factory(indent=2)

    assert matches(decode(raw), raw)


def test_partial_payload_matches() -> None:
    raw = b'{"order_uid":"A1","items":[]}'

    assert matches(decode(raw), raw)


def test_extra_key_is_rejected(payload_factory) -> None:
    raw = payload_factory(promo_code="X")
    order = decode(raw)

    assert not matches(order, raw)
    assert diff_keys(order, raw) == ({"promo_code"}, set())


def test_extra_key_in_pretty_payload_is_rejected(payload_factory) -> None:
    raw = payload_factory(indent=4, promo_code="X")

    assert not matches(decode(raw), raw)


def test_misspelled_nested_key_is_rejected() -> None:
    raw = b'{"order_uid":"A1","delivery":{"nmae":"Test"}}'

    assert diff_keys(decode(raw), raw) == ({"nmae"}, set())


def test_repeated_key_is_miscounted() -> None:
    raw = b'{"order_uid":"A1","locale":"en","locale":"ru"}'

    assert diff_keys(decode(raw), raw) == (set(), {"locale"})


def test_key_shaped_text_inside_value_is_ignored() -> None:
    raw = b'{"order_uid":"A1","internal_signature":"{\\"promo_code\\":1}"}'

    assert matches(decode(raw), raw)
