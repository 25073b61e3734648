import pytest
from txguard.services.payload_normalizer import normalize_payload


@pytest.mark.parametrize("raw", ["", "   ", "hello", "abcdef", "[1, 2]", "1234", "x0ab"])
def test_unrecognized_input_yields_nothing(raw):
    payload = normalize_payload(raw)
    assert payload.call_data is None
    assert payload.target_hint is None


def test_bare_hex_is_trimmed_call_data():
    payload = normalize_payload("  0xa9059cbb00  \n")
    assert payload.call_data == "0xa9059cbb00"
    assert payload.target_hint is None


def test_json_envelope_data_and_to():
    payload = normalize_payload('{"to": "0xabc", "data": "0x095ea7b3"}')
    assert payload.call_data == "0x095ea7b3"
    assert payload.target_hint == "0xabc"


def test_json_envelope_ignores_non_string_fields():
    payload = normalize_payload('{"to": 12, "data": {"nested": true}}')
    assert payload.call_data is None
    assert payload.target_hint is None


def test_json_to_without_data():
    payload = normalize_payload('{"to": "0x1111111111111111111111111111111111111111"}')
    assert payload.call_data is None
    assert payload.target_hint == "0x1111111111111111111111111111111111111111"


def test_malformed_json_is_swallowed():
    payload = normalize_payload('{"data": "0x1234"')
    assert payload.call_data is None
    assert payload.target_hint is None


def test_none_input():
    assert normalize_payload(None).call_data is None
