"""Tests for hash utilities and canonicalization rules."""

import hashlib

import pytest
from solcbridge.kernel.hash_utils import (
    canonicalize_json,
    hash_document,
    hash_text,
    CanonicalizationError,
)


class TestCanonicalizeJson:
    """Tests for canonicalize_json function."""

    def test_simple_dict_sorts_keys(self):
        """Object keys should be sorted."""
        obj = {"severity": "warning", "message": "m", "source": {"offset": 3, "file": "A.sol"}}
        result = canonicalize_json(obj)
        assert result == '{"message":"m","severity":"warning","source":{"file":"A.sol","offset":3}}'

    def test_array_preserves_order(self):
        """Arrays should preserve order."""
        assert canonicalize_json({"items": [3, 1, 2]}) == '{"items":[3,1,2]}'

    def test_strings_not_unicode_normalized(self):
        """Composed and decomposed forms are different strings."""
        composed = {"message": "caf\u00e9"}
        decomposed = {"message": "cafe\u0301"}
        assert canonicalize_json(composed) != canonicalize_json(decomposed)
        assert canonicalize_json(decomposed) == '{"message":"cafe\u0301"}'

    def test_null_allowed(self):
        assert canonicalize_json({"value": None}) == '{"value":null}'

    def test_fractional_float_kept(self):
        assert canonicalize_json({"offset": 1.5}) == '{"offset":1.5}'

    def test_integral_float_same_as_int(self):
        assert canonicalize_json({"offset": 12.0}) == canonicalize_json({"offset": 12})

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_float_rejected(self, value):
        with pytest.raises(CanonicalizationError, match="Non-finite"):
            canonicalize_json({"offset": value})

    def test_non_json_type_rejected(self):
        with pytest.raises(CanonicalizationError, match="Non-JSON type"):
            canonicalize_json({"when": object()})

    def test_non_string_key_rejected(self):
        with pytest.raises(CanonicalizationError, match="keys must be strings"):
            canonicalize_json({1: "x"})


class TestHashDocument:

    def test_prefix_and_digest(self):
        obj = {"b": 1, "a": 2}
        expected = hashlib.sha256(b'{"a":2,"b":1}').hexdigest()
        assert hash_document(obj) == f"sha256:{expected}"

    def test_key_order_does_not_matter(self):
        assert hash_document({"a": 1, "b": {"c": 2, "d": 3}}) == hash_document({"b": {"d": 3, "c": 2}, "a": 1})

    def test_value_change_changes_hash(self):
        assert hash_document({"offset": 1}) != hash_document({"offset": 2})

    def test_missing_key_differs_from_null(self):
        assert hash_document({"a": 1}) != hash_document({"a": 1, "b": None})


def test_hash_text_matches_bytes():
    assert hash_text("abc") == hash_text(b"abc")
    assert hash_text("abc") == "sha256:" + hashlib.sha256(b"abc").hexdigest()
