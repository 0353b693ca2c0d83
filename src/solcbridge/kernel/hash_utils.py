"""Hash utilities with explicit canonicalization rules for stable hashing.

Diagnostics are deduplicated by content, so two records with the same
fields must hash the same regardless of key order, and two records that
differ in any field, down to a single code point, must not.

Key rules:
- Object keys sorted recursively
- Arrays preserve order
- Strings hashed exactly as given (no Unicode normalization)
- Numbers follow JSON: integral floats collapse to ints, NaN/Infinity rejected
- Non-JSON types forbidden
"""

import json
import hashlib
import math
from typing import Any, Union


class CanonicalizationError(ValueError):
    """Raised when an object cannot be canonicalized."""
    pass


def _validate_json_type(obj: Any, path: str = "") -> None:
    """Validate that object contains only JSON-compatible types.

    None is a valid value and is hashed as null. A missing key is not the
    same thing as a key set to None.
    """
    if obj is None:
        return
    elif isinstance(obj, bool):
        return
    elif isinstance(obj, int):
        return
    elif isinstance(obj, float):
        if not math.isfinite(obj):
            raise CanonicalizationError(
                f"Non-finite numbers are not allowed in hashed documents (at {path})."
            )
    elif isinstance(obj, str):
        return
    elif isinstance(obj, dict):
        for key, value in obj.items():
            if not isinstance(key, str):
                raise CanonicalizationError(
                    f"Dictionary keys must be strings at {path}, got {type(key).__name__}"
                )
            _validate_json_type(value, f"{path}.{key}" if path else key)
    elif isinstance(obj, list):
        for i, item in enumerate(obj):
            _validate_json_type(item, f"{path}[{i}]" if path else f"[{i}]")
    else:
        raise CanonicalizationError(
            f"Non-JSON type at {path}: {type(obj).__name__}. "
            f"Only None, bool, int, float, str, dict, and list are allowed."
        )


def _canonicalize_value(obj: Any) -> Any:
    # 3 and 3.0 are the same JSON number
    if isinstance(obj, float) and obj.is_integer():
        return int(obj)
    elif isinstance(obj, dict):
        return {k: _canonicalize_value(v) for k, v in sorted(obj.items())}
    elif isinstance(obj, list):
        return [_canonicalize_value(item) for item in obj]
    return obj


def canonicalize_json(obj: Any) -> str:
    """Canonicalize a JSON-serializable object to a stable string representation.

    Args:
        obj: The object to canonicalize

    Returns:
        Canonical JSON string

    Raises:
        CanonicalizationError: If object contains non-finite floats or non-JSON types
    """
    _validate_json_type(obj)
    canonicalized = _canonicalize_value(obj)
    return json.dumps(canonicalized, sort_keys=True, ensure_ascii=False, separators=(',', ':'))


def hash_document(obj: Any) -> str:
    """Compute SHA256 hash of a canonicalized JSON document.

    Returns:
        SHA256 hash as hex string (prefixed with "sha256:")
    """
    canonical_str = canonicalize_json(obj)
    digest = hashlib.sha256(canonical_str.encode('utf-8')).hexdigest()
    return f"sha256:{digest}"


def hash_text(content: Union[str, bytes]) -> str:
    """Compute SHA256 hash of raw text or bytes (prefixed with "sha256:")."""
    if isinstance(content, str):
        content = content.encode('utf-8')
    return f"sha256:{hashlib.sha256(content).hexdigest()}"
