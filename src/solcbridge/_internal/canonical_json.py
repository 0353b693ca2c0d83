"""Canonical JSON serialization for compiler input documents.

The same request always produces the same bytes on the compiler's standard
input, which keeps logged digests comparable between runs and platforms.
"""

import json
from typing import Any


def canonical_dumps(obj: Any) -> str:
    """
    Serialize obj with sorted keys and compact separators.

    Unlike kernel.hash_utils.canonicalize_json, this does not validate
    types or fold numbers: it only fixes the byte layout.
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False
    )
