"""Diagnostic normalization and content-hash deduplication.

When files are compiled one invocation at a time, a problem in a shared
import is reported once per invocation. Diagnostics are therefore keyed
by the hash of their normalized content and kept in first-seen order.
"""

from typing import Iterable, List, Set

from solcbridge.contracts import Diagnostic, DiagnosticSource
from solcbridge.kernel.hash_utils import hash_document
from solcbridge.kernel.schema import RawError


def normalize_diagnostic(raw: RawError) -> Diagnostic:
    """Reduce a raw compiler error to {message, severity, source?}."""
    message = raw.formatted_message
    if message is None:
        message = raw.message or ""

    source = None
    location = raw.source_location
    if location is not None and location.file is not None:
        source = DiagnosticSource(file=location.file, offset=location.start)

    return Diagnostic(message=message, severity=raw.severity, source=source)


def diagnostic_hash(diagnostic: Diagnostic) -> str:
    """Content hash identifying a diagnostic ("sha256:..." prefixed)."""
    return hash_document(diagnostic.to_record())


class DiagnosticDeduplicator:
    """Collects diagnostics across invocations of one compile call."""

    def __init__(self) -> None:
        self._seen: Set[str] = set()
        self._diagnostics: List[Diagnostic] = []

    def add(self, raw_errors: Iterable[RawError]) -> int:
        """Normalize and record new diagnostics.

        Returns:
            Number of diagnostics that were not seen before
        """
        added = 0
        for raw in raw_errors:
            diagnostic = normalize_diagnostic(raw)
            key = diagnostic_hash(diagnostic)
            if key in self._seen:
                continue
            self._seen.add(key)
            self._diagnostics.append(diagnostic)
            added += 1
        return added

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return list(self._diagnostics)

    def __len__(self) -> int:
        return len(self._diagnostics)
