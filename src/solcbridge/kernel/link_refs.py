"""Link-reference resolution.

Unlinked library calls leave a 20-byte placeholder in the bytecode. The
compiler reports where each one sits (`linkReferences`, offsets in bytes);
this module overwrites those spans with a readable, fixed-width symbol
derived from the library name, e.g. `__SafeMath______________________________`.

Assumption: spans never overlap. Replacement is plain slicing, so
overlapping spans would clobber each other.
"""

from dataclasses import dataclass
from typing import Dict, List, Mapping, Sequence

from solcbridge.kernel.schema import LinkOffset

# Width of an address-sized placeholder in hex characters
PLACEHOLDER_WIDTH = 40
# Longest library name kept in a placeholder
MAX_LIBRARY_NAME = 36


@dataclass(frozen=True)
class LinkReference:
    """A placeholder span, in hex-character units."""
    library: str
    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length


def placeholder_symbol(library_name: str) -> str:
    """Build the 40-character placeholder for a library name."""
    symbol = "__" + library_name[:MAX_LIBRARY_NAME]
    return symbol.ljust(PLACEHOLDER_WIDTH, "_")


def collect_link_references(
    link_references: Mapping[str, Mapping[str, Sequence[LinkOffset]]],
) -> List[LinkReference]:
    """Flatten {file: {library: [offsets]}} into hex-character spans."""
    refs: List[LinkReference] = []
    for libraries in link_references.values():
        for library, offsets in libraries.items():
            for offset in offsets:
                refs.append(LinkReference(
                    library=library,
                    start=offset.start * 2,
                    length=offset.length * 2,
                ))
    return refs


def resolve_link_references(
    bytecode: str,
    link_references: Mapping[str, Mapping[str, Sequence[LinkOffset]]],
) -> str:
    """Replace every placeholder span in bytecode with its library symbol.

    The symbol is fitted to the span, so the result is always as long as
    the input.
    """
    if not link_references:
        return bytecode

    symbols: Dict[str, str] = {}
    for ref in collect_link_references(link_references):
        symbol = symbols.get(ref.library)
        if symbol is None:
            symbol = symbols[ref.library] = placeholder_symbol(ref.library)
        fitted = symbol[:ref.length].ljust(ref.length, "_")
        bytecode = bytecode[:ref.start] + fitted + bytecode[ref.end:]
    return bytecode
