"""Selection Store — the set codes the user has chosen to aggregate.

Invariants:
    - Membership is a set: toggling twice restores the original selection
    - snapshot() preserves insertion order and is immutable
    - Codes are normalized (lower case, stripped) before storage

Design Decisions:
    - dict as ordered set: insertion order matches what the user clicked,
      so chains start in a predictable order
    - Plain class with mutation methods, no IO: owned by the presentation layer
"""

from priceboard.core.domain_types import SetCode, normalize_set_code


class SelectionStore:
    """Mutable ordered set of selected set codes."""

    def __init__(self, codes: list[str] | None = None):
        self._codes: dict[SetCode, None] = {}
        for code in codes or []:
            self._codes[normalize_set_code(code)] = None

    def toggle(self, code: str) -> bool:
        """Add when absent, remove when present. Returns True if now selected."""
        key = normalize_set_code(code)
        if key in self._codes:
            del self._codes[key]
            return False
        self._codes[key] = None
        return True

    def clear(self) -> None:
        self._codes.clear()

    def snapshot(self) -> tuple[SetCode, ...]:
        return tuple(self._codes)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and normalize_set_code(code) in self._codes

    def __len__(self) -> int:
        return len(self._codes)
