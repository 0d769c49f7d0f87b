"""Rules for sub-regions whose coverage overlaps other listed extracts.

Some sub-listings contain composite extracts next to the pieces they are
made of. Offering both would download the same area twice, so composites
are emitted with ``enabled=False``. The rules are a fixed table, not
inferred from the data:

- exact_names: sub-regions disabled wherever they appear (case-insensitive).
  "United States of America" duplicates the separately listed states and
  "Great Britain" duplicates England, Scotland and Wales.
- composite_parents / composite_markers: under these parents (the continent
  aggregate, "Europe"), a name containing a marker such as " and " or ", "
  names a multi-country bundle ("Malta, Gozo and Comino" style).
- composite_exceptions: bundles that stay enabled because their parts are
  not listed separately.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple


@dataclass(frozen=True)
class DedupRules:
    exact_names: FrozenSet[str]
    composite_parents: FrozenSet[str]
    composite_markers: Tuple[str, ...]
    composite_exceptions: Tuple[str, ...]

    def __post_init__(self) -> None:
        # Entries may be written in any case; lookups compare casefolded text.
        object.__setattr__(self, "exact_names", frozenset(n.casefold() for n in self.exact_names))
        object.__setattr__(self, "composite_parents", frozenset(p.casefold() for p in self.composite_parents))

    def explain(self, name: str, parent: str) -> Optional[str]:
        """Return which rule disables ``name`` under ``parent``, or None."""
        if name.casefold() in self.exact_names:
            return "exact_name"
        if parent.casefold() in self.composite_parents:
            if any(m in name for m in self.composite_markers) and not any(
                e in name for e in self.composite_exceptions
            ):
                return "composite"
        return None

    def is_duplicate(self, name: str, parent: str) -> bool:
        return self.explain(name, parent) is not None


DEFAULT_DEDUP_RULES = DedupRules(
    exact_names=frozenset({"United States of America", "Great Britain"}),
    composite_parents=frozenset({"Europe"}),
    composite_markers=(" and ", ", "),
    composite_exceptions=("Northern Ireland", "Jersey"),
)
