"""Entity ID generation and validation.

Entities created by runwayctl get ``emp_`` plus 8 random hex chars.
Imported records may carry any non-empty id; only generated ids are
guaranteed to match :data:`ENTITY_ID_PATTERN`.

INVARIANT: IDs are permanent. Moves and resizes never change an id.
"""

from __future__ import annotations

import re
import uuid

ENTITY_ID_PREFIX = "emp_"
ENTITY_ID_PATTERN = re.compile(r"^emp_[0-9a-f]{8}$")


def generate_entity_id(existing: set[str] | frozenset[str] = frozenset()) -> str:
    """Return a fresh ``emp_xxxxxxxx`` id not present in *existing*."""
    while True:
        candidate = f"{ENTITY_ID_PREFIX}{uuid.uuid4().hex[:8]}"
        if candidate not in existing:
            return candidate


def validate_entity_id(entity_id: str) -> bool:
    """Check whether *entity_id* looks like a generated id."""
    return ENTITY_ID_PATTERN.match(entity_id) is not None
