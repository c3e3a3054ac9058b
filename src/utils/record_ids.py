from __future__ import annotations

import time
from typing import Iterable


def new_record_id(existing: Iterable[str] = ()) -> str:
    """Millisecond-timestamp id, bumped forward until it is unused in `existing`."""
    taken = set(existing)
    candidate = int(time.time() * 1000)
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)
