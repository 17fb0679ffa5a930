from __future__ import annotations

import logging
import os
from typing import Final

LOG_LEVEL = os.getenv("PROXYSET_LOG_LEVEL", None)
""">>> os.environ['PROXYSET_LOG_LEVEL'] = 'DEBUG'"""
if LOG_LEVEL:
    logging.getLogger().setLevel(LOG_LEVEL.upper())

DEFAULT_VALIDATE: Final[bool] = os.getenv("PROXYSET_VALIDATE", "0").strip().lower() in ("1", "true", "yes")
"""check the mapper round trip on every `ProxySet.add`"""

DEFAULT_COMPACT_RATIO: Final[float] = float(os.getenv("PROXYSET_COMPACT_RATIO", 0.5))
"""share of tombstoned slots that triggers an `IndexedSet` compaction"""
if not 0.0 < DEFAULT_COMPACT_RATIO <= 1.0:
    raise ValueError(f"PROXYSET_COMPACT_RATIO must be in (0, 1], got: {DEFAULT_COMPACT_RATIO}")

MIN_COMPACT_SLOTS: Final = 8  # small sets are never compacted
