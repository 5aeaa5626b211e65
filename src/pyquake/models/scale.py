"""JMA seismic intensity scale.

P2PQuake encodes the JMA shindo scale as integers (``10`` for 1 up to
``70`` for 7, with ``45``/``50`` and ``55``/``60`` for the lower/upper
halves of 5 and 6).  :class:`IntensityScale` follows the same pattern as
the other state enums: an ``UNKNOWN`` member at ``-1`` and a
``_missing_`` hook so any unmapped code resolves to ``UNKNOWN``.
"""

from __future__ import annotations

import enum

UNKNOWN_LABEL = "Unknown"


class IntensityScale(enum.IntEnum):
    """Upstream intensity scale code."""

    UNKNOWN = -1
    SHINDO_1 = 10
    SHINDO_2 = 20
    SHINDO_3 = 30
    SHINDO_4 = 40
    SHINDO_5_LOWER = 45
    SHINDO_5_UPPER = 50
    SHINDO_6_LOWER = 55
    SHINDO_6_UPPER = 60
    SHINDO_7 = 70

    @classmethod
    def _missing_(cls, value: object) -> IntensityScale:
        return cls.UNKNOWN

    @property
    def label(self) -> str:
        """Human-readable intensity label (``"5-"``, ``"6+"``, ``"Unknown"``)."""
        return _LABELS[self]


_LABELS: dict[IntensityScale, str] = {
    IntensityScale.UNKNOWN: UNKNOWN_LABEL,
    IntensityScale.SHINDO_1: "1",
    IntensityScale.SHINDO_2: "2",
    IntensityScale.SHINDO_3: "3",
    IntensityScale.SHINDO_4: "4",
    IntensityScale.SHINDO_5_LOWER: "5-",
    IntensityScale.SHINDO_5_UPPER: "5+",
    IntensityScale.SHINDO_6_LOWER: "6-",
    IntensityScale.SHINDO_6_UPPER: "6+",
    IntensityScale.SHINDO_7: "7",
}


def to_intensity_label(scale_code: int) -> str:
    """Map an upstream scale code to its intensity label.

    Total: every integer yields a label, unmapped codes yield ``"Unknown"``.
    """
    return IntensityScale(scale_code).label
