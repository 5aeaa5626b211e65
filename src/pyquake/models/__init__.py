"""Data models for P2PQuake earthquake notifications."""

from pyquake.models.event import SeismicEvent
from pyquake.models.scale import UNKNOWN_LABEL, IntensityScale, to_intensity_label

__all__ = [
    "IntensityScale",
    "SeismicEvent",
    "UNKNOWN_LABEL",
    "to_intensity_label",
]
