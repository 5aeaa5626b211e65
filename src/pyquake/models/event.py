"""Canonical seismic event model."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from pyquake._constants import TIME_FORMAT


class SeismicEvent(BaseModel):
    """One normalized earthquake notification.

    Both upstream shapes (realtime push / history and the JMA query
    endpoint) converge to this model.  Instances are frozen; delivery to
    several subscribers shares the same object safely.

    Parameters
    ----------
    id : str
        Upstream identifier, unique per notification.
    occurred_at : datetime
        Origin time as sent upstream (naive, JST wall clock).
    epicenter_name : str
        Hypocenter region label.
    latitude, longitude : float
        Degrees, not range checked.
    magnitude : float
        Upstream magnitude (``-1`` when JMA has not determined it yet).
    depth_km : int
        Depth in km; ``0`` means "very shallow", ``-1`` means unknown.
    max_intensity_label : str
        Maximum observed intensity, optionally with a tsunami suffix.
    affected_areas : tuple of str
        ``"<area>: <intensity>"`` entries in upstream order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    occurred_at: datetime
    epicenter_name: str
    latitude: float
    longitude: float
    magnitude: float
    depth_km: int
    max_intensity_label: str
    affected_areas: tuple[str, ...] = Field(default_factory=tuple)

    @property
    def formatted_time(self) -> str:
        return self.occurred_at.strftime(TIME_FORMAT)

    @property
    def formatted_magnitude(self) -> str:
        return f"{self.magnitude:.1f}"

    @property
    def formatted_depth(self) -> str:
        return f"{self.depth_km} km"
