"""pyquake - Async Python client for the P2PQuake earthquake feed."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyquake")
except PackageNotFoundError:
    __version__ = "0+local"
from pyquake._constants import ALL_PREFECTURES, EARTHQUAKE_CODE, PREFECTURES
from pyquake.bus import EventBus, Mailbox, SubscriptionHandle
from pyquake.config import QuakeConfig
from pyquake.exceptions import (
    MalformedEventError,
    QuakeConfigError,
    QuakeError,
    SubscriberError,
    TransportError,
)
from pyquake.feed import FeedState, LiveFeedClient
from pyquake.history import HistoryQueryClient
from pyquake.ingestion import parse_historical_event, parse_realtime_event
from pyquake.models import IntensityScale, SeismicEvent, to_intensity_label
from pyquake.service import IngestionService

__all__ = [
    "__version__",
    "ALL_PREFECTURES",
    "EARTHQUAKE_CODE",
    "EventBus",
    "FeedState",
    "HistoryQueryClient",
    "IngestionService",
    "IntensityScale",
    "LiveFeedClient",
    "Mailbox",
    "MalformedEventError",
    "PREFECTURES",
    "QuakeConfig",
    "QuakeConfigError",
    "QuakeError",
    "SeismicEvent",
    "SubscriberError",
    "SubscriptionHandle",
    "TransportError",
    "parse_historical_event",
    "parse_realtime_event",
    "to_intensity_label",
]
