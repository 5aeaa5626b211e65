"""Internal constants shared across the library."""

API_BASE_URL = "https://api.p2pquake.net/v2"
WEBSOCKET_URL = "wss://api-realtime.p2pquake.net/v2/ws"
USER_AGENT = "pyquake"

HISTORY_ENDPOINT = "/history"
JMA_QUAKE_ENDPOINT = "/jma/quake"

# P2PQuake notification code for "earthquake information".
EARTHQUAKE_CODE = 551

# Upstream wall-clock format, no offset (JST, treated as naive).
TIME_FORMAT = "%Y/%m/%d %H:%M:%S"

RECONNECT_DELAY_SECONDS = 5.0
FILTERED_PAGE_SIZE = 100
DEFAULT_RECENT_LIMIT = 20

ALL_PREFECTURES = "All Prefectures"

PREFECTURES: tuple[str, ...] = (
    "Hokkaido",
    "Aomori",
    "Iwate",
    "Miyagi",
    "Akita",
    "Yamagata",
    "Fukushima",
    "Ibaraki",
    "Tochigi",
    "Gunma",
    "Saitama",
    "Chiba",
    "Tokyo",
    "Kanagawa",
    "Niigata",
    "Toyama",
    "Ishikawa",
    "Fukui",
    "Yamanashi",
    "Nagano",
    "Gifu",
    "Shizuoka",
    "Aichi",
    "Mie",
    "Shiga",
    "Kyoto",
    "Osaka",
    "Hyogo",
    "Nara",
    "Wakayama",
    "Tottori",
    "Shimane",
    "Okayama",
    "Hiroshima",
    "Yamaguchi",
    "Tokushima",
    "Kagawa",
    "Ehime",
    "Kochi",
    "Fukuoka",
    "Saga",
    "Nagasaki",
    "Kumamoto",
    "Oita",
    "Miyazaki",
    "Kagoshima",
    "Okinawa",
)
