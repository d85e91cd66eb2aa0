"""
Constants Module - Centralized configuration values
===================================================

PURPOSE: Single source of truth for constants used across the codebase
SCOPE: Upstream API endpoints, sampling window, pitch catalogue, bot texts
"""

# Bot identity
ROBOT_NAME = "roborooney"

# Upstream MyLocalPitch API
MLP_API_URL = "https://api-v2.mylocalpitch.com"
MLP_SLOTS_PATH = "/pitches/{pitch_id}/slots"
MLP_CHECKOUT_URL = (
    "https://www.mylocalpitch.com/{city}/venue/{venue_path}/checkout"
    "?pitch={pitch_id}&starts={starts}&ends={ends}"
)
MLP_DATE_FORMAT = "%Y-%m-%d"
MLP_REQUEST_TIMEOUT_SECONDS = 15.0

# Sampling window
DEFAULT_TIMEZONE = "Europe/London"
DEFAULT_SAMPLE_HORIZON_DAYS = 14

# Ticker
MIN_TICKER_INTERVAL_MINUTES = 1
TICKER_ERROR_BACKOFF_SECONDS = 30

# Notification webhook
WEBHOOK_TIMEOUT_SECONDS = 10.0

# Pitch-slot keys
PITCH_SLOT_KEY_SEPARATOR = "-"

# Pitches monitored when no PITCHES_FILE is configured
DEFAULT_PITCHES = [
    {
        "id": "32497",
        "name": "Three Corners Adventure Playground",
        "venue_id": "32497",
        "venue_path": "three-corners-adventure-playground",
        "city": "london",
        "location": "Bethnal Green",
    },
    {
        "id": "32522",
        "name": "Mile End Community Football Centre",
        "venue_id": "32522",
        "venue_path": "mile-end-community-football-centre",
        "city": "london",
        "location": "Mile End",
    },
]

# Weekday evening / weekend rule defaults
WEEKDAY_EVENING_START_HOUR = 18
WEEKDAY_EVENING_END_HOUR = 21
WEEKEND_DAY_START_HOUR = 9
WEEKEND_DAY_END_HOUR = 17
DEFAULT_MIN_DURATION_MINUTES = 60

HELP_TEXT = (
    "I'm RoboRooney, the football bot. Mention me or use a command whenever "
    "you want to find pitches to play on.\n"
    "\n"
    "@{username} help : Bring up this dialogue again\n"
    "@{username} refresh : Check the pitches right now\n"
    "@{username} list : Lists the available slots that satisfy the rules\n"
    "@{username} unseen : Lists the unseen slots that satisfy the rules\n"
    "@{username} rules : Lists the descriptions of the rules currently in effect\n"
    "@{username} pitches : Lists the monitored pitches\n"
    "@{username} checkout {{pitch-slot ID}} : Get the checkout link for a slot "
    "(the pitch-slot ID is listed after each slot)"
)
