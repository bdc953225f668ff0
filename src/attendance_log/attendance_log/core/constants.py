"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TIMEZONE = "Asia/Seoul"
DEFAULT_VIEW_CACHE_TTL_SECONDS = 30

DEFAULT_NICKNAMES_LIMIT = 500
MAX_NICKNAMES_LIMIT = 1000
# Nickname scan window: limit * factor most recent records, de-duplicated.
NICKNAMES_SCAN_FACTOR = 3

UNSPECIFIED_MEETING_TYPE_LABEL = "미지정"

TEST_NICKNAME = "TEST"
TEST_NICKNAME_PREFIX = "TEST_"
