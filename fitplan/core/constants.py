"""Application constants."""

# Upload limits (bytes)
MAX_PHOTO_BYTES = 10 * 1024 * 1024
MAX_AVATAR_BYTES = 5 * 1024 * 1024

# Community feed
MENTION_SEARCH_LIMIT = 5
MAX_MENTION_SEARCH_LIMIT = 20
MAX_COMMENT_LENGTH = 2000
FEED_PAGE_LIMIT = 50
MAX_FEED_PAGE_LIMIT = 100

# Progress photos: user-declared week number range
MIN_WEEK_NUMBER = 1
MAX_WEEK_NUMBER = 104

# Admin overview: participants who joined within this window count as active
ACTIVE_PARTICIPANT_WINDOW_DAYS = 7
