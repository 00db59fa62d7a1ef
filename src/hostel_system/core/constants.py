"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import RoomType

# Canonical capacity source: the room type label.
ROOM_CAPACITY = {
    RoomType.SINGLE: 1,
    RoomType.DOUBLE: 2,
    RoomType.TRIPLE: 3,
}

DEFAULT_AUDIT_LIMIT = 100
DEFAULT_SEARCH_LIMIT = 20
MAX_BULK_RECORDS = 1000

# Widths of the text columns in database/schema.sql.
MAX_FULL_NAME_LEN = 120
MAX_EMAIL_LEN = 190
MAX_CONTACT_LEN = 40
MAX_COURSE_LEN = 120
MAX_ROOM_NUMBER_LEN = 20
MAX_BLOCK_LEN = 40
MAX_NOTE_LEN = 255
MAX_IDENTITY_LEN = 190
