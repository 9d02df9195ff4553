"""Fixed-width binary layout of a table row."""

from __future__ import annotations

import struct
from dataclasses import dataclass

COLUMN_USERNAME_SIZE = 32
COLUMN_EMAIL_SIZE = 255

ID_SIZE = 4
USERNAME_SIZE = COLUMN_USERNAME_SIZE + 1
EMAIL_SIZE = COLUMN_EMAIL_SIZE + 1

ID_OFFSET = 0
USERNAME_OFFSET = ID_OFFSET + ID_SIZE
# The email field starts at twice the username width, not right after it.
EMAIL_OFFSET = USERNAME_SIZE + USERNAME_SIZE
ROW_SIZE = ID_SIZE + USERNAME_SIZE + EMAIL_SIZE

# Number of bytes serialize_row produces. Because of where the email field
# starts, this runs past ROW_SIZE into the start of the following slot.
SERIALIZED_SIZE = EMAIL_OFFSET + EMAIL_SIZE

_ID_FORMAT = struct.Struct("<I")


@dataclass(frozen=True)
class Row:
    """One record of the table: a numeric id, a username and an email."""

    id: int
    username: str
    email: str


def _pack_text(text: str, width: int) -> bytes:
    """Copy at most ``width`` bytes of ``text`` and pad the rest with NULs."""
    raw = text.encode("utf-8").partition(b"\0")[0][:width]
    return raw.ljust(width, b"\0")


def _unpack_text(raw: bytes) -> str:
    return raw.partition(b"\0")[0].decode("utf-8", errors="replace")


def serialize_row(row: Row) -> bytes:
    """Encode ``row`` into SERIALIZED_SIZE bytes at the fixed field offsets."""
    try:
        id_bytes = _ID_FORMAT.pack(row.id)
    except struct.error as exc:
        raise ValueError(f"row id {row.id!r} does not fit in 32 bits") from exc

    buffer = bytearray(SERIALIZED_SIZE)
    buffer[ID_OFFSET:ID_OFFSET + ID_SIZE] = id_bytes
    buffer[USERNAME_OFFSET:USERNAME_OFFSET + USERNAME_SIZE] = _pack_text(
        row.username, USERNAME_SIZE
    )
    buffer[EMAIL_OFFSET:EMAIL_OFFSET + EMAIL_SIZE] = _pack_text(row.email, EMAIL_SIZE)
    return bytes(buffer)


def deserialize_row(data: bytes | bytearray | memoryview) -> Row:
    """Decode a row from a buffer laid out as serialize_row writes it."""
    view = memoryview(data)
    if len(view) < SERIALIZED_SIZE:
        raise ValueError(
            f"row buffer holds {len(view)} bytes, need at least {SERIALIZED_SIZE}"
        )
    (row_id,) = _ID_FORMAT.unpack(view[ID_OFFSET:ID_OFFSET + ID_SIZE])
    username = _unpack_text(bytes(view[USERNAME_OFFSET:USERNAME_OFFSET + USERNAME_SIZE]))
    email = _unpack_text(bytes(view[EMAIL_OFFSET:EMAIL_OFFSET + EMAIL_SIZE]))
    return Row(row_id, username, email)