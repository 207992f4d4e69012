"""Fixed-width integer helpers over file-like objects.

Every helper takes the stream explicitly and either consumes exactly the
requested number of bytes or raises; nothing is retried.
"""
import os
from struct import calcsize, pack, unpack

from construct import StreamError

from .errors import ShortRead, ShortWrite, SeekFailure

def read_exact(fd, count):
    data = fd.read(count)
    if data is None or len(data) != count:
        got = 0 if data is None else len(data)
        raise ShortRead("Wanted %d bytes, got %d" % (count, got))
    return data

def _reader(fmt):
    size = calcsize(fmt)
    def read(fd):
        return unpack(fmt, read_exact(fd, size))[0]
    return read

def _writer(fmt):
    def write(value, fd):
        write_all(fd, pack(fmt, value))
    return write

read_u8   = _reader("B")
read_le16 = _reader("<H")
read_le32 = _reader("<I")
read_be16 = _reader(">H")
read_be32 = _reader(">I")

write_u8   = _writer("B")
write_le16 = _writer("<H")
write_le32 = _writer("<I")
write_be16 = _writer(">H")
write_be32 = _writer(">I")

def write_all(fd, data):
    written = fd.write(data)
    # raw streams may report a partial write, buffered ones return None or len
    if written is not None and written != len(data):
        raise ShortWrite("Wrote %d of %d bytes" % (written, len(data)))

def seek(fd, offset, whence=os.SEEK_SET):
    try:
        return fd.seek(offset, whence)
    except (OSError, ValueError) as e:
        raise SeekFailure("Cannot seek to %d (whence=%d): %s" % (offset, whence, e)) from e

def skip(fd, count):
    return seek(fd, count, os.SEEK_CUR)

def parse_struct(con, fd):
    """Parse a construct layout from fd, reporting truncation as ShortRead."""
    try:
        return con.parse_stream(fd)
    except StreamError as e:
        raise ShortRead(str(e)) from e
