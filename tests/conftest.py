import io
import os
import struct

import pytest

NAME_LEN = 16
HEADER_SIZE = 28
ENTRY_SIZE = NAME_LEN + 20

def rim_bytes(width, height, pixels, fmt=0, pitch=None, pad=b'\xAA', version=0):
    pitch = width * 2 if pitch is None else pitch
    out = b'RIMF' + struct.pack("<I4H", version, width, height, pitch, fmt)
    for y in range(height):
        row = pixels[y * width:(y + 1) * width]
        out += struct.pack("<%dH" % width, *row)
        out += pad * (pitch - width * 2)
    return out

def zfs_bytes(files, per_table=2, name_len=NAME_LEN, num_files=None, pad_slots=True):
    """Build an archive. files is a list of (name, data, timestamp, flags).
    Tables are laid out back to back after the header, data follows."""
    if num_files is None:
        num_files = len(files)
    entry_size = name_len + 20
    ntables = max(1, -(-len(files) // per_table))
    table_size = 4 + per_table * entry_size
    tables_start = HEADER_SIZE
    data_start = tables_start + ntables * table_size

    entries = []
    blob = b''
    for name, data, timestamp, flags in files:
        entries.append((name, data_start + len(blob), len(data), timestamp, flags))
        blob += data

    out = b'ZFS3' + struct.pack("<6I", 3, name_len, per_table, num_files, 0, tables_start)
    for t in range(ntables):
        nxt = tables_start + (t + 1) * table_size if t + 1 < ntables else 0
        out += struct.pack("<I", nxt)
        page = entries[t * per_table:(t + 1) * per_table]
        for name, offset, size, timestamp, flags in page:
            raw = name.encode() if isinstance(name, str) else name
            out += raw.ljust(name_len, b'\x00')
            out += struct.pack("<5I", offset, 0xDEADBEEF, size, timestamp, flags)
        if pad_slots:
            out += b'\x00' * (entry_size * (per_table - len(page)))
    return out + blob

class SeekLog(io.BytesIO):
    """BytesIO remembering absolute seek targets."""
    def __init__(self, data):
        io.BytesIO.__init__(self, data)
        self.seeks = []

    def seek(self, offset, whence=os.SEEK_SET):
        if whence == os.SEEK_SET:
            self.seeks.append(offset)
        return io.BytesIO.seek(self, offset, whence)

@pytest.fixture
def sample_files():
    return [
        ("readme.txt", b"hello world\n", 946684800, 0),
        ("gfx\\tile.rim", rim_bytes(2, 2, [0x7C00, 0x03E0, 0x001F, 0x7FFF]), 1000000000, 1),
        ("sound.wav", b"RIFF" + bytes(range(32)), 1200000000, 0x10),
    ]
