import logging
from collections import namedtuple
from datetime import datetime, timezone

from . import binio
from .errors import InvalidSignature, InvalidHeader
from .rim import RIMImage
from .zfsstructs import ZFS_SIGNATURE, ZFSHeaderBody, ZFSEntryRecord

log = logging.getLogger(__name__)

RIM_SUFFIX = ".rim"

ZFSHeader = namedtuple("ZFSHeader", """
    signature
    version
    max_filename_len
    files_per_table
    num_files
    table_offset
""")

_ZFSEntry = namedtuple("ZFSEntry", "name offset size mtime flags")

class ZFSEntry(_ZFSEntry):
    """A file in a ZFS archive. offset is absolute from the start of the
    archive, mtime is seconds since the epoch."""
    __slots__ = ()

    @property
    def timestamp(self):
        return datetime.fromtimestamp(self.mtime, tz=timezone.utc)

    @property
    def is_rim(self):
        return self.name.endswith(RIM_SUFFIX)

    def read_data(self, fd):
        binio.seek(fd, self.offset)
        return binio.read_exact(fd, self.size)

    def read_rim_image(self, fd):
        binio.seek(fd, self.offset)
        return RIMImage.from_stream(fd)


def decode_name(raw):
    return raw.decode("utf-8", errors="replace").rstrip('\x00')

def read_header(fd):
    sig = binio.read_le32(fd)
    if sig != ZFS_SIGNATURE:
        raise InvalidSignature("ZFS", ZFS_SIGNATURE, sig)

    body = binio.parse_struct(ZFSHeaderBody, fd)
    hdr = ZFSHeader(sig, body.version, body.max_filename_len,
                    body.files_per_table, body.num_files, body.table_offset)

    if hdr.files_per_table == 0:
        raise InvalidHeader("ZFS header declares 0 files per table")
    if hdr.max_filename_len == 0:
        raise InvalidHeader("ZFS header declares 0 byte filenames")
    return hdr

def read_entries(hdr, fd):
    # Entries live in fixed size tables, each starting with the offset of
    # the next. The declared count bounds the walk, the chain is not trusted
    # to terminate.
    binio.seek(fd, hdr.table_offset)
    next_table = binio.read_le32(fd)
    log.debug("Table at 0x%x, next at 0x%x", hdr.table_offset, next_table)

    for i in range(hdr.num_files):
        raw_name = binio.read_exact(fd, hdr.max_filename_len)
        if raw_name[0] == 0:
            # unused slot at the end of the last table
            break

        rec = binio.parse_struct(ZFSEntryRecord, fd)
        entry = ZFSEntry(decode_name(raw_name), rec.offset, rec.size,
                         rec.timestamp, rec.flags)
        log.debug("%d: %r @ 0x%x (%d bytes, flags 0x%x)", i, entry.name,
                  entry.offset, entry.size, entry.flags)
        yield entry

        if i % hdr.files_per_table == hdr.files_per_table - 1:
            table = next_table
            binio.seek(fd, table)
            next_table = binio.read_le32(fd)
            log.debug("Table at 0x%x, next at 0x%x", table, next_table)


class ZFSFile:
    __slots__ = "header", "files"

    def __init__(self, header, files):
        self.header = header
        self.files = files

    @classmethod
    def from_stream(cls, fd):
        hdr = read_header(fd)
        log.debug("ZFS v%d, %d files, %d per table, %d byte names", hdr.version,
                  hdr.num_files, hdr.files_per_table, hdr.max_filename_len)
        # built in full before returning, a truncated table raises instead
        return cls(hdr, list(read_entries(hdr, fd)))

    @property
    def version(self):
        return self.header.version

    @property
    def max_filename_len(self):
        return self.header.max_filename_len

    def __iter__(self):
        return iter(self.files)

    def __len__(self):
        return len(self.files)

    def find(self, name):
        for entry in self.files:
            if entry.name == name:
                return entry
        raise KeyError(name)


def parse(fd):
    return ZFSFile.from_stream(fd)
