from construct import *

# 'ZFS3' and 'RIMF' read as little-endian u32
ZFS_SIGNATURE = 0x3353465a
RIM_SIGNATURE = 0x464d4952

# Archive header, following the signature
ZFSHeaderBody = Struct(
    "version"          / Int32ul,
    "max_filename_len" / Int32ul,
    "files_per_table"  / Int32ul,
    "num_files"        / Int32ul,
    Padding(4),
    "table_offset"     / Int32ul,
)

# Directory entry, following the max_filename_len byte name field
ZFSEntryRecord = Struct(
    "offset"    / Int32ul,
    Padding(4),
    "size"      / Int32ul,
    "timestamp" / Int32ul,
    "flags"     / Int32ul,
)

# Image header, following the signature. Pixel rows follow immediately.
RIMHeaderBody = Struct(
    "version" / Int32ul,
    "width"   / Int16ul,
    "height"  / Int16ul,
    "pitch"   / Int16ul,
    "format"  / Int16ul,
)

__all__ = [
    "ZFS_SIGNATURE", "RIM_SIGNATURE",
    "ZFSHeaderBody", "ZFSEntryRecord", "RIMHeaderBody",
]
