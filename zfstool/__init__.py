from .errors import (ZFSError, InvalidSignature, InvalidHeader,
                     UnknownPixelFormat, ShortRead, ShortWrite, SeekFailure)
from .rim import RIMFormat, RIMHeader, RIMImage
from .zfs import ZFSEntry, ZFSFile, ZFSHeader

__all__ = [
    "ZFSError", "InvalidSignature", "InvalidHeader", "UnknownPixelFormat",
    "ShortRead", "ShortWrite", "SeekFailure",
    "RIMFormat", "RIMHeader", "RIMImage",
    "ZFSEntry", "ZFSFile", "ZFSHeader",
]
