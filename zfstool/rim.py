import logging
from collections import namedtuple
from enum import IntEnum

import numpy as np
from PIL import Image

from . import binio
from .errors import InvalidSignature, InvalidHeader, UnknownPixelFormat
from .zfsstructs import RIM_SIGNATURE, RIMHeaderBody

log = logging.getLogger(__name__)

int16ul = np.dtype("<u2")

class RIMFormat(IntEnum):
    RGB555 = 0 # 1 ignored, 5 red, 5 green, 5 blue
    RGB565 = 1

_RIMHeader = namedtuple("RIMHeader", "version width height pitch format")

class RIMHeader(_RIMHeader):
    __slots__ = ()

    @classmethod
    def from_stream(cls, fd):
        """Read a RIM header. fd is left at the first pixel row."""
        sig = binio.read_le32(fd)
        if sig != RIM_SIGNATURE:
            raise InvalidSignature("RIM", RIM_SIGNATURE, sig)

        body = binio.parse_struct(RIMHeaderBody, fd)
        try:
            fmt = RIMFormat(body.format)
        except ValueError:
            raise UnknownPixelFormat(body.format) from None

        if body.pitch < body.width * 2:
            raise InvalidHeader("RIM pitch %d is smaller than a %d pixel row"
                                % (body.pitch, body.width))

        log.debug("RIM v%d %dx%d pitch %d %s", body.version, body.width,
                  body.height, body.pitch, fmt.name)
        return cls(body.version, body.width, body.height, body.pitch, fmt)

    @property
    def padding(self):
        return self.pitch - self.width * 2

    def rows(self, fd):
        # relative seeks only, the image may sit anywhere inside an archive
        for _ in range(self.height):
            row = binio.read_exact(fd, self.width * 2)
            if self.padding:
                binio.skip(fd, self.padding)
            yield row

    def read_contiguous(self, fd):
        """Read the pixel rows at fd as a flat array of packed 16-bit values,
        with the row padding dropped."""
        pixels = np.frombuffer(b''.join(self.rows(fd)), dtype=int16ul)
        return pixels.astype(np.uint16)

    def read_rgba_bytes(self, fd):
        out = bytearray()
        for row in self.rows(fd):
            out += unpack_pixels(np.frombuffer(row, dtype=int16ul), self.format)
        return bytes(out)


def unpack_pixels(pixels, fmt):
    """Expand packed pixels to RGBA8 bytes. Channels are shifted up, not
    rescaled, so the low bits of every channel stay zero."""
    pixels = np.asarray(pixels, dtype=np.uint16)
    out = np.empty((pixels.size, 4), dtype=np.uint8)

    if fmt == RIMFormat.RGB555:
        out[:, 0] = ((pixels >> 10) & 0x1F) << 3
        out[:, 1] = ((pixels >>  5) & 0x1F) << 3
        out[:, 2] = ((pixels >>  0) & 0x1F) << 3
    elif fmt == RIMFormat.RGB565:
        out[:, 0] = ((pixels >> 11) & 0x1F) << 3
        out[:, 1] = ((pixels >>  5) & 0x3F) << 2
        out[:, 2] = ((pixels >>  0) & 0x1F) << 3
    else:
        raise UnknownPixelFormat(int(fmt))
    out[:, 3] = 255

    return out.tobytes()


class RIMImage:
    __slots__ = "width", "height", "format", "pixels"

    def __init__(self, width, height, format, pixels):
        pixels = np.array(pixels, dtype=np.uint16).reshape(-1)
        if pixels.size != width * height:
            raise ValueError("Expected %d pixels, got %d" % (width * height, pixels.size))
        pixels.flags.writeable = False
        self.width = width
        self.height = height
        self.format = RIMFormat(format)
        self.pixels = pixels

    @classmethod
    def from_stream(cls, fd):
        hdr = RIMHeader.from_stream(fd)
        return cls(hdr.width, hdr.height, hdr.format, hdr.read_contiguous(fd))

    @property
    def size(self):
        return self.width, self.height

    def to_rgba(self):
        return unpack_pixels(self.pixels, self.format)

    def to_image(self):
        return Image.frombytes("RGBA", self.size, self.to_rgba())

    def save(self, out):
        self.to_image().save(out, format="PNG")

    def __repr__(self):
        return "<RIMImage %dx%d %s>" % (self.width, self.height, self.format.name)


def parse(fd):
    return RIMImage.from_stream(fd)

def to_rgba(image):
    return image.to_rgba()
