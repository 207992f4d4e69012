import logging
import os
import sys
from pathlib import Path

from . import binio
from .errors import InvalidHeader

log = logging.getLogger(__name__)

def output_path(outdir, name):
    # archive names use DOS separators
    root = Path(outdir).resolve()
    path = root.joinpath(*name.replace('\\', '/').split('/')).resolve()
    if path == root or root not in path.parents:
        raise InvalidHeader("Entry \"%s\" points outside %s" % (name, root))
    path.parent.mkdir(parents=True, exist_ok=True)
    return path

def set_mtime(path, entry):
    try:
        os.utime(path, (entry.mtime, entry.mtime))
    except OSError as e:
        log.warning("Could not set timestamp on %s: %s", path, e)

def extract_file(entry, fd, outdir, timestamps=True):
    data = entry.read_data(fd)
    path = output_path(outdir, entry.name)
    log.info("Extracting file \"%s\"", entry.name)
    with path.open("wb") as out:
        binio.write_all(out, data)
    if timestamps:
        set_mtime(path, entry)
    return path

def extract_rim_image(entry, fd, outdir, timestamps=True):
    img = entry.read_rim_image(fd)
    if img.width == 0 or img.height == 0:
        log.warning("Skipping empty %dx%d image \"%s\"", img.width, img.height, entry.name)
        return None

    path = output_path(outdir, entry.name + ".png")
    log.info("Converting image \"%s\" (%dx%d %s)", entry.name,
             img.width, img.height, img.format.name)
    with path.open("wb") as out:
        img.save(out)
    if timestamps:
        set_mtime(path, entry)
    return path

def extract_entry(entry, fd, outdir, convert=True, timestamps=True):
    if convert and entry.is_rim:
        return extract_rim_image(entry, fd, outdir, timestamps)
    return extract_file(entry, fd, outdir, timestamps)

def extract_all(zfs, fd, outdir, convert=True, timestamps=True):
    return [extract_entry(entry, fd, outdir, convert, timestamps) for entry in zfs]

def list_entries(zfs, out=None):
    out = out or sys.stdout
    print("Offset", "Length", "Flags", "Timestamp", "Name", sep='\t', file=out)
    for entry in zfs:
        print(hex(entry.offset), entry.size, hex(entry.flags),
              entry.timestamp.strftime("%Y-%m-%d %H:%M:%S"), entry.name,
              sep='\t', file=out)
