import logging
import sys
from argparse import ArgumentParser, FileType
from pathlib import Path

from .extract import extract_all, list_entries
from .rim import RIMImage
from .zfs import ZFSFile

argparser = ArgumentParser(
    prog="zfstool",
    description="Extract files from Civilization: Call to Power ZFS archives, "
                "converting RIM images to PNG.")
argparser.add_argument("file", type=FileType("rb"), help="ZFS archive")
argparser.add_argument("out", type=Path, nargs="?", default=Path("."),
                       help="output directory (default: current directory)")
argparser.add_argument("-l", "--list", action="store_true",
                       help="list the archive contents and exit")
argparser.add_argument("--no-convert", dest="convert", action="store_false",
                       help="write .rim files as-is instead of converting to PNG")
argparser.add_argument("--no-timestamps", dest="timestamps", action="store_false",
                       help="do not copy archive timestamps to extracted files")
argparser.add_argument("-v", "--verbose", action="store_true")

rimparser = ArgumentParser(prog="rimtool", description="Convert a RIM image to PNG.")
rimparser.add_argument("file", type=FileType("rb"), help="RIM image")
rimparser.add_argument("out", type=Path, help="PNG to write")
rimparser.add_argument("-v", "--verbose", action="store_true")

def setup_logging(verbose):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO,
                        format="%(levelname)s: %(message)s")

def parse_args(parser, argv, counts):
    # none of the options take a value, so anything not starting with '-'
    # is a positional
    argv = sys.argv[1:] if argv is None else argv
    wants_help = "-h" in argv or "--help" in argv
    if not wants_help and len([arg for arg in argv if not arg.startswith("-")]) not in counts:
        parser.print_usage()
        return None
    return parser.parse_args(argv)

def main(argv=None):
    args = parse_args(argparser, argv, (1, 2))
    if args is None:
        return 0
    setup_logging(args.verbose)

    with args.file as fd:
        logging.info("File: %s", fd.name)
        zfs = ZFSFile.from_stream(fd)
        if args.list:
            list_entries(zfs)
        else:
            extract_all(zfs, fd, args.out, args.convert, args.timestamps)
    return 0

def rim_main(argv=None):
    args = parse_args(rimparser, argv, (2,))
    if args is None:
        return 0
    setup_logging(args.verbose)

    with args.file as fd:
        img = RIMImage.from_stream(fd)
    logging.info("%s: %dx%d %s", args.out, img.width, img.height, img.format.name)
    img.save(args.out)
    return 0

if __name__ == "__main__":
    sys.exit(main())
