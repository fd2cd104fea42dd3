"""
Command line front-end.

Usage:
    python -m file_compressor compress notes.txt            # -> notes.txt.huff
    python -m file_compressor decompress notes.txt.huff -o notes.txt
    python -m file_compressor serve --port 5000
"""
import argparse
import logging
import sys

from .errors import CompressorError
from .files import compress_file, decompress_file


def build_parser():
    parser = argparse.ArgumentParser(
        prog="file-compressor",
        description="Compress and decompress files with static Huffman coding.",
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging verbosity (default: WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("compress", help="compress a file")
    p.add_argument("input")
    p.add_argument("-o", "--output", help="output path (default: INPUT.huff)")

    p = sub.add_parser("decompress", help="decompress a .huff file")
    p.add_argument("input")
    p.add_argument("-o", "--output", required=True, help="output path")

    p = sub.add_parser("serve", help="run the web service")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=5000)
    p.add_argument("--debug", action="store_true")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.command == "serve":
        from .app import create_app
        create_app().run(host=args.host, port=args.port, debug=args.debug)
        return 0

    try:
        if args.command == "compress":
            stats = compress_file(args.input, args.output)
            print(f"Compressed {stats.original_size} bytes to {stats.compressed_size} bytes "
                  f"({stats.saved_percent:.2f}% saved)")
        else:
            stats = decompress_file(args.input, args.output)
            print(f"Decompressed {stats.compressed_size} bytes to {stats.original_size} bytes")
    except CompressorError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0
