"""Display a QOI image in a window.

Usage: python main.py QOI_IMAGE [--check REFERENCE_PNG]
"""

import argparse
import logging
import sys

import numpy as np
from PIL import Image

from tinyqoi import DecodeError, load_qoi, to_image

WINDOW_TITLE = "qoi viewer"


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Display a QOI image.")
    parser.add_argument("qoi_file", help="QOI image to display")
    parser.add_argument(
        "--check",
        metavar="PNG",
        help="compare the decoded pixels against a reference PNG instead of showing a window",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def check_against(image: Image.Image, png_path: str) -> bool:
    with Image.open(png_path) as png:
        reference = np.array(png.convert("RGB"))
    return np.array_equal(np.array(image), reference)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)-16s - %(levelname)-8s - %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        qoi = load_qoi(args.qoi_file)
        image = to_image(qoi)
    except (DecodeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Loaded image {args.qoi_file}: {qoi.width}x{qoi.height}")

    if args.check:
        try:
            matches = check_against(image, args.check)
        except OSError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        if not matches:
            print(f"{args.qoi_file} does not match {args.check}", file=sys.stderr)
            return 1
        print(f"{args.qoi_file} matches {args.check}")
        return 0

    image.show(title=WINDOW_TITLE)
    return 0


if __name__ == "__main__":
    sys.exit(main())
