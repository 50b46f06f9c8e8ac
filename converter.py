import argparse
import logging
import sys

from tinyqoi import DecodeError, load_qoi, to_image


def qoi_to_png(qoi_path, png_path):
    qoi = load_qoi(qoi_path)
    img = to_image(qoi)
    img.save(png_path)
    print(f"Converted {qoi_path} to {png_path}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Convert a QOI image to PNG.")
    parser.add_argument("qoi_file")
    parser.add_argument("png_file")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        qoi_to_png(args.qoi_file, args.png_file)
    except (DecodeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
