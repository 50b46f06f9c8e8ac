from .decoder import BLACK, PixelsIter, Qoi, Rgb888, hash_pixel, open
from .errors import DecodeError, IncompleteImage, InvalidMagic, TruncatedFile
from .header import QOI_END_MARKER, parse_header
from .utils import draw, load_qoi, to_array, to_image

__all__ = [
    "Qoi",
    "PixelsIter",
    "Rgb888",
    "BLACK",
    "open",
    "hash_pixel",
    "parse_header",
    "QOI_END_MARKER",
    "DecodeError",
    "InvalidMagic",
    "TruncatedFile",
    "IncompleteImage",
    "load_qoi",
    "to_array",
    "to_image",
    "draw",
]
