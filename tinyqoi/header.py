import logging
import struct

from .errors import InvalidMagic, TruncatedFile

logger = logging.getLogger(__name__)

QOI_MAGIC = b"qoif"
QOI_HEADER_SIZE = 14
# 7 bytes of 0x00 followed by 1 byte of 0x01
QOI_END_MARKER = b"\x00\x00\x00\x00\x00\x00\x00\x01"


def parse_header(data) -> tuple[int, int, memoryview]:
    """
    Validate a QOI buffer and split off its opcode body.

    :param data: bytes-like object containing the whole QOI file.
    :return: (width, height, body) where body is a read-only view of the bytes
             between the header and the end marker.
    """
    view = memoryview(data).toreadonly()

    if len(view) < QOI_HEADER_SIZE + len(QOI_END_MARKER):
        raise TruncatedFile("QOI.decode: File too short for header and end marker")

    header = view[:QOI_HEADER_SIZE]
    body = view[QOI_HEADER_SIZE : len(view) - len(QOI_END_MARKER)]
    trailer = view[len(view) - len(QOI_END_MARKER) :]

    # Unpack header using struct
    # > : Big Endian
    # 4s: 4-byte string (magic)
    # I : unsigned int (4 bytes)
    # B : unsigned char (1 byte)
    magic, width, height, _channels, _colorspace = struct.unpack(">4sIIBB", header)

    if magic != QOI_MAGIC:
        raise InvalidMagic("QOI.decode: The signature of the QOI file is invalid")

    if trailer != QOI_END_MARKER:
        raise TruncatedFile("QOI.decode: The end marker of the QOI file is missing")

    logger.debug(
        "Parsed QOI header: %dx%d, %d body bytes", width, height, len(body)
    )
    return width, height, body
