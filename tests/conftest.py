import struct

import pytest

from tinyqoi import QOI_END_MARKER


def build_qoi(width, height, body, channels=3, colorspace=0) -> bytes:
    """Wrap an opcode body in a QOI header and end marker."""
    return (
        b"qoif"
        + struct.pack(">IIBB", width, height, channels, colorspace)
        + bytes(body)
        + QOI_END_MARKER
    )


@pytest.fixture
def make_qoi():
    return build_qoi


@pytest.fixture
def solid_rows_qoi():
    """3x3 image with a red, a green and a blue row, all as RGB ops."""
    body = []
    for color in ((255, 0, 0), (0, 255, 0), (0, 0, 255)):
        for _ in range(3):
            body += [0xFE, *color]
    return build_qoi(3, 3, body)
