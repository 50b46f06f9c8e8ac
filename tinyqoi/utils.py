import numpy as np
from PIL import Image

from .decoder import Qoi
from .errors import IncompleteImage


def load_qoi(filepath: str) -> Qoi:
    """Read a QOI file from disk and parse its header."""
    with open(filepath, "rb") as f:
        content = f.read()

    return Qoi(content)


def to_array(qoi: Qoi) -> np.ndarray:
    """Decode an image into a (height, width, 3) uint8 array."""
    raw = qoi.to_bytes()
    expected = qoi.width * qoi.height * 3
    if len(raw) != expected:
        raise IncompleteImage(
            f"QOI.decode: Incomplete image ({len(raw) // 3} of "
            f"{qoi.width * qoi.height} pixels)"
        )

    return np.frombuffer(raw, dtype=np.uint8).reshape(qoi.height, qoi.width, 3)


def to_image(qoi: Qoi) -> Image.Image:
    """Decode an image into a Pillow RGB image."""
    return Image.fromarray(to_array(qoi))


def draw(qoi: Qoi, target: Image.Image, offset: tuple[int, int] = (0, 0)) -> int:
    """
    Draw the pixels of an image onto a Pillow surface.

    Pixels are placed row-major starting at offset; anything falling outside
    the target is skipped. A truncated stream leaves the remaining area
    untouched.

    :return: number of pixels written to the target.
    """
    target_width, target_height = target.size
    left, top = offset
    written = 0

    for count, color in enumerate(qoi.pixels()):
        if count == qoi.width * qoi.height:
            break
        x = left + count % qoi.width
        y = top + count // qoi.width
        if 0 <= x < target_width and 0 <= y < target_height:
            target.putpixel((x, y), color)
            written += 1

    return written
