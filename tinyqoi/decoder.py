import logging
from typing import NamedTuple

from .header import parse_header

logger = logging.getLogger(__name__)

# QOI Constants
QOI_OP_INDEX = 0x00  # 00xxxxxx
QOI_OP_DIFF = 0x40  # 01xxxxxx
QOI_OP_LUMA = 0x80  # 10xxxxxx
QOI_OP_RUN = 0xC0  # 11xxxxxx
QOI_OP_RGB = 0xFE  # 11111110
QOI_OP_RGBA = 0xFF  # 11111111

QOI_MASK_2 = 0xC0
QOI_INDEX_SIZE = 64


class Rgb888(NamedTuple):
    r: int
    g: int
    b: int


BLACK = Rgb888(0, 0, 0)


def hash_pixel(color: Rgb888, alpha: int) -> int:
    """Calculates the index position for the color array."""
    r, g, b = color
    return (r * 3 + g * 5 + b * 7 + alpha * 11) % QOI_INDEX_SIZE


class Qoi:
    """
    A decoded QOI header plus a view of the opcode stream that follows it.

    The handle borrows the caller's buffer: nothing is copied and the buffer
    must not be modified while the handle or any of its iterators are alive.
    """

    def __init__(self, data):
        self._width, self._height, self._data = parse_header(data)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> tuple[int, int]:
        return self._width, self._height

    @property
    def data(self) -> memoryview:
        return self._data

    def dimensions(self) -> tuple[int, int]:
        return self.size

    def pixels(self) -> "PixelsIter":
        """Returns a fresh iterator over the pixels of this image."""
        return PixelsIter(self)

    def __iter__(self):
        return self.pixels()

    def to_bytes(self) -> bytes:
        """
        Pack the pixels into a flat RGB byte string.

        At most width * height pixels are taken; a truncated stream gives a
        shorter result.
        """
        total_pixels = self._width * self._height
        result = bytearray()
        for count, color in enumerate(self.pixels()):
            if count == total_pixels:
                break
            result.extend(color)
        return bytes(result)

    def __repr__(self):
        return f"<Qoi {self._width}x{self._height} ({len(self._data)} bytes)>"


def open(data) -> Qoi:
    """Parse the header of a QOI buffer, raising DecodeError if it is invalid."""
    return Qoi(data)


class PixelsIter:
    """
    Single pass iterator over the pixels of a QOI image.

    Yields Rgb888 colors in row-major order until the opcode stream runs out.
    A multi-byte opcode cut short by the end of the stream ends the iteration
    instead of raising.
    """

    def __init__(self, qoi: Qoi):
        self.previous_color = BLACK
        self.previous_alpha = 255
        # Index arrays: 64 colors and alphas, initialized to zero
        self.previous_colors = [BLACK] * QOI_INDEX_SIZE
        self.previous_alphas = [0] * QOI_INDEX_SIZE
        self.data = qoi.data
        self.read_pos = 0
        self.run_length = 0

    def __iter__(self):
        return self

    @property
    def remaining(self) -> memoryview:
        """The opcode bytes not read yet."""
        return self.data[self.read_pos :]

    def _has(self, count: int) -> bool:
        available = len(self.data) - self.read_pos
        if available < count:
            logger.debug(
                "QOI stream ends inside an opcode: need %d bytes, have %d",
                count,
                available,
            )
            self.read_pos = len(self.data)
            return False
        return True

    def __next__(self) -> Rgb888:
        data = self.data

        # 1. Handle Run-Length Decoding
        if self.run_length > 0:
            self.run_length -= 1
            return self.previous_color

        # 2. Read Next Op-Code
        if self.read_pos >= len(data):
            raise StopIteration
        b1 = data[self.read_pos]
        self.read_pos += 1
        p = self.read_pos

        # QOI_OP_RGB (0xFE/0b11111110)
        if b1 == QOI_OP_RGB:
            if not self._has(3):
                raise StopIteration
            self.previous_color = Rgb888(data[p], data[p + 1], data[p + 2])
            self.read_pos += 3

        # QOI_OP_RGBA (0xFF/0b11111111)
        elif b1 == QOI_OP_RGBA:
            if not self._has(4):
                raise StopIteration
            self.previous_color = Rgb888(data[p], data[p + 1], data[p + 2])
            self.previous_alpha = data[p + 3]
            self.read_pos += 4

        # QOI_OP_INDEX (00xxxxxx)
        elif (b1 & QOI_MASK_2) == QOI_OP_INDEX:
            # The pixel is already in the index, so it is not stored again
            index_pos = b1 & 0x3F
            self.previous_color = self.previous_colors[index_pos]
            self.previous_alpha = self.previous_alphas[index_pos]
            return self.previous_color

        # QOI_OP_DIFF (01xxxxxx)
        elif (b1 & QOI_MASK_2) == QOI_OP_DIFF:
            # Extract 2-bit differences and subtract bias of 2
            # Use % 256 to wrap the result to 8-bit unsigned
            dr = ((b1 >> 4) & 0x03) - 2
            dg = ((b1 >> 2) & 0x03) - 2
            db = (b1 & 0x03) - 2

            r, g, b = self.previous_color
            self.previous_color = Rgb888(
                (r + dr) % 256, (g + dg) % 256, (b + db) % 256
            )

        # QOI_OP_LUMA (10xxxxxx)
        elif (b1 & QOI_MASK_2) == QOI_OP_LUMA:
            if not self._has(1):
                raise StopIteration
            b2 = data[p]
            self.read_pos += 1

            dg = (b1 & 0x3F) - 32
            dr = ((b2 >> 4) & 0x0F) - 8 + dg
            db = (b2 & 0x0F) - 8 + dg

            r, g, b = self.previous_color
            self.previous_color = Rgb888(
                (r + dr) % 256, (g + dg) % 256, (b + db) % 256
            )

        # QOI_OP_RUN (11xxxxxx)
        else:
            # Emit the current pixel now and queue the remaining repeats
            self.run_length = b1 & 0x3F
            return self.previous_color

        # 3. Update Index
        # The index formula: (r*3 + g*5 + b*7 + a*11) % 64
        index_pos = hash_pixel(self.previous_color, self.previous_alpha)
        self.previous_colors[index_pos] = self.previous_color
        self.previous_alphas[index_pos] = self.previous_alpha

        return self.previous_color
