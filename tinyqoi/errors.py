class DecodeError(ValueError):
    """Base class for errors raised while opening a QOI buffer."""


class InvalidMagic(DecodeError):
    """The buffer does not start with the ``qoif`` signature."""


class TruncatedFile(DecodeError):
    """The buffer is too short or does not end with the end marker."""


class IncompleteImage(DecodeError):
    """The opcode stream produced fewer pixels than width * height."""
