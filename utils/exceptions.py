class WatermarkError(ValueError):
    """Base class for every condition that stops a watermarking run.

    ``exit_code`` is the process status the command line reports for the
    category.
    """

    exit_code = 1


class InputError(WatermarkError):
    """Missing or unreadable file, non-numeric answer or wrong extension."""

    exit_code = 1


class UnsupportedColorModel(WatermarkError):
    exit_code = 2


class UnsupportedBitDepth(WatermarkError):
    exit_code = 3


class DimensionMismatch(WatermarkError):
    exit_code = 4


class InvalidColor(WatermarkError):
    exit_code = 5


class WatermarkTooLarge(WatermarkError):
    exit_code = 6


class PositionOutOfRange(WatermarkError):
    exit_code = 7


class TransparencyOutOfRange(WatermarkError):
    exit_code = 8
