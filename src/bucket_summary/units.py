"""Human-readable size formatting."""

from decimal import ROUND_HALF_UP, Decimal

from bucket_summary.core.exceptions import ValidationError

BYTES_PER_MEGABYTE = 1024**2


def format_megabytes(num_bytes: int) -> str:
    """Render a byte count in binary megabytes, e.g. ``1572864 -> "1.5 MB"``.

    The value is rounded half-up to two decimals and trailing zeros are
    dropped, so ``0`` renders as ``"0 MB"`` and ``1048576`` as ``"1 MB"``.
    """
    if num_bytes < 0:
        raise ValidationError(f"Byte count must be non-negative, got: {num_bytes}")

    megabytes = (Decimal(num_bytes) / BYTES_PER_MEGABYTE).quantize(
        Decimal("0.01"), rounding=ROUND_HALF_UP
    )
    text = f"{megabytes:f}".rstrip("0").rstrip(".")
    return f"{text} MB"
