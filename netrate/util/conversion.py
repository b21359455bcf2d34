import math

BYTE_UNITS = ["B", "kB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB"]


def strip_float(number: float) -> str:
    """
    Render a float without trailing zeros, e.g. 1.50 -> "1.5", 2.0 -> "2".
    """
    if float(number).is_integer():
        return str(int(number))
    return f"{number:f}".rstrip("0").rstrip(".")


def pretty_bytes(number: float) -> str:
    """
    Convert bytes to a human readable string using decimal (base 1000) units
    and three significant digits.
    """
    if number < 0:
        return f"-{pretty_bytes(-number)}"

    if number < 1:
        return f"{strip_float(round(number, 3))} {BYTE_UNITS[0]}"

    exponent = min(int(math.floor(math.log10(number) / 3)), len(BYTE_UNITS) - 1)
    value = float(f"{number / (1000**exponent):.3g}")
    return f"{strip_float(value)} {BYTE_UNITS[exponent]}"


def format_rate(rate: float) -> str:
    """
    Format a bytes/second rate, e.g. 1536 -> "1.54 kB/s".
    """
    if not math.isfinite(rate) or rate <= 0:
        return "0 B/s"
    return f"{pretty_bytes(rate)}/s"
