def int_hook(v: int | str | None) -> int:
    """
    Coerce a raw counter field to a non-negative int.

    Only plain ASCII digit strings are accepted; signs, underscores and
    anything else non-numeric become 0.
    """
    if isinstance(v, int):
        return v if v >= 0 else 0
    if isinstance(v, str) and v.isascii() and v.isdigit():
        return int(v)
    return 0
