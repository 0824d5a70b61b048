ELLIPSIS = "…"


def cut(value: str, max_len: int, trailing: str = "") -> str:
    """
    Cut value to at most max_len characters (code points), appending
    trailing when anything was removed.
    """
    if not value or len(value) <= max_len - len(trailing):
        return value
    keep = max(max_len - len(trailing), 0)
    # A marker longer than max_len is itself clipped.
    return (value[:keep] + trailing)[:max(max_len, 0)]
