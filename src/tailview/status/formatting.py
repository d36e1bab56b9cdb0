MEGABYTE = 1024 * 1024


def format_megabytes(count) -> str:
    """
    Render a byte count as binary megabytes, e.g. 2097152 -> "2 MB".
    Anything that is not a number counts as zero.
    """
    try:
        value = int(count)
    except (TypeError, ValueError):
        value = 0

    text = f"{value / MEGABYTE:.2f}".rstrip("0").rstrip(".")
    return f"{text} MB"
