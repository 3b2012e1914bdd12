"""
Natural ordering for version-like strings.

version_ordinal() maps a string such as "v1.10.0" to a byte key whose
plain lexicographic order matches a human reading embedded numbers as
numbers: "v1.9" < "v1.10", "v2.0" < "v10.0".

Each digit run is prefixed with a single byte holding its length, so a
longer run (a bigger number) always sorts after a shorter one. A run that
so far is a lone "0" is overwritten by the next digit, which drops leading
zeros ("007" encodes like "7").
"""

MAX_RUN_LENGTH = 255


def version_ordinal(version: str) -> bytes:
    """
    Encode a version string as a natural-order sort key.

    Args:
        version: Version-like string (e.g. a tag name)

    Returns:
        Byte sequence for use as a sort key only

    Raises:
        ValueError: If a digit run is longer than 255 digits
    """
    out = bytearray()
    prefix = -1  # index of the length byte of the current digit run

    for b in version.encode('utf-8'):
        if not 0x30 <= b <= 0x39:
            out.append(b)
            prefix = -1
            continue

        if prefix == -1:
            out.append(0)
            prefix = len(out) - 1

        if out[prefix] == 1 and out[prefix + 1] == 0x30:
            out[prefix + 1] = b
            continue

        if out[prefix] + 1 > MAX_RUN_LENGTH:
            raise ValueError(f"version_ordinal: digit run too long in {version!r}")

        out.append(b)
        out[prefix] += 1

    return bytes(out)
