"""Colour string translation.

Card projects store colours as strings. The accepted forms are:

- named colours (``red``, ``DarkSlateGray``)
- ``#RRGGBB`` / ``#RRGGBBAA``
- ``0xRRGGBB`` / ``0xRRGGBBAA``
- bare ``RRGGBB`` / ``RRGGBBAA`` hex
- decimal components ``r,g,b`` or ``r,g,b,a``
"""

import re

from PIL import ImageColor

RGBA = tuple[int, int, int, int]

HEX_PATTERN = re.compile(r"^(?:#|0x)?([0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def translate_color_string(value: str) -> RGBA:
    """Convert a project colour string to an RGBA tuple.

    Args:
        value: The colour string

    Returns:
        (red, green, blue, alpha) with components in 0-255

    Raises:
        ValueError: If the string is not a recognised colour
    """
    text = value.strip()
    if not text:
        raise ValueError("Empty colour string")

    match = HEX_PATTERN.match(text)
    if match:
        digits = match.group(1)
        components = [int(digits[i : i + 2], 16) for i in range(0, len(digits), 2)]
        if len(components) == 3:
            components.append(255)
        return tuple(components)  # type: ignore[return-value]

    if "," in text:
        parts = [part.strip() for part in text.split(",")]
        if len(parts) not in (3, 4):
            raise ValueError(f"Invalid colour components: {value!r}")
        try:
            components = [int(part) for part in parts]
        except ValueError as e:
            raise ValueError(f"Invalid colour components: {value!r}") from e
        if any(c < 0 or c > 255 for c in components):
            raise ValueError(f"Colour component out of range: {value!r}")
        if len(components) == 3:
            components.append(255)
        return tuple(components)  # type: ignore[return-value]

    # ImageColor raises ValueError for unknown names
    return ImageColor.getcolor(text, "RGBA")  # type: ignore[return-value]


def color_to_string(color: RGBA) -> str:
    """Format an RGBA tuple as ``#RRGGBBAA``."""
    return "#" + "".join(f"{c:02X}" for c in color)
