"""Row measurement for messages shown in the output region."""

from __future__ import annotations

from dataclasses import dataclass

from wcwidth import wcswidth, wcwidth

TAB_WIDTH = 8
# Unprintable characters are shown in caret notation (``^X``).
CONTROL_WIDTH = 2


@dataclass(frozen=True, slots=True)
class Measurement:
    required_rows: int
    override_needed: bool


def display_width(text: str) -> int:
    """Return the number of terminal cells ``text`` occupies.

    Wide characters count as 2 and combining characters as 0. ``wcswidth``
    gives up on the whole string when it meets a control character, so fall
    back to summing per-character widths in that case.
    """

    width = wcswidth(text)
    if width >= 0:
        return width
    total = 0
    for char in text:
        char_width = wcwidth(char)
        total += CONTROL_WIDTH if char_width < 0 else char_width
    return total


def line_rows(width: int, columns: int) -> int:
    rows = 1 + max(0, width - 1) // columns
    if width and width % columns == 0:
        # A line that exactly fills its last row still pushes the cursor onto a new one.
        rows += 1
    return rows


def measure(text: str, columns: int, echospace: int, region_height: int) -> Measurement:
    """Work out how many rows ``text`` needs and whether the cosmetic options must go.

    ``override_needed`` flags a last line that is longer than the echo space
    margin while the message already fills the current region: the host would
    otherwise draw the ruler and pending command over it.
    """

    columns = max(columns, 1)
    lines = text.replace("\t", " " * TAB_WIDTH).split("\n")
    widths = [display_width(line) for line in lines]

    required_rows = sum(line_rows(width, columns) for width in widths)
    remainder = widths[-1] % columns
    override_needed = remainder > echospace and required_rows >= region_height
    return Measurement(required_rows=required_rows, override_needed=override_needed)
