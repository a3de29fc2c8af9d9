"""Greedy word wrapping shared by the dialogue and action renderers."""

from core.exceptions import FormattingException


def wrap_text(text: str, width: int) -> str:
    """Wrap *text* at *width* columns, never splitting a word.

    Text that already fits is returned unchanged.  Otherwise words are packed
    greedily onto each line; a word longer than *width* gets a line of its own.
    """
    if width <= 0:
        raise FormattingException(
            f"Wrap width must be positive, got {width}", details={"width": width}
        )

    if len(text) <= width:
        return text

    lines: list[str] = []
    line = ""

    for word in text.split(" "):
        if line.strip() and len(line + word) > width:
            lines.append(line.strip())
            line = word + " "
        else:
            line += word + " "

    lines.append(line.strip())
    return "\n".join(lines)
