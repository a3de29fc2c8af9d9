"""Document assembly: classify, render and reassemble screenplay text.

The same entry point serves full screenplays and single scenes.  Output keeps
the input's blank-line layout: every blank input line becomes exactly one
empty output line, and blocks appear in their original order.
"""

import logging
from collections import Counter
from collections.abc import Iterator

from core.models import FormattedElement
from screenplay.classifier import iter_elements
from screenplay.renderer import render_block

logger = logging.getLogger(__name__)


def _render(raw_text: str, detect_dialogue: bool) -> Iterator[FormattedElement | None]:
    for block in iter_elements(raw_text, detect_dialogue=detect_dialogue):
        if block is None:
            yield None
        else:
            yield FormattedElement(
                kind=block.kind, text=block.text, rendered=render_block(block.kind, block.text)
            )


def format_script(
    raw_text: str, *, detect_dialogue: bool = False
) -> tuple[str, list[FormattedElement]]:
    """Format *raw_text* in one pass.

    Returns the formatted document together with its rendered blocks.
    Never raises for string input; empty input yields ``("", [])``.
    """
    parts: list[str] = []
    elements: list[FormattedElement] = []

    for element in _render(raw_text, detect_dialogue):
        if element is None:
            parts.append("")
            continue
        elements.append(element)
        parts.append(element.rendered)

    if logger.isEnabledFor(logging.DEBUG):
        counts = count_elements(elements)
        logger.debug(
            "Formatted %d blocks: %s",
            len(elements),
            ", ".join(f"{kind}={n}" for kind, n in counts.items()),
        )
    return "\n".join(parts), elements


def format_document(raw_text: str, *, detect_dialogue: bool = False) -> str:
    """Format a full screenplay or a single scene."""
    formatted, _ = format_script(raw_text, detect_dialogue=detect_dialogue)
    return formatted


def format_elements(raw_text: str, *, detect_dialogue: bool = False) -> list[FormattedElement]:
    """Classify and render *raw_text*, returning one entry per block.

    Blank separators are not included; use ``format_document`` for the
    reassembled text.
    """
    return [element for element in _render(raw_text, detect_dialogue) if element is not None]


def count_elements(elements: list[FormattedElement]) -> dict[str, int]:
    """Return the number of blocks per element kind."""
    return dict(Counter(element.kind.value for element in elements))
