"""Kind-specific rendering of classified screenplay blocks."""

from collections.abc import Callable

from core.models import ElementKind
from screenplay.wrap import wrap_text

DIALOGUE_WIDTH = 35
ACTION_WIDTH = 60


def render_uppercase(text: str) -> str:
    return text.upper()


def _closed_by_last_char(text: str) -> bool:
    """True if the ``(`` opening *text* is matched by its final character."""
    depth = 0
    for i, char in enumerate(text):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return i == len(text) - 1
    return False


def render_parenthetical(text: str) -> str:
    """Ensure *text* is wrapped in one pair of parentheses.

    Missing outer parentheses are added, as are closers (or openers) that
    leave the text unbalanced.  Redundant balanced layers such as
    ``((quietly))`` collapse to one; inner parentheses are left alone.
    """
    if not text.startswith("("):
        text = "(" + text
    if not text.endswith(")"):
        text += ")"
    surplus = text.count("(") - text.count(")")
    if surplus > 0:
        text += ")" * surplus
    elif surplus < 0:
        text = "(" * -surplus + text
    while (
        text.startswith("((")
        and _closed_by_last_char(text)
        and _closed_by_last_char(text[1:-1])
    ):
        text = text[1:-1]
    return text


def render_dialogue(text: str) -> str:
    return wrap_text(text, DIALOGUE_WIDTH)


def render_action(text: str) -> str:
    return wrap_text(text, ACTION_WIDTH)


_RENDERERS: dict[ElementKind, Callable[[str], str]] = {
    ElementKind.SCENE_HEADING: render_uppercase,
    ElementKind.CHARACTER: render_uppercase,
    ElementKind.TRANSITION: render_uppercase,
    ElementKind.TECHNICAL: render_uppercase,
    ElementKind.PARENTHETICAL: render_parenthetical,
    ElementKind.DIALOGUE: render_dialogue,
    ElementKind.ACTION: render_action,
}


def render_block(kind: ElementKind, text: str) -> str:
    """Return the formatted form of a block's concatenated *text*.

    Scene headings, character cues, transitions and technical directions are
    uppercased.  Parentheticals are normalised to a single pair of
    parentheses.  Dialogue and action are word-wrapped at 35 and 60 columns.
    """
    return _RENDERERS.get(kind, render_action)(text)
