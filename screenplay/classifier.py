"""Line classifier and block grouping for free-form screenplay text.

Each stripped, non-empty line is assigned one ``ElementKind`` by walking an
ordered rule table (first match wins).  Consecutive lines of the same kind
are grouped into a ``Block``; a blank line or a change of kind closes it.
"""

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from core.models import ElementKind

CHARACTER_MAX_LENGTH = 50

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_TIMES_OF_DAY = (
    "DAY",
    "NIGHT",
    "MORNING",
    "EVENING",
    "DUSK",
    "DAWN",
    "CONTINUOUS",
    "LATER",
    "SAME TIME",
    "MOMENTS LATER",
)

_TRANSITIONS = (
    "FADE",
    "CUT",
    "DISSOLVE",
    "SMASH",
    "WIPE",
    "FADE TO BLACK",
    "MATCH CUT",
    "TIME CUT",
)

SCENE_HEADING_RE = re.compile(
    r"^(INT|EXT|INT/EXT|EXT/INT)[\s.]+(.*?)[\s.-]+(" + "|".join(_TIMES_OF_DAY) + r")$",
    re.IGNORECASE,
)

# Case-sensitive: a cue must already be written in capitals.
CHARACTER_RE = re.compile(r"^[A-Z][A-Z0-9\s()]*$")

PARENTHETICAL_RE = re.compile(r"^\(.+\)$")

TRANSITION_RE = re.compile(r"^(" + "|".join(_TRANSITIONS) + r")", re.IGNORECASE)

# Kinds after which plain text is read as speech when dialogue detection is on
_SPEECH_CONTEXT = frozenset(
    {ElementKind.CHARACTER, ElementKind.PARENTHETICAL, ElementKind.DIALOGUE}
)


# ---------------------------------------------------------------------------
# Rule table
# ---------------------------------------------------------------------------


def is_scene_heading(line: str) -> bool:
    return SCENE_HEADING_RE.match(line) is not None


def is_character(line: str) -> bool:
    return CHARACTER_RE.match(line) is not None and len(line) < CHARACTER_MAX_LENGTH


def is_parenthetical(line: str) -> bool:
    return PARENTHETICAL_RE.match(line) is not None


def is_transition(line: str) -> bool:
    return TRANSITION_RE.match(line) is not None


def is_technical(line: str) -> bool:
    return line == line.upper() and len(line) > 3


# Order encodes priority.
RULES: tuple[tuple[Callable[[str], bool], ElementKind], ...] = (
    (is_scene_heading, ElementKind.SCENE_HEADING),
    (is_character, ElementKind.CHARACTER),
    (is_parenthetical, ElementKind.PARENTHETICAL),
    (is_transition, ElementKind.TRANSITION),
    (is_technical, ElementKind.TECHNICAL),
)


def classify_line(
    line: str,
    previous: ElementKind | None = None,
    *,
    detect_dialogue: bool = False,
) -> ElementKind:
    """Return the ``ElementKind`` of a single stripped line.

    Lines matching no rule are ``ACTION``.  With *detect_dialogue* enabled,
    such lines become ``DIALOGUE`` when *previous* (the kind of the line
    before, within the same blank-line-delimited run) is a character cue,
    a parenthetical or dialogue.
    """
    for predicate, kind in RULES:
        if predicate(line):
            return kind

    if detect_dialogue and previous in _SPEECH_CONTEXT:
        return ElementKind.DIALOGUE
    return ElementKind.ACTION


# ---------------------------------------------------------------------------
# Block grouping
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Block:
    """A contiguous run of same-kind lines, rendered as one unit."""

    kind: ElementKind
    lines: tuple[str, ...]

    @property
    def text(self) -> str:
        return " ".join(self.lines)


@dataclass(frozen=True, slots=True)
class BlockState:
    """Grouping state: the kind of the open block and its buffered lines."""

    kind: ElementKind | None = None
    lines: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.lines


def flush(state: BlockState) -> tuple[BlockState, Block | None]:
    """Close the open block, if any, and return a fresh state."""
    if state.is_empty or state.kind is None:
        return BlockState(), None
    return BlockState(), Block(kind=state.kind, lines=state.lines)


def feed(state: BlockState, line: str, kind: ElementKind) -> tuple[BlockState, Block | None]:
    """Add a classified line, closing the open block first if the kind changes."""
    flushed: Block | None = None
    if not state.is_empty and kind != state.kind:
        state, flushed = flush(state)
    return BlockState(kind=kind, lines=state.lines + (line,)), flushed


def iter_elements(raw_text: str, *, detect_dialogue: bool = False) -> Iterator[Block | None]:
    """Yield blocks in input order, with ``None`` standing for each blank line."""
    state = BlockState()
    previous: ElementKind | None = None

    for raw_line in raw_text.split("\n"):
        line = raw_line.strip()

        if not line:
            state, block = flush(state)
            if block is not None:
                yield block
            previous = None
            yield None
            continue

        kind = classify_line(line, previous, detect_dialogue=detect_dialogue)
        state, block = feed(state, line, kind)
        if block is not None:
            yield block
        previous = kind

    _, block = flush(state)
    if block is not None:
        yield block
