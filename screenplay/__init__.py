"""Screenplay formatting engine for free-form, LLM-generated text."""

from screenplay.classifier import Block, classify_line, iter_elements
from screenplay.document import format_document, format_elements, format_script
from screenplay.renderer import render_block
from screenplay.validation import fix_format_issues, validate_format
from screenplay.wrap import wrap_text

__all__ = [
    "Block",
    "classify_line",
    "fix_format_issues",
    "format_document",
    "format_elements",
    "format_script",
    "iter_elements",
    "render_block",
    "validate_format",
    "wrap_text",
]
