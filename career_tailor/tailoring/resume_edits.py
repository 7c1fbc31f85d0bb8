"""Best-effort text edits that apply a gap remediation to plain resume text.

These are heuristics, not a resume parser. Section headers are located with
regular expressions; when none is found the content is appended at the end.
Edits only ever insert text. ``strengthen``, ``reorganize`` and ``remove``
gaps become a bracketed ``[Action: ...]`` line for the user to act on.
"""

from __future__ import annotations

import logging
import re

from career_tailor.schemas import GapAction

logger = logging.getLogger(__name__)

BULLET = "•"

_SKILLS_HEADER = re.compile(
    r"^[ \t]*(?:(?:core|key|technical|relevant|professional)[ \t]+)?"
    r"(?:skills|competencies|technologies|expertise|tech[ \t]+stack)"
    r"(?:[ \t]*(?:&|and)[ \t]*\w+)?[ \t]*:?[ \t]*$",
    re.IGNORECASE | re.MULTILINE,
)
_EXPERIENCE_HEADER = re.compile(
    r"^[ \t]*(?:(?:professional|work|relevant)[ \t]+)?"
    r"(?:experience|employment(?:[ \t]+history)?|work[ \t]+history)[ \t]*:?[ \t]*$",
    re.IGNORECASE | re.MULTILINE,
)
_OTHER_SECTION_HEADER = re.compile(
    r"^[ \t]*(?:(?:core|key|technical|relevant|professional|career)[ \t]+)?"
    r"(?:summary|profile|objective|skills|competencies|technologies|expertise|tech[ \t]+stack"
    r"|education|projects|certifications?|awards|publications|languages|interests"
    r"|volunteer(?:ing)?|references)"
    r"(?:[ \t]*(?:&|and)[ \t]*\w+)?[ \t]*:?[ \t]*$",
    re.IGNORECASE | re.MULTILINE,
)
_BULLET_LINE = re.compile(r"^[ \t]*[•\-*▪◦‣][ \t]+.*$", re.MULTILINE)


def apply_gap(text: str, gap: GapAction) -> str:
    if gap.action == "add":
        if gap.suggested_keyword:
            return add_keyword(text, gap.suggested_keyword)
        return annotate(text, gap.action_description or gap.issue)
    if gap.action == "add-new-bullet":
        return add_bullet(text, gap.suggested_bullet or gap.action_description or gap.issue)
    # strengthen / reorganize / remove
    return annotate(text, gap.action_description or gap.issue)


def add_keyword(text: str, keyword: str) -> str:
    keyword = keyword.strip()
    if not keyword:
        return text
    if re.search(rf"(?<!\w){re.escape(keyword)}(?!\w)", text, re.IGNORECASE):
        logger.debug("resume_keyword_present keyword=%s", keyword)
        return text

    header = _SKILLS_HEADER.search(text)
    if header is None:
        logger.debug("resume_skills_header_missing keyword=%s", keyword)
        return _append_block(text, f"Skills:\n{BULLET} {keyword}\n")
    return _insert_line_after(text, header.end(), f"{BULLET} {keyword}")


def add_bullet(text: str, bullet: str) -> str:
    bullet = bullet.strip()
    if not bullet:
        return text

    header = _EXPERIENCE_HEADER.search(text)
    if header is None:
        return _append_block(text, f"{BULLET} {bullet}\n")

    next_section = _OTHER_SECTION_HEADER.search(text, header.end())
    section_end = next_section.start() if next_section is not None else len(text)
    first_bullet = _BULLET_LINE.search(text, header.end(), section_end)
    anchor = first_bullet.end() if first_bullet is not None else header.end()
    return _insert_line_after(text, anchor, f"{BULLET} {bullet}")


def annotate(text: str, description: str) -> str:
    description = description.strip()
    if not description:
        return text
    return _append_block(text, f"[Action: {description}]")


def _insert_line_after(text: str, line_end: int, line: str) -> str:
    """Insert ``line`` on its own line after the line ending at ``line_end``."""
    if line_end < len(text) and text[line_end] == "\n":
        split = line_end + 1
        return f"{text[:split]}{line}\n{text[split:]}"
    return f"{text[:line_end]}\n{line}\n{text[line_end:]}"


def _append_block(text: str, block: str) -> str:
    stripped = text.rstrip()
    if not stripped:
        return block
    return f"{stripped}\n\n{block}"
