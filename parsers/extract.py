"""
Pattern-based field extraction for uploaded resumes.

Each ``extract_*`` function reads the raw text (or its normalised lines)
and produces exactly one field. None of them raise: a missing match gives
an empty value.
"""
import re
import logging
from typing import List

from parsers.normalize import normalize_newlines, split_lines
from schemas import Resume

logger = logging.getLogger(__name__)

UNKNOWN_NAME = "Unknown Name"

EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
# [+CC] [(AAA)] 555 1234, separated by space / dot / hyphen
PHONE_PATTERN = re.compile(r"(?:\+\d{1,3}[-. ]?)?(?:\(?\d{3}\)?[-. ]?)?\d{3}[-. ]?\d{4}")
SKILL_SEPARATORS = re.compile(r"[,;]")


def _section_pattern(header: str) -> re.Pattern:
    # Header is matched case-insensitively; the boundary "next line starting
    # with a capital letter" is not.
    return re.compile(
        rf"^[ \t]*(?i:{header})\b[ \t]*:?(.*?)(?=\n[ \t\r]*\n|\n[A-Z]|\Z)",
        re.MULTILINE | re.DOTALL,
    )


SKILLS_SECTION = _section_pattern("skills")
SUMMARY_SECTION = _section_pattern("summary")


def extract_name(lines: List[str]) -> str:
    return lines[0] if lines else UNKNOWN_NAME


def extract_email(text: str) -> str:
    m = EMAIL_PATTERN.search(text)
    return m.group(0) if m else ""


def extract_phone(text: str) -> str:
    m = PHONE_PATTERN.search(text)
    return m.group(0) if m else ""


def extract_section(text: str, pattern: re.Pattern) -> str:
    m = pattern.search(normalize_newlines(text))
    return m.group(1).strip() if m else ""


def extract_skills(text: str) -> List[str]:
    section = extract_section(text, SKILLS_SECTION)
    return [s.strip() for s in SKILL_SEPARATORS.split(section) if s.strip()]


def extract_summary(text: str) -> str:
    return extract_section(text, SUMMARY_SECTION)


def extract_resume(text: str) -> Resume:
    """Best-effort partial resume from plain text."""
    text = text or ""
    lines = split_lines(text)

    resume = Resume(
        name=extract_name(lines),
        email=extract_email(text),
        phone=extract_phone(text),
        summary=extract_summary(text),
        skills=extract_skills(text),
    )
    logger.debug(
        f"Extracted resume '{resume.name}': email={bool(resume.email)}, "
        f"phone={bool(resume.phone)}, {len(resume.skills)} skills, "
        f"summary {len(resume.summary)} chars"
    )
    return resume
