"""
ATS heuristics as data.

Every rule is a ``Rule`` tuple; ``scoring.engine.analyze_resume`` walks
``RULES`` in order. Adding or removing a check means editing the table,
not the engine.
"""
import re
from typing import Callable, List, NamedTuple, Optional

from schemas import Resume

ACHIEVEMENT_PATTERN = re.compile(
    r"\d+%|\d+\s+years|\$\d+|increased|decreased|improved|reduced|achieved",
    re.IGNORECASE,
)

ACTION_KEYWORDS = (
    "managed", "developed", "created", "implemented", "led", "coordinated",
    "analyzed", "designed", "improved", "increased", "reduced", "achieved",
)

MIN_SUMMARY_CHARS = 50
MIN_SKILLS = 5
MIN_EXPERIENCES = 2
MIN_KEYWORDS = 5


class Rule(NamedTuple):
    key: str
    condition: Callable[[Resume], bool]
    points: int
    strength: Optional[str]
    improvement: str
    requires: Optional[str] = None


def serialize_resume(resume: Resume) -> str:
    """
    Lowercased text of every field, in display order, each exactly once.
    The id is not part of it.
    """
    values: List[Optional[str]] = [
        resume.name, resume.email, resume.phone, resume.location,
        resume.linkedin, resume.website, resume.summary,
    ]
    values.extend(resume.skills)
    for exp in resume.experience:
        values.extend([exp.company, exp.position, exp.start_date, exp.end_date, exp.description])
    for edu in resume.education:
        values.extend([
            edu.institution, edu.degree, edu.field_of_study,
            edu.start_date, edu.end_date, edu.description,
        ])
    for cert in resume.certifications:
        values.extend([cert.name, cert.issuer, cert.date, cert.description])
    return "\n".join(v for v in values if v).lower()


def found_keywords(resume: Resume) -> List[str]:
    content = serialize_resume(resume)
    return [kw for kw in ACTION_KEYWORDS if kw in content]


# --- conditions --------------------------------------------------------
def has_contact_info(r: Resume) -> bool:
    return bool(r.email) and bool(r.phone)


def has_strong_summary(r: Resume) -> bool:
    return bool(r.summary) and len(r.summary) > MIN_SUMMARY_CHARS


def has_skill_range(r: Resume) -> bool:
    return len(r.skills) >= MIN_SKILLS


def has_experience(r: Resume) -> bool:
    return len(r.experience) >= MIN_EXPERIENCES


def has_quantified_achievements(r: Resume) -> bool:
    return any(exp.description and ACHIEVEMENT_PATTERN.search(exp.description) for exp in r.experience)


def has_education(r: Resume) -> bool:
    return len(r.education) >= 1


def has_action_verbs(r: Resume) -> bool:
    return len(found_keywords(r)) >= MIN_KEYWORDS


def has_certifications(r: Resume) -> bool:
    return len(r.certifications) >= 1


RULES = (
    Rule(
        "contact", has_contact_info, 10,
        "Complete contact information provided",
        "Add complete contact information (email and phone)",
    ),
    Rule(
        "summary", has_strong_summary, 15,
        "Strong professional summary included",
        "Add a compelling professional summary (50+ characters)",
    ),
    Rule(
        "skills", has_skill_range, 15,
        "Good range of skills listed",
        "List at least 5 relevant skills",
    ),
    Rule(
        "experience", has_experience, 20,
        None,
        "Include at least 2 relevant work experiences",
    ),
    Rule(
        "achievements", has_quantified_achievements, 10,
        "Experience includes quantifiable achievements",
        "Add quantifiable achievements to work experience (e.g., percentages, numbers)",
        requires="experience",
    ),
    Rule(
        "education", has_education, 10,
        "Education details included",
        "Add education details",
    ),
    Rule(
        "keywords", has_action_verbs, 10,
        "Good use of action verbs and keywords",
        "Use more action verbs and industry keywords",
    ),
    Rule(
        "certifications", has_certifications, 10,
        "Certifications or additional qualifications included",
        "Consider adding relevant certifications or additional qualifications",
    ),
)
