import logging
from typing import Iterable, Tuple

from schemas import AnalysisResult, Resume
from scoring.rules import RULES, Rule

logger = logging.getLogger(__name__)

MAX_SCORE = 100

_NEEDS_WORK = (
    "Your resume needs significant improvements to pass ATS screenings. Focus on addressing "
    "the suggestions above, particularly adding more relevant keywords and quantifiable achievements."
)

RATINGS = (
    (80, "Excellent", "Your resume is well-optimized for ATS systems. It contains relevant keywords, "
                      "proper formatting, and quantifiable achievements. You're likely to pass most "
                      "ATS screenings."),
    (60, "Good", "Your resume is reasonably well-optimized but could use some improvements. "
                 "Address the suggestions above to increase your chances of passing ATS screenings."),
    (40, "Fair", _NEEDS_WORK),
    (0, "Needs Improvement", _NEEDS_WORK),
)


def analyze_resume(resume: Resume, rules: Iterable[Rule] = RULES) -> AnalysisResult:
    """
    Score a resume against the rule table.

    A satisfied rule adds its points and its strength (if it has one); a
    failed rule adds only its improvement. A rule whose ``requires`` rule
    failed is skipped entirely.
    """
    score = 0
    strengths, improvements = [], []
    passed = {}

    for rule in rules:
        if rule.requires is not None and not passed.get(rule.requires, False):
            continue
        ok = bool(rule.condition(resume))
        passed[rule.key] = ok
        if ok:
            score += rule.points
            if rule.strength:
                strengths.append(rule.strength)
        else:
            improvements.append(rule.improvement)

    score = max(0, min(MAX_SCORE, score))
    logger.debug(f"Scored '{resume.name}': {score} ({len(strengths)} strengths, {len(improvements)} improvements)")
    return AnalysisResult(score=score, strengths=strengths, improvements=improvements)


def rate_score(score: int) -> Tuple[str, str]:
    """(rating label, verdict sentence) for a score."""
    for threshold, label, verdict in RATINGS:
        if score >= threshold:
            return label, verdict
    return RATINGS[-1][1], RATINGS[-1][2]
