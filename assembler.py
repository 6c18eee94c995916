from typing import List, Optional

from schemas import Resume, ResumeSections


def clean_skills(skills: List[str]) -> List[str]:
    """Trimmed skills with blank entries dropped, order kept."""
    return [s.strip() for s in skills if s and s.strip()]


def assemble_resume(
    resume: Resume,
    sections: Optional[ResumeSections] = None,
    resume_id: Optional[str] = None,
) -> Resume:
    """
    Build the canonical record from an extracted or edited resume.

    ``sections`` replaces experience / education / certifications where the
    user supplied them. ``resume_id`` is the id of an already persisted
    record and wins over ``resume.id``; with neither, the result has no id
    until the store assigns one. The inputs are left untouched.
    """
    update = {
        "id": resume_id or resume.id,
        "skills": clean_skills(resume.skills),
    }
    if sections is not None:
        for field in ("experience", "education", "certifications"):
            value = getattr(sections, field)
            if value is not None:
                update[field] = list(value)
    return resume.model_copy(update=update, deep=True)


def save_resume(store, resume: Resume) -> Resume:
    """Assemble and persist; returns the saved copy carrying its id."""
    assembled = assemble_resume(resume)
    resume_id = store.upsert(assembled)
    return assembled.model_copy(update={"id": resume_id})
