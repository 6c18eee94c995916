from pydantic import AfterValidator, BaseModel, field_validator
from typing import Annotated, List, Optional


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value.strip()


RequiredText = Annotated[str, AfterValidator(_not_blank)]


# Work history entry
class Experience(BaseModel):
    company: RequiredText
    position: RequiredText
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    description: Optional[str] = None


# Education entry
class Education(BaseModel):
    institution: RequiredText
    degree: RequiredText
    field_of_study: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    description: Optional[str] = None


class Certification(BaseModel):
    name: RequiredText
    issuer: Optional[str] = None
    date: Optional[str] = None
    description: Optional[str] = None


# Canonical résumé record shared by the extractor, store and scorer
class Resume(BaseModel):
    id: Optional[str] = None
    name: RequiredText
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin: Optional[str] = None
    website: Optional[str] = None
    summary: Optional[str] = None
    skills: List[str] = []
    experience: List[Experience] = []
    education: List[Education] = []
    certifications: List[Certification] = []

    @field_validator("skills", "experience", "education", "certifications", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return [] if value is None else value


# User-edited sections merged over an extracted record
class ResumeSections(BaseModel):
    experience: Optional[List[Experience]] = None
    education: Optional[List[Education]] = None
    certifications: Optional[List[Certification]] = None


# Scoring output
class AnalysisResult(BaseModel):
    score: int
    strengths: List[str] = []
    improvements: List[str] = []


class AnalysisReport(AnalysisResult):
    resume_id: Optional[str] = None
    rating: str
    verdict: str
