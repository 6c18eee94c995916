from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, TypeDecorator
from sqlalchemy.orm import declarative_base, relationship
import json

Base = declarative_base()


class JSONType(TypeDecorator):
    """JSON list stored as text so SQLite and Postgres behave the same."""
    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return json.dumps(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return json.loads(value)


class ResumeRow(Base):
    __tablename__ = "resumes"
    id = Column(String(36), primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String)
    phone = Column(String)
    location = Column(String)
    linkedin = Column(String)
    website = Column(String)
    summary = Column(Text)
    skills = Column(JSONType)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    experiences = relationship(
        "ExperienceRow", order_by="ExperienceRow.order_index",
        cascade="all, delete-orphan",
    )
    education = relationship(
        "EducationRow", order_by="EducationRow.order_index",
        cascade="all, delete-orphan",
    )
    certifications = relationship(
        "CertificationRow", order_by="CertificationRow.order_index",
        cascade="all, delete-orphan",
    )


class ExperienceRow(Base):
    __tablename__ = "resume_experiences"
    id = Column(String(36), primary_key=True)
    resume_id = Column(String(36), ForeignKey("resumes.id", ondelete="CASCADE"), nullable=False, index=True)
    company = Column(String, nullable=False)
    position = Column(String, nullable=False)
    start_date = Column(String)
    end_date = Column(String)
    description = Column(Text)
    order_index = Column(Integer, nullable=False)


class EducationRow(Base):
    __tablename__ = "resume_education"
    id = Column(String(36), primary_key=True)
    resume_id = Column(String(36), ForeignKey("resumes.id", ondelete="CASCADE"), nullable=False, index=True)
    institution = Column(String, nullable=False)
    degree = Column(String, nullable=False)
    field_of_study = Column(String)
    start_date = Column(String)
    end_date = Column(String)
    description = Column(Text)
    order_index = Column(Integer, nullable=False)


class CertificationRow(Base):
    __tablename__ = "resume_certifications"
    id = Column(String(36), primary_key=True)
    resume_id = Column(String(36), ForeignKey("resumes.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    issuer = Column(String)
    date = Column(String)
    description = Column(Text)
    order_index = Column(Integer, nullable=False)
