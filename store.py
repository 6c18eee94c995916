"""
SQLAlchemy-backed resume store.

The store is an explicit handle built with ``create_store``; nothing here
holds module-level connection state.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, List

from sqlalchemy import create_engine, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from errors import RecordNotFound, StoreError
from models import Base, CertificationRow, EducationRow, ExperienceRow, ResumeRow
from schemas import Certification, Education, Experience, Resume

logger = logging.getLogger(__name__)

_SCALARS = ("name", "email", "phone", "location", "linkedin", "website", "summary")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class ResumeStore:
    def __init__(self, engine, clock: Callable[[], datetime] = _utcnow):
        self.engine = engine
        self._sessions = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)
        self._clock = clock

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def upsert(self, resume: Resume) -> str:
        """
        Insert or replace a resume and return its id.

        Child sections are replaced wholesale, never appended. A new id is
        generated only when the record has none.
        """
        resume_id = resume.id or _new_id()
        now = self._clock()
        try:
            with self._sessions.begin() as s:
                row = s.get(ResumeRow, resume_id)
                if row is None:
                    row = ResumeRow(id=resume_id, created_at=now)
                    s.add(row)
                for field in _SCALARS:
                    setattr(row, field, getattr(resume, field))
                row.skills = list(resume.skills)
                row.updated_at = now
                row.experiences = [
                    ExperienceRow(id=_new_id(), order_index=i, **exp.model_dump())
                    for i, exp in enumerate(resume.experience)
                ]
                row.education = [
                    EducationRow(id=_new_id(), order_index=i, **edu.model_dump())
                    for i, edu in enumerate(resume.education)
                ]
                row.certifications = [
                    CertificationRow(id=_new_id(), order_index=i, **cert.model_dump())
                    for i, cert in enumerate(resume.certifications)
                ]
        except SQLAlchemyError as e:
            logger.error(f"Failed to save resume {resume_id}: {e}")
            raise StoreError(f"Failed to save resume: {e}") from e

        logger.info(f"Saved resume {resume_id}")
        return resume_id

    def delete(self, resume_id: str) -> None:
        try:
            with self._sessions.begin() as s:
                row = s.get(ResumeRow, resume_id)
                if row is None:
                    raise RecordNotFound(resume_id)
                s.delete(row)
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete resume {resume_id}: {e}")
            raise StoreError(f"Failed to delete resume: {e}") from e
        logger.info(f"Deleted resume {resume_id}")

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get(self, resume_id: str) -> Resume:
        try:
            with self._sessions() as s:
                row = s.get(ResumeRow, resume_id)
                if row is None:
                    raise RecordNotFound(resume_id)
                return _to_resume(row)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load resume {resume_id}: {e}")
            raise StoreError(f"Failed to load resume: {e}") from e

    def list_all(self) -> List[Resume]:
        """All resumes, newest first."""
        try:
            with self._sessions() as s:
                rows = s.scalars(select(ResumeRow).order_by(ResumeRow.created_at.desc())).all()
                return [_to_resume(r) for r in rows]
        except SQLAlchemyError as e:
            logger.error(f"Failed to list resumes: {e}")
            raise StoreError(f"Failed to list resumes: {e}") from e

    def close(self) -> None:
        self.engine.dispose()


def _to_resume(row: ResumeRow) -> Resume:
    return Resume(
        id=row.id,
        name=row.name,
        email=row.email,
        phone=row.phone,
        location=row.location,
        linkedin=row.linkedin,
        website=row.website,
        summary=row.summary,
        skills=row.skills or [],
        experience=[
            Experience(
                company=e.company, position=e.position, start_date=e.start_date,
                end_date=e.end_date, description=e.description,
            )
            for e in row.experiences
        ],
        education=[
            Education(
                institution=e.institution, degree=e.degree, field_of_study=e.field_of_study,
                start_date=e.start_date, end_date=e.end_date, description=e.description,
            )
            for e in row.education
        ],
        certifications=[
            Certification(name=c.name, issuer=c.issuer, date=c.date, description=c.description)
            for c in row.certifications
        ],
    )


def create_store(database_url: str, clock: Callable[[], datetime] = _utcnow) -> ResumeStore:
    """Build a store, create its tables and check the connection."""
    kwargs = {"future": True}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool

    try:
        engine = create_engine(database_url, **kwargs)
        Base.metadata.create_all(engine)
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Could not initialise resume store at {database_url}: {e}")
        raise StoreError(f"Could not initialise resume store: {e}") from e

    logger.info(f"Resume store ready: {engine.url.render_as_string(hide_password=True)}")
    return ResumeStore(engine, clock=clock)
