from __future__ import annotations
import asyncio, logging, os
from typing import List
from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI, File, HTTPException, Request, Response, UploadFile, status
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool
from config import Settings, get_settings
from errors import DecodeError, RecordNotFound, StoreError
from schemas import AnalysisReport, Resume
from assembler import assemble_resume, save_resume
from parsers.documents import decode_document
from parsers.extract import extract_resume
from scoring.engine import analyze_resume, rate_score
from store import ResumeStore, create_store

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Build the store once per process; a bad DATABASE_URL fails startup."""
        if settings.database_url.startswith("sqlite:///"):
            os.makedirs(settings.base_dir, exist_ok=True)
        logger.info(f"Using base directory: {settings.base_dir}")
        app.state.store = create_store(settings.database_url)
        yield
        app.state.store.close()
        logger.info("Application shutting down.")

    app = FastAPI(title="ATS Resume Analyzer", lifespan=lifespan)
    app.state.settings = settings
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allowed_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _register_routes(app)
    return app


def get_store(request: Request) -> ResumeStore:
    return request.app.state.store


def _report(resume: Resume) -> AnalysisReport:
    result = analyze_resume(assemble_resume(resume))
    rating, verdict = rate_score(result.score)
    return AnalysisReport(resume_id=resume.id, rating=rating, verdict=verdict, **result.model_dump())


def _store_call(fn, *args):
    try:
        return fn(*args)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))


# -------------------------------------------------------------------
# Routes
# -------------------------------------------------------------------
def _register_routes(app: FastAPI) -> None:
    settings: Settings = app.state.settings

    @app.post("/resumes/upload", response_model=Resume)
    async def upload_resume(resume: UploadFile = File(...)):
        """Decode an uploaded file and return the extracted (unsaved) resume."""
        too_large = HTTPException(status_code=413, detail=f"File larger than {settings.max_upload_mb:g} MB.")
        if resume.size is not None and resume.size > settings.max_upload_bytes:
            raise too_large
        data = await resume.read()
        if len(data) > settings.max_upload_bytes:
            raise too_large
        try:
            text = await run_in_threadpool(decode_document, data, resume.filename or "")
        except DecodeError as e:
            logger.warning(f"Could not decode {resume.filename!r}: {e}")
            raise HTTPException(status_code=400, detail=str(e))
        return assemble_resume(extract_resume(text))

    @app.post("/resumes", response_model=Resume, status_code=status.HTTP_201_CREATED)
    def create_resume(resume: Resume, store: ResumeStore = Depends(get_store)):
        return _store_call(save_resume, store, resume)

    @app.get("/resumes", response_model=List[Resume])
    def list_resumes(store: ResumeStore = Depends(get_store)):
        return _store_call(store.list_all)

    @app.get("/resumes/{resume_id}", response_model=Resume)
    def get_resume(resume_id: str, store: ResumeStore = Depends(get_store)):
        return _store_call(store.get, resume_id)

    @app.put("/resumes/{resume_id}", response_model=Resume)
    def update_resume(resume_id: str, resume: Resume, store: ResumeStore = Depends(get_store)):
        _store_call(store.get, resume_id)
        return _store_call(save_resume, store, assemble_resume(resume, resume_id=resume_id))

    @app.delete("/resumes/{resume_id}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_resume(resume_id: str, store: ResumeStore = Depends(get_store)):
        _store_call(store.delete, resume_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.post("/analyze", response_model=AnalysisReport)
    async def analyze(resume: Resume):
        if settings.analysis_delay_seconds:
            await asyncio.sleep(settings.analysis_delay_seconds)
        return _report(resume)

    @app.get("/resumes/{resume_id}/analysis", response_model=AnalysisReport)
    def analyze_saved(resume_id: str, store: ResumeStore = Depends(get_store)):
        return _report(_store_call(store.get, resume_id))


app = create_app()
