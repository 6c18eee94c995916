class ResumeError(Exception):
    """Base class for errors surfaced by the resume core."""


class DecodeError(ResumeError):
    """Uploaded document could not be turned into plain text."""


class StoreError(ResumeError):
    """Persistence layer failed; nothing was written."""


class RecordNotFound(ResumeError):
    def __init__(self, resume_id: str):
        super().__init__(f"Resume {resume_id} not found")
        self.resume_id = resume_id
