from __future__ import annotations

from careerlens.schemas import JobAnalysisRecord, ResumeAnalysisRecord
from careerlens.storage import records as store

from .errors import ServiceError


def load_analysis_pair(user_id: str, resume_id: str, job_id: str) -> tuple[ResumeAnalysisRecord, JobAnalysisRecord]:
    """Load a resume and a job analysis that both belong to `user_id`."""
    if not resume_id or not job_id:
        raise ServiceError("resumeId and jobId are required.", status_code=400)
    resume = store.get_record(kind="resume", record_id=resume_id, user_id=user_id)
    if resume is None:
        raise ServiceError("Resume analysis not found.", status_code=404)
    job = store.get_record(kind="job", record_id=job_id, user_id=user_id)
    if job is None:
        raise ServiceError("Job analysis not found.", status_code=404)
    return ResumeAnalysisRecord.model_validate(resume), JobAnalysisRecord.model_validate(job)
