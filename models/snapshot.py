"""
Pydantic read model for a Job.

A JobSnapshot is a frozen copy of a job's public attributes at one
moment. Tests compare snapshots instead of poking at a live job whose
state may change on the next loop iteration, and the benchmark prints
them as JSON.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from models.enums import JobState


class JobSnapshot(BaseModel):
    """Public view of a Job, built with JobSnapshot.model_validate(job)."""

    id: str
    name: str
    job_type: str
    state: JobState
    delay: float
    fail_prob: float
    start_time: Optional[datetime] = None
    done_time: Optional[datetime] = None
    cancel_time: Optional[datetime] = None
    run_time: Optional[float] = None   # milliseconds

    # from_attributes=True tells Pydantic to read job.name, job.state, ...
    # instead of requiring a dict
    model_config = {"from_attributes": True, "frozen": True}
