from datetime import datetime
from typing import List, Optional

from .. import logger
from ..errors import InvalidFieldValue
from ..filters import filter_jobs
from ..models.contact import Contact
from ..models.job import SolarJob, JobStatus
from ..stores import ModelStore
from ..validation import validate_job_input


class JobService:
    def __init__(self, owner=None):
        self.owner = owner
        self.store = ModelStore(SolarJob, owner)

    def list_jobs(self, query: str = '', status: Optional[JobStatus] = None) -> List[SolarJob]:
        """Jobs newest first, narrowed by customer name/address and status"""
        filters = {'status': status} if status is not None else {}
        jobs = self.store.query(sort_by='created_date', ascending=False, **filters)
        return filter_jobs(jobs, query)

    def get_job(self, job_id: int) -> Optional[SolarJob]:
        return self.store.get(job_id)

    def create_job(self, data: dict) -> SolarJob:
        """
        Book a new job.

        Raises:
            RecordError: If validation fails or the job cannot be saved
        """
        validated, error = validate_job_input(data)
        if error is not None:
            raise error

        customer_id = validated.get('customer_id')
        if customer_id is not None and ModelStore(Contact, self.owner).get(customer_id) is None:
            raise InvalidFieldValue('customer_id', f"Customer with ID {customer_id} not found")

        job = self.store.add(status=JobStatus.PENDING, **validated)
        logger.info(f"Created new job: {job}")
        return job

    def update_status(self, job: SolarJob, new_status: JobStatus) -> SolarJob:
        """Move a job to ``new_status`` if the transition is allowed"""
        if not job.can_transition_to(new_status):
            raise InvalidFieldValue(
                'status',
                f"Cannot change status from {job.status.value} to {new_status.value}"
            )
        return self.store.update(job, status=new_status, last_status_change=datetime.now())
