# routes/jobs.py
from flask import request, jsonify, abort
from flask_login import login_required
from marshmallow import ValidationError

from . import jobs_bp
from ..errors import InvalidFieldValue
from ..models.job import JobStatus
from ..schemas.job_schemas import JobStatusUpdateSchema
from ..services.job_service import JobService
from ..session import UserSession

from .. import logger


def _service():
    return JobService(UserSession.from_request().current_user)


@jobs_bp.route("", methods=["GET"])
@login_required
def list_jobs():
    """
    List jobs, newest first.
    ?q= matches customer name and address, ?status= one job status value.
    """
    status = request.args.get('status')
    if status:
        try:
            status = JobStatus(status)
        except ValueError:
            raise InvalidFieldValue('status', f"Unknown job status: {status}")
    else:
        status = None

    jobs = _service().list_jobs(request.args.get('q', ''), status)
    return jsonify({
        "jobs": [job.serialize() for job in jobs],
        "count": len(jobs)
    }), 200


@jobs_bp.route("", methods=["POST"])
@login_required
def create_job():
    """
    Book a new installation job.

    JSON Payload (example):
    {
      "customer_name": "Jane Doe",
      "address": "12 Solar Way, Springfield",
      "system_size": 7.5,
      "estimated_revenue": 21000,
      "scheduled_date": "2026-11-02",
      "customer_id": 3
    }

    Response:
      201 Created
      {
        "message": "Job created successfully!",
        "job": {...}
      }
    """
    data = request.get_json(silent=True) or {}
    logger.info("Received job data: %s", data)

    job = _service().create_job(data)
    return jsonify({
        "message": "Job created successfully!",
        "job": job.serialize()
    }), 201


@jobs_bp.route("/<int:job_id>/status", methods=["PATCH"])
@login_required
def update_job_status(job_id):
    """
    Move a job to a new status.
    Completed and cancelled jobs cannot change status.
    """
    try:
        validated = JobStatusUpdateSchema().load(request.get_json(silent=True) or {})
    except ValidationError as err:
        raise InvalidFieldValue('status', err.messages.get('status', err.messages))

    service = _service()
    job = service.get_job(job_id)
    if job is None:
        abort(404)

    job = service.update_status(job, validated['status'])
    return jsonify({
        "message": "Job status updated",
        "job": job.serialize()
    }), 200
