"""
Flask application for the Job Tracker.

Serves the kanban board page and the JSON API it talks to:
- GET    /api/jobs            list all job records
- POST   /api/jobs            create a job record
- GET    /api/jobs/<id>       fetch one record
- PUT    /api/jobs/<id>       update fields (PATCH is accepted too)
- DELETE /api/jobs/<id>       delete a record
- GET    /api/jobs/statuses   the fixed board columns
- GET    /health              MongoDB reachability

Stack: Flask + SortableJS + Tailwind CSS (CDN)
"""

import logging
from typing import Optional

from flask import Flask, jsonify, render_template, request
from werkzeug.exceptions import HTTPException

from src.common.config import Config
from src.common.database import get_connection
from src.common.errors import JobTrackerError
from src.common.job_schema import STATUS_VALUES
from src.common.logger import setup_logging
from src.common.repositories import get_job_repository
from src.services.job_service import JobService

try:
    from version import __version__
    APP_VERSION = __version__
except ImportError:
    APP_VERSION = "dev"

app = Flask(__name__)

# Configure logging
setup_logging(Config.LOG_LEVEL, Config.LOG_FORMAT)
logger = logging.getLogger(__name__)

Config.warn_if_unconfigured()

API_PREFIX = "/api"

_service: Optional[JobService] = None


def _get_service() -> JobService:
    """Get the job service, created on first request."""
    global _service

    if _service is None:
        _service = JobService(get_job_repository())
    return _service


@app.context_processor
def inject_version():
    """Inject version info into all templates."""
    return {"version": APP_VERSION}


# ============================================================================
# Error Handling
# ============================================================================

@app.errorhandler(JobTrackerError)
def handle_job_tracker_error(error: JobTrackerError):
    """Map the error taxonomy to `{error}` JSON bodies."""
    return jsonify(error.to_dict()), error.status_code


@app.errorhandler(HTTPException)
def handle_http_exception(error: HTTPException):
    """JSON bodies for routing errors (404/405) under the API prefix."""
    if request.path.startswith(f"{API_PREFIX}/"):
        return jsonify({"error": error.description}), error.code
    return error


@app.errorhandler(Exception)
def handle_unexpected_error(error: Exception):
    """Last line of defence: nothing escapes a request unhandled."""
    logger.exception(f"Unhandled error on {request.method} {request.path}: {error}")
    return jsonify({"error": "Internal server error"}), 500


# ============================================================================
# API Endpoints
# ============================================================================

@app.route(f"{API_PREFIX}/jobs", methods=["GET"])
def list_jobs():
    """
    List all job records.

    Returns:
        JSON array of job records in store order
    """
    return jsonify(_get_service().list_jobs())


@app.route(f"{API_PREFIX}/jobs", methods=["POST"])
def create_job():
    """
    Create a job record.

    Request Body:
        companyName, role, dateApplied (YYYY-MM-DD), status (optional,
        defaults to "Applied")

    Returns:
        JSON with the created record including its id
    """
    job = _get_service().create_job(request.get_json(silent=True))
    return jsonify(job), 201


@app.route(f"{API_PREFIX}/jobs/statuses", methods=["GET"])
def get_statuses():
    """Return the board columns in display order."""
    return jsonify({"statuses": STATUS_VALUES})


# The id-less rules answer 400 from the service instead of a routing 404
@app.route(f"{API_PREFIX}/jobs/", defaults={"job_id": None}, methods=["GET"], strict_slashes=False)
@app.route(f"{API_PREFIX}/jobs/<job_id>", methods=["GET"])
def get_job(job_id: Optional[str]):
    """
    Get a single job by ID.

    Returns:
        JSON with the job record
    """
    return jsonify(_get_service().get_job(job_id))


@app.route(f"{API_PREFIX}/jobs/", defaults={"job_id": None}, methods=["PUT", "PATCH"], strict_slashes=False)
@app.route(f"{API_PREFIX}/jobs/<job_id>", methods=["PUT", "PATCH"])
def update_job(job_id: Optional[str]):
    """
    Update a job's fields.

    Request Body:
        Any subset of companyName, role, dateApplied, status. Fields left
        out keep their stored values.

    Returns:
        JSON with the updated job
    """
    job = _get_service().update_job(job_id, request.get_json(silent=True))
    return jsonify(job)


@app.route(f"{API_PREFIX}/jobs/", defaults={"job_id": None}, methods=["DELETE"], strict_slashes=False)
@app.route(f"{API_PREFIX}/jobs/<job_id>", methods=["DELETE"])
def delete_job(job_id: Optional[str]):
    """
    Delete a job by ID.

    Returns:
        JSON with a confirmation message and the deleted job
    """
    return jsonify(_get_service().delete_job(job_id))


@app.route("/health", methods=["GET"])
def health_check():
    """
    Public health endpoint for external monitoring.

    Returns minimal info to avoid exposing configuration details.
    """
    mongo_status = "connected" if get_connection().ping() else "disconnected"
    overall = "healthy" if mongo_status == "connected" else "degraded"

    return jsonify({
        "status": overall,
        "version": APP_VERSION,
        "services": {
            "mongodb": mongo_status,
        }
    })


# ============================================================================
# HTML Routes
# ============================================================================

@app.route("/")
def index():
    """Render the kanban board page."""
    return render_template("board.html", columns=STATUS_VALUES, api_base=API_PREFIX)


# ============================================================================
# Application Entry Point
# ============================================================================

if __name__ == "__main__":
    print(f"Starting Job Tracker on http://localhost:{Config.FLASK_PORT}")
    if Config.MONGODB_URI:
        print(f"MongoDB URI: {Config.MONGODB_URI[:30]}...")

    app.run(host="0.0.0.0", port=Config.FLASK_PORT, debug=Config.FLASK_DEBUG)
