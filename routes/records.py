"""
Record store endpoints.
"""

from flask import jsonify, request
from pydantic import ValidationError

from correlation.result import Err
from models import AnalysisRecord
from . import records_bp
from .helpers import error_response, run_core, store


@records_bp.route("/api/records", methods=["GET"])
def list_records():
    """List record summaries, oldest first."""
    result = run_core(store().get_all_results())
    if isinstance(result, Err):
        return error_response(result.reason, 500)

    status = request.args.get("status")
    records = [r for r in result.value if not status or r.status.value == status]
    return jsonify({
        "count": len(records),
        "records": [r.summary() for r in records],
    })


@records_bp.route("/api/records/<record_id>", methods=["GET"])
def get_record(record_id: str):
    """Get a single record with full output."""
    result = run_core(store().get_result(record_id))
    if isinstance(result, Err):
        return error_response(result.reason, 500)
    if result.value is None:
        return error_response("Record not found", 404)
    return jsonify(result.value.model_dump(mode="json"))


@records_bp.route("/api/records", methods=["POST"])
def create_record():
    """Store a record. Body is the record JSON."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return error_response("Expected a JSON object", 400)

    try:
        record = AnalysisRecord.model_validate(data)
    except ValidationError as e:
        return error_response(f"Invalid record: {e.error_count()} errors", 400)

    result = run_core(store().save_result(record))
    if isinstance(result, Err):
        return error_response(result.reason, 500)
    return jsonify(record.summary()), 201


@records_bp.route("/api/records/<record_id>", methods=["DELETE"])
def delete_record(record_id: str):
    result = run_core(store().delete_result(record_id))
    if isinstance(result, Err):
        return error_response(result.reason, 500)
    if not result.value:
        return error_response("Record not found", 404)
    return jsonify({"deleted": record_id})
