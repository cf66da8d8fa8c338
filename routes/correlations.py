"""
Correlation endpoints - pairwise bridges and cross-session entity rollups.
"""

from flask import jsonify, request

from correlation import compute_entity_correlations, detect_links, find_discoveries
from correlation.result import Err, Ok
from . import correlations_bp
from .helpers import error_response, result_response, run_core, store


@correlations_bp.route("/api/correlations/discoveries/<record_id>", methods=["GET"])
def discoveries(record_id: str):
    """Records bridged to record_id, strongest first."""
    return result_response(run_core(find_discoveries(store(), record_id)), "discoveries")


@correlations_bp.route("/api/correlations/entities", methods=["GET"])
def entities():
    """
    Cross-session entity correlations, highest risk first.

    Query: ?q=substring filter on the entity name
    """
    result = run_core(compute_entity_correlations(store()))
    query = request.args.get("q", "").lower()
    if query and not isinstance(result, Err):
        result = Ok([c for c in result.value if query in c.entity.lower()])
    return result_response(result, "correlations")


@correlations_bp.route("/api/correlations/pair/<record_a>/<record_b>", methods=["GET"])
def pair(record_a: str, record_b: str):
    """Links between two stored records."""
    s = store()
    first = run_core(s.get_result(record_a))
    second = run_core(s.get_result(record_b))
    for result in (first, second):
        if isinstance(result, Err):
            return error_response(result.reason, 500)
    if first.value is None or second.value is None:
        return error_response("Record not found", 404)

    return jsonify(detect_links(first.value, second.value).model_dump(mode="json"))
