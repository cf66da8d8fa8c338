"""
Dashboard rollup endpoints - actors, financial flows, passengers, timeline.
"""

from flask import jsonify, request

from correlation import (
    aggregate_actors,
    filter_actors,
    filter_transactions,
    passenger_stats,
    summarize_flows,
    timeline_events,
)
from correlation.financial import FILTER_MODES
from correlation.result import Err
from models import EventKind
from . import rollups_bp
from .helpers import error_response, run_core, store


def _records():
    return run_core(store().get_all_results())


@rollups_bp.route("/api/rollups/actors", methods=["GET"])
def actors():
    result = _records()
    if isinstance(result, Err):
        return error_response(result.reason, 500)

    try:
        min_risk = float(request.args.get("min_risk", 0))
    except ValueError:
        return error_response("min_risk must be a number", 400)

    merged = filter_actors(
        aggregate_actors(result.value),
        query=request.args.get("q", ""),
        role=request.args.get("role"),
        min_risk=min_risk,
        only_recurring=request.args.get("recurring") == "true",
    )
    return jsonify({
        "count": len(merged),
        "actors": [a.model_dump(mode="json") for a in merged],
    })


@rollups_bp.route("/api/rollups/finance", methods=["GET"])
def finance():
    result = _records()
    if isinstance(result, Err):
        return error_response(result.reason, 500)

    mode = request.args.get("mode", "all")
    if mode not in FILTER_MODES:
        return error_response(f"mode must be one of {', '.join(FILTER_MODES)}", 400)

    transactions = filter_transactions(result.value, query=request.args.get("q", ""), mode=mode)
    return jsonify({
        "summary": summarize_flows(result.value).model_dump(mode="json"),
        "transactions": [
            {"record_id": record_id, **t.model_dump(mode="json")}
            for record_id, t in transactions
        ],
    })


@rollups_bp.route("/api/rollups/passengers", methods=["GET"])
def passengers():
    result = _records()
    if isinstance(result, Err):
        return error_response(result.reason, 500)
    stats = passenger_stats(result.value)
    return jsonify({"passengers": [p.model_dump(mode="json") for p in stats]})


@rollups_bp.route("/api/rollups/timeline", methods=["GET"])
def timeline():
    """
    Dated events, newest first.

    Query: ?q=text filter, ?kind=document|key_event|transaction|all
    """
    result = _records()
    if isinstance(result, Err):
        return error_response(result.reason, 500)

    kind = request.args.get("kind", "all")
    if kind != "all" and kind not in {k.value for k in EventKind}:
        return error_response("kind must be one of all, " + ", ".join(k.value for k in EventKind), 400)

    events = timeline_events(result.value, query=request.args.get("q", ""), kind=kind)
    return jsonify({
        "count": len(events),
        "events": [e.model_dump(mode="json") for e in events],
    })
