"""
Shared helpers for route handlers.
"""

import asyncio

from flask import jsonify

from correlation.result import Err, run_safely
from repositories import get_store


def run_core(coro):
    """Run a core coroutine to an Ok/Err from a sync view."""
    return asyncio.run(run_safely(coro))


def error_response(message: str, status: int):
    return jsonify({"error": message}), status


def result_response(result, key: str):
    """
    Ok -> 200 {"count": n, key: [...]}; Err -> 500 {"error": reason}.

    An empty list is a successful "nothing found", not an error.
    """
    if isinstance(result, Err):
        return error_response(result.reason, 500)

    items = [item.model_dump(mode="json") for item in result.value]
    return jsonify({"count": len(items), key: items})


def store():
    return get_store()
