"""
Ingestion - turn LLM answers and record files into AnalysisRecords.
"""

import json
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from models import AnalysisInput, AnalysisOutput, AnalysisRecord, RecordStatus


def extract_structured_json(text: str) -> Optional[Any]:
    """
    Pull JSON out of an LLM answer that may be wrapped in Markdown or prose.

    Tries a direct parse, then the span from the first '{' to the last '}'.
    Returns None when neither parses.
    """
    if not text:
        return None

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    first, last = text.find("{"), text.rfind("}")
    if first == -1 or last <= first:
        return None

    try:
        return json.loads(text[first:last + 1])
    except json.JSONDecodeError as e:
        print(f"[WARN] JSON extraction failed: {e}")
        return None


def record_from_llm_text(
    record_id: str,
    input: AnalysisInput,
    text: str,
    duration_ms: int = 0,
) -> AnalysisRecord:
    """Completed record when the answer parses, error record otherwise."""
    data = extract_structured_json(text)

    error = None
    output = None
    if not isinstance(data, dict):
        error = "No structured JSON in model response"
    else:
        try:
            output = AnalysisOutput.model_validate(data)
        except ValidationError as e:
            error = f"Invalid analysis structure: {e.error_count()} errors"

    return AnalysisRecord(
        id=record_id,
        status=RecordStatus.ERROR if error else RecordStatus.COMPLETED,
        input=input,
        output=output,
        duration_ms=duration_ms,
        error=error,
    )


def _parse_file(path: Path) -> list:
    suffix = path.suffix.lower()
    with open(path, encoding="utf-8") as f:
        if suffix in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        elif suffix == ".jsonl":
            data = [json.loads(line) for line in f if line.strip()]
        else:
            data = json.load(f)

    if data is None:
        return []
    if isinstance(data, dict):
        # Either a single record or {"records": [...]}
        return data.get("records", [data]) if "id" not in data else [data]
    return list(data)


def load_records_file(path: Union[str, Path]) -> list[AnalysisRecord]:
    """
    Load records from .json (object or list), .jsonl or .yaml.

    Raises ValidationError for malformed records; callers decide how to report it.
    """
    return [AnalysisRecord.model_validate(item) for item in _parse_file(Path(path))]
