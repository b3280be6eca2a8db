"""JSON (de)serialization of Problems as ``application/problem+json`` bodies."""

import json
from typing import Any, Dict, Mapping

from .exceptions import DefaultProblem, ThrowableProblem
from .problem import Problem
from .status import Status

MEDIA_TYPE = 'application/problem+json'

FIELDS = ('type', 'title', 'status', 'detail', 'instance')


def to_dict(problem: Problem) -> Dict[str, Any]:
    """Get a dictionary representation of a Problem.

    Args:
        problem: The Problem to convert.

    Returns:
        A dictionary representation of the Problem. This can be serialized
        out to JSON and used as the response body.
    """
    d: Dict[str, Any] = {}

    # Update the problem dict with parameters first. In the unlikely event that
    # a Problem has parameters with keys which conflict with the keys defined
    # in RFC7807, we do not want the parameters to override.
    d.update(problem.parameters)

    d['type'] = str(problem.type)
    if problem.title is not None:
        d['title'] = str(problem.title)
    if problem.status is not None:
        d['status'] = int(problem.status.status_code)
    if problem.detail is not None:
        d['detail'] = str(problem.detail)
    if problem.instance is not None:
        d['instance'] = str(problem.instance)
    return d


def from_dict(data: Mapping[str, Any]) -> ThrowableProblem:
    """Create a new Problem from a dictionary.

    Keys matching the fields defined in RFC7807 populate those fields. All
    other keys are kept, in order, as the Problem's parameters.

    Args:
        data: The dictionary to convert into a Problem.

    Returns:
        A new Problem populated from the dictionary fields.
    """
    status = data.get('status')
    return DefaultProblem(
        type=data.get('type'),
        title=data.get('title'),
        status=None if status is None else Status.of(int(status)),
        detail=data.get('detail'),
        instance=data.get('instance'),
        parameters={k: v for k, v in data.items() if k not in FIELDS},
    )


def to_bytes(problem: Problem, debug: bool = False) -> bytes:
    """Render a Problem as JSON-serialized bytes.

    Args:
        problem: The Problem to render.
        debug: Pretty-print the JSON, making it easier for humans to read.

    Returns:
        The JSON-serialized bytes representing the Problem.
    """
    return dumps(to_dict(problem), debug=debug)


def dumps(data: Mapping[str, Any], debug: bool = False) -> bytes:
    """Serialize a Problem dictionary, as returned by to_dict, to JSON bytes.

    Args:
        data: The dictionary representation of a Problem.
        debug: Pretty-print the JSON, making it easier for humans to read.

    Returns:
        The JSON-serialized bytes.

    Raises:
        TypeError: A value in the dictionary is not JSON serializable.
        ValueError: A value in the dictionary is NaN or infinite.
    """
    if debug:
        return json.dumps(
            data,
            ensure_ascii=False,
            allow_nan=False,
            indent=2,
        ).encode('utf-8')
    else:
        return json.dumps(
            data,
            ensure_ascii=False,
            allow_nan=False,
            indent=None,
            separators=(',', ':'),
        ).encode('utf-8')


def from_bytes(body: bytes) -> ThrowableProblem:
    """Parse a JSON-serialized Problem.

    Args:
        body: The JSON document, e.g. a problem response body.

    Returns:
        A new Problem populated from the JSON object.

    Raises:
        ValueError: The body is not valid JSON, or not a JSON object.
    """
    data = json.loads(body)
    if not isinstance(data, dict):
        raise ValueError(f'expected a JSON object for a problem, got {type(data).__name__}')
    return from_dict(data)
