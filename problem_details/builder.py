"""A builder to accumulate Problem fields before producing an immutable Problem."""

import http
from typing import Any, Dict, Optional, Union

from .exceptions import DefaultProblem, ThrowableProblem
from .problem import DEFAULT_TYPE
from .status import StatusType, as_status

StatusLike = Union[StatusType, http.HTTPStatus, int]


class ProblemBuilder:
    """Builder for DefaultProblem instances.

    Every setter returns the builder so calls can be chained. The builder may
    be reused after ``build()``: each call produces a new, independent problem.

        problem = (
            ProblemBuilder()
            .with_type('https://example.org/out-of-stock')
            .with_title('Out of Stock')
            .with_status(400)
            .with_detail('Item B00027Y5QG is no longer available')
            .with_parameter('product', 'B00027Y5QG')
            .build()
        )
    """

    def __init__(self) -> None:
        self._type: str = DEFAULT_TYPE
        self._title: Optional[str] = None
        self._status: Optional[StatusType] = None
        self._detail: Optional[str] = None
        self._instance: Optional[str] = None
        self._parameters: Dict[str, Any] = {}
        self._cause: Optional[BaseException] = None

    def with_type(self, type: Optional[str]) -> 'ProblemBuilder':
        self._type = type or DEFAULT_TYPE
        return self

    def with_title(self, title: Optional[str]) -> 'ProblemBuilder':
        self._title = title
        return self

    def with_status(self, status: Optional[StatusLike]) -> 'ProblemBuilder':
        self._status = as_status(status)
        return self

    def with_detail(self, detail: Optional[str]) -> 'ProblemBuilder':
        self._detail = detail
        return self

    def with_instance(self, instance: Optional[str]) -> 'ProblemBuilder':
        self._instance = instance
        return self

    def with_parameter(self, key: str, value: Any) -> 'ProblemBuilder':
        """Set an extension attribute.

        Parameters are kept in the order they were first set. Setting a key
        a second time replaces its value without changing its position.
        """
        self._parameters[key] = value
        return self

    with_ = with_parameter

    def with_cause(self, cause: Optional[BaseException]) -> 'ProblemBuilder':
        self._cause = cause
        return self

    def build(self) -> ThrowableProblem:
        """Create a new Problem from the accumulated values."""
        return DefaultProblem(
            type=self._type,
            title=self._title,
            status=self._status,
            detail=self._detail,
            instance=self._instance,
            parameters=self._parameters,
            cause=self._cause,
        )


def generic(status: StatusLike) -> ProblemBuilder:
    """Get a builder preset with the given status and its reason phrase as title.

    Args:
        status: The status of the problem. This may not be None.

    Returns:
        A ProblemBuilder with its status and title set.

    Raises:
        TypeError: No valid status was given.
    """
    s = as_status(status)
    if s is None:
        raise TypeError('a status is required for a generic problem')

    return ProblemBuilder().with_title(s.reason_phrase).with_status(s)
