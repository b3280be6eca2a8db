"""Raisable Problems."""

from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .problem import DEFAULT_TYPE, Problem, to_string
from .status import StatusType


class ThrowableProblem(Exception, Problem):
    """An RFC 7807 Problem which can be raised.

    It is intended to be subclassed to create application-specific problems
    which, when raised, can be trapped by the application error handler and
    converted into HTTP responses with properly-formatted JSON response bodies.
    Subclasses override the accessors they need; the rest keep the Problem
    defaults.

    The causal predecessor of a ThrowableProblem is the exception it was
    chained from (``raise problem from exc``), also available as ``cause``.
    """

    # Additional headers to send with the HTTP response for this problem.
    headers: Dict[str, str] = {}

    @property
    def message(self) -> str:
        """The title and detail of the problem, joined by a colon."""
        return ': '.join(p for p in (self.title, self.detail) if p is not None)

    @property
    def cause(self) -> Optional[BaseException]:
        return self.__cause__

    def _key(self) -> tuple:
        status = self.status
        return (
            self.type,
            self.title,
            None if status is None else status.status_code,
            self.detail,
            self.instance,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ThrowableProblem) or type(self) is not type(other):
            return False
        return self._key() == other._key() and dict(self.parameters) == dict(other.parameters)

    def __hash__(self) -> int:
        return hash((type(self), self._key()))

    def __str__(self) -> str:
        return to_string(self)

    def __repr__(self) -> str:
        return str(self)


class DefaultProblem(ThrowableProblem):
    """The ThrowableProblem produced by ProblemBuilder.

    All fields are fixed at construction and exposed read-only. The given
    parameters are copied, so changes to the caller's mapping are not
    reflected in the problem.
    """

    def __init__(
            self,
            type: Optional[str] = None,
            title: Optional[str] = None,
            status: Optional[StatusType] = None,
            detail: Optional[str] = None,
            instance: Optional[str] = None,
            parameters: Optional[Mapping[str, Any]] = None,
            cause: Optional[BaseException] = None,
    ) -> None:
        self._type: str = type or DEFAULT_TYPE
        self._title: Optional[str] = title
        self._status: Optional[StatusType] = status
        self._detail: Optional[str] = detail
        self._instance: Optional[str] = instance
        self._parameters: Dict[str, Any] = dict(parameters or {})
        super(DefaultProblem, self).__init__()

        if cause is not None:
            self.__cause__ = cause

    @property
    def type(self) -> str:
        return self._type

    @property
    def title(self) -> Optional[str]:
        return self._title

    @property
    def status(self) -> Optional[StatusType]:
        return self._status

    @property
    def detail(self) -> Optional[str]:
        return self._detail

    @property
    def instance(self) -> Optional[str]:
        return self._instance

    @property
    def parameters(self) -> Mapping[str, Any]:
        return MappingProxyType(self._parameters)
