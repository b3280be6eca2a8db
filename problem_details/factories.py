"""Factory functions to create a Problem from an HTTP status."""

from typing import Optional, overload

from .builder import StatusLike, generic
from .exceptions import ThrowableProblem


@overload
def from_status(status: StatusLike) -> ThrowableProblem:
    ...


@overload
def from_status(status: StatusLike, detail: str) -> ThrowableProblem:
    ...


@overload
def from_status(status: StatusLike, *, instance: str) -> ThrowableProblem:
    ...


@overload
def from_status(status: StatusLike, detail: str, instance: str) -> ThrowableProblem:
    ...


def from_status(
        status: StatusLike,
        detail: Optional[str] = None,
        instance: Optional[str] = None,
) -> ThrowableProblem:
    """Create a new Problem for the given status.

    The title of the Problem is the reason phrase of the status. The type is
    left unset, so it is "about:blank", and there are no parameters. The
    detail and instance, if given, are used as-is.

    Args:
        status: The status of the problem.
        detail: An explanation specific to this occurrence of the problem.
        instance: A URI identifying this occurrence of the problem.

    Returns:
        A new ThrowableProblem, ready to be raised.
    """
    builder = generic(status)
    if detail is not None:
        builder.with_detail(detail)
    if instance is not None:
        builder.with_instance(instance)
    return builder.build()
