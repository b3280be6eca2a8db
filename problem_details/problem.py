"""The Problem value contract and its canonical string rendering.

See: https://tools.ietf.org/html/rfc7807

Problem instances are required to be immutable.
"""

from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Protocol, runtime_checkable

from .status import StatusType

DEFAULT_TYPE = 'about:blank'


@runtime_checkable
class Problem(Protocol):
    """An RFC 7807 Problem.

    Any object which answers the six accessors below is a Problem. Classes
    which subclass Problem explicitly inherit the defaults: the ``about:blank``
    type, no title, status, detail or instance, and no parameters.
    """

    @property
    def type(self) -> str:
        """An absolute URI that identifies the problem type.

        When dereferenced, it SHOULD provide human-readable documentation for
        the problem type. When this member is not present, its value is
        assumed to be "about:blank".
        """
        return DEFAULT_TYPE

    @property
    def title(self) -> Optional[str]:
        """A short, human-readable summary of the problem type.

        It SHOULD NOT change from occurrence to occurrence of the problem,
        except for purposes of localisation.
        """
        return None

    @property
    def status(self) -> Optional[StatusType]:
        """The HTTP status generated by the origin server for this occurrence."""
        return None

    @property
    def detail(self) -> Optional[str]:
        """A human readable explanation specific to this occurrence of the problem."""
        return None

    @property
    def instance(self) -> Optional[str]:
        """An absolute URI that identifies the specific occurrence of the problem.

        It may or may not yield further information if dereferenced.
        """
        return None

    @property
    def parameters(self) -> Mapping[str, Any]:
        """Additional attributes of the problem, in insertion order."""
        return MappingProxyType({})


def _parts(problem: Problem) -> Iterator[Optional[str]]:
    status = problem.status
    instance = problem.instance

    yield None if status is None else str(status.status_code)
    yield problem.title
    yield problem.detail
    yield None if instance is None else f'instance={instance}'

    for key, value in problem.parameters.items():
        yield f'{key}={value}'


def to_string(problem: Problem) -> str:
    """Render a Problem as a human-readable string.

    This is intended for logging and debugging, not for the wire. The status
    code, title, detail, instance and parameters are joined, in that order
    and skipping whatever is absent, and wrapped in braces after the type.

        # Returns "about:blank{404, Not Found}"
        to_string(from_status(404))

        # Returns "about:blank{404, Not Found, Order 123}"
        to_string(from_status(404, 'Order 123'))

        # Returns "about:blank{404, Not Found, instance=https://example.org/}"
        to_string(from_status(404, instance='https://example.org/'))

        # Returns "https://example.org/problem{422, Oh, oh!, Crap., instance=https://example.org/problem/123}"
        to_string(
            ProblemBuilder()
            .with_type('https://example.org/problem')
            .with_title('Oh, oh!')
            .with_status(422)
            .with_detail('Crap.')
            .with_instance('https://example.org/problem/123')
            .build()
        )

    Args:
        problem: The problem to render.

    Returns:
        The string representation of the problem.
    """
    joined = ', '.join(part for part in _parts(problem) if part is not None)
    return f'{problem.type}{{{joined}}}'
