"""HTTP status descriptors for Problems.

A Problem's status is any object exposing an integer ``status_code`` and an
optional ``reason_phrase``. The ``Status`` catalog covers the standard codes
by way of ``http.HTTPStatus``.
"""

import http
from dataclasses import dataclass
from typing import Optional, Protocol, Union, runtime_checkable


@runtime_checkable
class StatusType(Protocol):
    """The status descriptor of a Problem."""

    @property
    def status_code(self) -> int:
        ...

    @property
    def reason_phrase(self) -> Optional[str]:
        ...


@dataclass(frozen=True)
class Status:
    """A status code and the reason phrase registered for it, if any."""

    status_code: int
    reason_phrase: Optional[str] = None

    @classmethod
    def of(cls, code: int) -> 'Status':
        """Look up a status in the catalog by its numeric code.

        Codes which are not registered in ``http.HTTPStatus`` are still
        valid statuses; they simply carry no reason phrase.

        Args:
            code: The numeric HTTP status code.

        Returns:
            The Status for the given code.
        """
        try:
            phrase: Optional[str] = http.HTTPStatus(code).phrase
        except ValueError:
            phrase = None
        return cls(status_code=int(code), reason_phrase=phrase)

    def __str__(self) -> str:
        if self.reason_phrase:
            return f'{self.status_code} {self.reason_phrase}'
        return str(self.status_code)


def as_status(value: Union[StatusType, http.HTTPStatus, int, None]) -> Optional[StatusType]:
    """Coerce the given value into a StatusType.

    Args:
        value: A StatusType, an ``http.HTTPStatus`` member, a numeric code,
            or None.

    Returns:
        The corresponding status descriptor, or None if no value was given.

    Raises:
        TypeError: The value can not be interpreted as a status.
    """
    if value is None:
        return None
    # HTTPStatus is an IntEnum, so it has to be checked before the protocol
    # and before plain ints.
    if isinstance(value, http.HTTPStatus):
        return Status(status_code=value.value, reason_phrase=value.phrase)
    if isinstance(value, bool):
        raise TypeError(f'not a valid status: {value!r}')
    if isinstance(value, int):
        return Status.of(value)
    if isinstance(value, StatusType):
        return value
    raise TypeError(f'not a valid status: {value!r}')
