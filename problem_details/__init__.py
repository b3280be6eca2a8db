"""Immutable RFC7807 Problem values, with FastAPI integration.

For details on the Problem format, see: https://tools.ietf.org/html/rfc7807
"""

__title__ = 'problem-details'
__version__ = '0.1.0'
__description__ = 'Immutable RFC7807 Problem Details values for Python and FastAPI'
__author__ = 'Vapor IO'
__author_email__ = 'vapor@vapor.io'
__url__ = 'https://github.com/vapor-ware/problem-details'
__license__ = 'GNU General Public License v3.0'

from .builder import ProblemBuilder, generic  # noqa: E402
from .exceptions import DefaultProblem, ThrowableProblem  # noqa: E402
from .factories import from_status  # noqa: E402
from .problem import DEFAULT_TYPE, Problem, to_string  # noqa: E402
from .status import Status, StatusType, as_status  # noqa: E402

__all__ = [
    'DEFAULT_TYPE',
    'DefaultProblem',
    'Problem',
    'ProblemBuilder',
    'Status',
    'StatusType',
    'ThrowableProblem',
    'as_status',
    'from_status',
    'generic',
    'to_string',
]
