import http
from unittest.mock import patch

import pytest

from problem_details import builder, factories
from problem_details.exceptions import ThrowableProblem
from problem_details.status import Status


def test_from_status():
    p = factories.from_status(404)

    assert isinstance(p, ThrowableProblem)
    assert p.type == 'about:blank'
    assert p.title == 'Not Found'
    assert p.status == Status(404, 'Not Found')
    assert p.detail is None
    assert p.instance is None
    assert p.parameters == {}


def test_from_status_detail():
    p = factories.from_status(404, 'Order 123')

    assert p.title == 'Not Found'
    assert p.detail == 'Order 123'
    assert p.instance is None


def test_from_status_instance():
    p = factories.from_status(404, instance='https://example.org/')

    assert p.detail is None
    assert p.instance == 'https://example.org/'


def test_from_status_detail_instance():
    p = factories.from_status(http.HTTPStatus.NOT_FOUND, 'Order 123', 'https://example.org/')

    assert p.type == 'about:blank'
    assert p.status == Status(404, 'Not Found')
    assert p.detail == 'Order 123'
    assert p.instance == 'https://example.org/'
    assert p.parameters == {}


def test_from_status_values_used_verbatim():
    p = factories.from_status(400, '  spaced  ', 'not/absolute')

    assert p.detail == '  spaced  '
    assert p.instance == 'not/absolute'


def test_from_status_custom_status_type():
    class Teapot:
        status_code = 418
        reason_phrase = 'Short and Stout'

    p = factories.from_status(Teapot())

    assert p.title == 'Short and Stout'
    assert p.status.status_code == 418


def test_from_status_none():
    with pytest.raises(TypeError):
        factories.from_status(None)  # type: ignore


def test_from_status_builds_once():
    with patch.object(builder.ProblemBuilder, 'build', autospec=True, side_effect=builder.ProblemBuilder.build) as build:  # noqa
        factories.from_status(404, 'Order 123', 'https://example.org/')

    build.assert_called_once()


def test_from_status_is_raisable():
    with pytest.raises(ThrowableProblem) as err:
        raise factories.from_status(409, 'Order 123 was modified')

    assert err.value.status.status_code == 409
    assert err.value.message == 'Conflict: Order 123 was modified'
