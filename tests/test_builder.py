import http

import pytest

from problem_details import builder
from problem_details.exceptions import DefaultProblem, ThrowableProblem
from problem_details.status import Status


class TestProblemBuilder:

    def test_build_empty(self):
        p = builder.ProblemBuilder().build()

        assert isinstance(p, DefaultProblem)
        assert p.type == 'about:blank'
        assert p.title is None
        assert p.status is None
        assert p.detail is None
        assert p.instance is None
        assert p.parameters == {}
        assert p.cause is None

    def test_build_all_values(self):
        cause = ValueError('root cause')
        p = (
            builder.ProblemBuilder()
            .with_type('https://example.org/out-of-stock')
            .with_title('Out of Stock')
            .with_status(400)
            .with_detail('Item B00027Y5QG is no longer available')
            .with_instance('https://example.org/orders/1')
            .with_parameter('product', 'B00027Y5QG')
            .with_cause(cause)
            .build()
        )

        assert p.type == 'https://example.org/out-of-stock'
        assert p.title == 'Out of Stock'
        assert p.status == Status(400, 'Bad Request')
        assert p.detail == 'Item B00027Y5QG is no longer available'
        assert p.instance == 'https://example.org/orders/1'
        assert p.parameters == {'product': 'B00027Y5QG'}
        assert p.cause is cause

    def test_with_type_none(self):
        p = builder.ProblemBuilder().with_type('https://example.org/x').with_type(None).build()
        assert p.type == 'about:blank'

    def test_with_status_http_status(self):
        p = builder.ProblemBuilder().with_status(http.HTTPStatus.CONFLICT).build()
        assert p.status == Status(409, 'Conflict')

    def test_with_status_does_not_set_title(self):
        p = builder.ProblemBuilder().with_status(404).build()
        assert p.title is None

    def test_with_status_invalid(self):
        with pytest.raises(TypeError):
            builder.ProblemBuilder().with_status('404')  # type: ignore

    def test_parameters_order(self):
        p = (
            builder.ProblemBuilder()
            .with_parameter('b', 1)
            .with_parameter('a', 2)
            .with_('c', 3)
            .with_parameter('b', 4)
            .build()
        )
        assert list(p.parameters.items()) == [('b', 4), ('a', 2), ('c', 3)]

    def test_build_is_independent(self):
        b = builder.ProblemBuilder().with_parameter('foo', 'bar')
        first = b.build()

        b.with_parameter('baz', 'qux').with_detail('more')
        second = b.build()

        assert first is not second
        assert first.parameters == {'foo': 'bar'}
        assert first.detail is None
        assert second.parameters == {'foo': 'bar', 'baz': 'qux'}
        assert second.detail == 'more'

    def test_built_parameters_read_only(self):
        p = builder.ProblemBuilder().with_parameter('foo', 'bar').build()

        with pytest.raises(TypeError):
            p.parameters['foo'] = 'baz'  # type: ignore


class TestGeneric:

    def test_generic(self):
        p = builder.generic(503).build()

        assert isinstance(p, ThrowableProblem)
        assert p.type == 'about:blank'
        assert p.title == 'Service Unavailable'
        assert p.status == Status(503, 'Service Unavailable')
        assert p.detail is None
        assert p.instance is None
        assert p.parameters == {}

    def test_generic_unknown_code(self):
        p = builder.generic(599).build()

        assert p.title is None
        assert p.status.status_code == 599

    def test_generic_none(self):
        with pytest.raises(TypeError):
            builder.generic(None)  # type: ignore
