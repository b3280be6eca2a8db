import pytest

from problem_details import serialization
from problem_details.builder import ProblemBuilder
from problem_details.exceptions import DefaultProblem
from problem_details.factories import from_status
from problem_details.status import Status


class TestToDict:

    def test_all_values(self):
        p = (
            ProblemBuilder()
            .with_type('problem-type')
            .with_title('Problem')
            .with_status(500)
            .with_detail('Something happened')
            .with_instance('foo')
            .with_parameter('other', 'bar')
            .build()
        )
        assert serialization.to_dict(p) == {
            'type': 'problem-type',
            'title': 'Problem',
            'status': 500,
            'detail': 'Something happened',
            'instance': 'foo',
            'other': 'bar',
        }

    def test_default_values(self):
        assert serialization.to_dict(ProblemBuilder().build()) == {
            'type': 'about:blank',
        }

    def test_from_status(self):
        assert serialization.to_dict(from_status(404)) == {
            'type': 'about:blank',
            'title': 'Not Found',
            'status': 404,
        }

    def test_parameters_do_not_override(self):
        p = (
            ProblemBuilder()
            .with_status(400)
            .with_parameter('status', 'overridden')
            .with_parameter('type', 'overridden')
            .build()
        )
        assert serialization.to_dict(p) == {
            'type': 'about:blank',
            'status': 400,
        }


class TestFromDict:

    def test_from_dict(self):
        p = serialization.from_dict({
            'type': 'test-problem',
            'title': 'Test Problem',
            'status': 500,
            'detail': 'a test problem occurred',
            'instance': 'testproblem',
        })

        assert p == DefaultProblem(
            type='test-problem',
            title='Test Problem',
            status=Status.of(500),
            detail='a test problem occurred',
            instance='testproblem',
        )

    def test_from_dict_empty(self):
        p = serialization.from_dict({})

        assert p == DefaultProblem()
        assert p.type == 'about:blank'
        assert p.status is None

    def test_from_dict_with_extras(self):
        p = serialization.from_dict({
            'type': 'test-problem',
            'key1': 'extra',
            'status': 500,
            'key2': {
                'foo': ['bar', 'baz']
            }
        })

        assert p.status == Status(500, 'Internal Server Error')
        assert list(p.parameters.items()) == [
            ('key1', 'extra'),
            ('key2', {'foo': ['bar', 'baz']}),
        ]


class TestToBytes:

    def test_to_bytes(self):
        assert serialization.to_bytes(from_status(500)) == b'{"type":"about:blank","title":"Internal Server Error","status":500}'  # noqa

    def test_to_bytes_debug(self):
        assert serialization.to_bytes(from_status(500), debug=True) == b'{\n  "type": "about:blank",\n  "title": "Internal Server Error",\n  "status": 500\n}'  # noqa

    def test_to_bytes_unicode(self):
        p = from_status(400, 'ungültig')
        assert serialization.to_bytes(p) == '{"type":"about:blank","title":"Bad Request","status":400,"detail":"ungültig"}'.encode('utf-8')  # noqa

    def test_dumps_not_json(self):
        with pytest.raises(TypeError):
            serialization.dumps({'type': 'about:blank', 'when': object()})

    def test_dumps_debug(self):
        assert serialization.dumps({'type': 'about:blank'}, debug=True) == b'{\n  "type": "about:blank"\n}'

    def test_to_bytes_nan(self):
        p = ProblemBuilder().with_parameter('value', float('nan')).build()
        with pytest.raises(ValueError):
            serialization.to_bytes(p)


class TestFromBytes:

    def test_from_bytes(self):
        p = serialization.from_bytes(b'{"type":"about:blank","title":"Not Found","status":404,"order":123}')

        assert p == ProblemBuilder().with_title('Not Found').with_status(404).with_parameter('order', 123).build()

    def test_from_bytes_not_object(self):
        with pytest.raises(ValueError):
            serialization.from_bytes(b'["not", "a", "problem"]')

    def test_from_bytes_invalid_json(self):
        with pytest.raises(ValueError):
            serialization.from_bytes(b'{not json')
