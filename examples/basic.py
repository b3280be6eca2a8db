"""
A basic example application showcasing problem_details

Run from the `examples` directory with:
    $ uvicorn basic:app
"""

from fastapi import FastAPI

from problem_details import DefaultProblem, Status, from_status
from problem_details.middleware import register


app = FastAPI()
register(app)


class AuthenticationError(DefaultProblem):
    """An example of how to create a custom subclass of a Problem.

    This class also defines additional headers which should be sent with
    the error response.
    """

    headers = {
        'WWW-Authenticate': 'Bearer',
    }

    def __init__(self, msg: str) -> None:
        super(AuthenticationError, self).__init__(
            type='https://example.org/problems/unauthenticated',
            title='Unauthenticated',
            status=Status.of(401),
            detail=msg,
        )


@app.get('/')
async def root():
    return {'message': 'Hello World'}


@app.get('/orders/{order_id}')
async def order(order_id: int):
    raise from_status(404, f'Order {order_id}', f'/orders/{order_id}')


@app.get('/auth')
async def custom():
    raise AuthenticationError('user is unauthenticated')


@app.get('/error')
async def error():
    raise ValueError('something went wrong')


# Response:
#
# $ curl localhost:8000/orders/123
# {"type":"about:blank","title":"Not Found","status":404,"detail":"Order 123","instance":"/orders/123"}
#
# $ curl localhost:8000/error
# {"exc_type":"ValueError","type":"about:blank","title":"Unexpected Server Error","status":500,"detail":"something went wrong"}
