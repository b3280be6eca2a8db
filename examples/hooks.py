"""
A basic example application showcasing problem_details with
simple hooks configured.

Run from the `examples` directory with:
    $ uvicorn hooks:app
"""

import logging

from fastapi import FastAPI, Request, Response

from problem_details.middleware import register

logger = logging.getLogger('hooks')


def log_error(request: Request, exc: Exception) -> None:
    # Problems render as e.g. "about:blank{404, Not Found, Order 123}"
    logger.warning('%s %s failed: %s', request.method, request.url.path, exc)


def add_response_header(request: Request, response: Response, exc: Exception) -> None:
    response.headers['X-Custom-Header'] = 'foobar'


app = FastAPI(debug=True)
register(
    app=app,
    pre_hooks=[log_error],
    post_hooks=[add_response_header],
    add_schema=True,
)


@app.get(
    path='/error',
    responses={
        500: {
            'content': {'application/problem+json': {
                'schema': {
                    '$ref': '#/components/schemas/Problem',
                },
            }},
        }
    },
)
async def error():
    raise ValueError('something went wrong')


# Response (pretty-printed, since the app is in debug mode):
#
# $ curl -i localhost:8000/error
# HTTP/1.1 500 Internal Server Error
# server: uvicorn
# content-type: application/problem+json
# x-custom-header: foobar
#
# {
#   "exc_type": "ValueError",
#   "type": "about:blank",
#   "title": "Unexpected Server Error",
#   "status": 500,
#   "detail": "something went wrong"
# }
