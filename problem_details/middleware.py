"""FastAPI middleware and error handlers for RFC7807-compliant Problem responses.

For details on the Problem format, see: https://tools.ietf.org/html/rfc7807
"""

import asyncio
import logging
from typing import (Any, Awaitable, Callable, Dict, Mapping, Optional,
                    Sequence, Union)

from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.openapi.utils import get_openapi
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from . import schema, serialization
from .builder import ProblemBuilder, generic
from .exceptions import ThrowableProblem
from .problem import Problem, to_string

logger = logging.getLogger(__name__)

PreHook = Callable[[Request, Exception], Union[Any, Awaitable[Any]]]
PostHook = Callable[[Request, Response, Exception], Union[Any, Awaitable[Any]]]


class ProblemResponse(Response):
    """A Response for RFC7807 Problems."""

    media_type: str = serialization.MEDIA_TYPE

    def __init__(self, *args, debug: bool = False, **kwargs) -> None:
        self.debug: bool = debug
        self.extra_headers: Dict[str, str] = {}
        super(ProblemResponse, self).__init__(*args, **kwargs)

    def init_headers(self, headers: Optional[Mapping[str, str]] = None) -> None:
        h = dict(self.extra_headers)
        if hasattr(self, 'problem'):
            h.update(getattr(self.problem, 'headers', None) or {})
        if headers:
            h.update(headers)

        super(ProblemResponse, self).init_headers(h)

    def render(self, content: Any) -> bytes:
        """Render the provided content as an RFC-7807 Problem JSON-serialized bytes."""
        if isinstance(content, Problem):
            p = content
        elif isinstance(content, dict):
            p = serialization.from_dict(content)
        elif isinstance(content, HTTPException):
            p = from_http_exception(content)
            self.extra_headers.update(content.headers or {})
        elif isinstance(content, RequestValidationError):
            p = from_request_validation_error(content)
        elif isinstance(content, Exception):
            p = from_exception(content)
        else:
            p = (
                generic(500)
                .with_title('Application Error')
                .with_detail('Got unexpected content when trying to generate error response')
                .with_parameter('content', str(content))
                .build()
            )

        # Dynamically set the response status_code to match the status
        # code of the Problem. A Problem without a status is a server error.
        self.status_code = p.status.status_code if p.status is not None else 500

        self.problem: Problem = p

        # Parameters may carry values which are not native JSON (dates, UUIDs,
        # pydantic models, ...); encode them the way FastAPI encodes responses.
        return serialization.dumps(
            jsonable_encoder(serialization.to_dict(p)),
            debug=self.debug,
        )


def from_http_exception(exc: HTTPException) -> ThrowableProblem:
    """Create a new Problem from an HTTPException.

    The Problem will take on the status code of the HTTPException and generate
    a title based on that status code. If the HTTPException specifies any details,
    those will be used as the problem details.

    Args:
        exc: The HTTPException to convert into a Problem.

    Returns:
        A new Problem populated from the HTTPException.
    """
    return generic(exc.status_code).with_detail(exc.detail).build()


def from_request_validation_error(exc: RequestValidationError) -> ThrowableProblem:
    """Create a new Problem from a RequestValidationError.

    The Problem will take on a status code of 400 Bad Request, indicating that
    the user provided data which the server will not process. The title will
    be "Validation Error". The specifics of which fields failed validation
    checks are included as the "errors" parameter.

    Args:
        exc: The RequestValidationError to convert into a Problem.

    Returns:
         A new Problem populated from the RequestValidationError.
    """
    return (
        ProblemBuilder()
        .with_title('Validation Error')
        .with_status(400)
        .with_detail('One or more user-provided parameters are invalid')
        .with_parameter('errors', jsonable_encoder(exc.errors()))
        .build()
    )


def from_exception(exc: Exception) -> ThrowableProblem:
    """Create a new Problem from a broad-class Exception.

    Converting a general Exception into a Problem is indicative of a server
    error, where some exception is not handled explicitly or not wrapped in
    a Problem/HTTPException.

    The Problem always uses the 500 status code, with the title "Unexpected
    Server Error" to indicate that an exception was not properly wrapped/raised.
    The exception class name is provided as the "exc_type" parameter, the
    exception message is used as the detail, and the exception itself becomes
    the cause of the Problem.

    Args:
        exc: The general Exception to convert into a Problem.

    Returns:
        A new Problem populated from the Exception.
    """
    return (
        ProblemBuilder()
        .with_title('Unexpected Server Error')
        .with_status(500)
        .with_detail(str(exc))
        .with_parameter('exc_type', exc.__class__.__name__)
        .with_cause(exc)
        .build()
    )


def get_exception_handler(
        debug: bool = False,
        pre_hooks: Optional[Sequence[PreHook]] = None,
        post_hooks: Optional[Sequence[PostHook]] = None,
) -> Callable:
    """A custom FastAPI exception handler constructor.

    The exception handler which this returns is used to return an RFC7807
    compliant ProblemResponse for the given exception.

    The constructor function lets you specify whether the application is running
    in debug mode, which will cause the error JSON to be pretty-printed for
    easier readability. Otherwise, the JSON response is serialized in a more
    compact format.

    Hooks can be specified for the handler as well. Pre-hooks run before the
    exception is converted into a ProblemResponse and take a request
    (starlette.requests.Request) and the Exception. Post-hooks run after and
    also receive the response. Hooks may be plain functions or coroutine
    functions. If a hook raises, the exception propagates out of the handler.

    Args:
        debug: Configure the handler for pretty-printing response JSON.
        pre_hooks: Functions which are run before generating a response.
        post_hooks: Functions which are run after generating a response.
    """
    async def exception_handler(request: Request, exc: Exception) -> ProblemResponse:
        nonlocal debug, pre_hooks, post_hooks

        await exec_hooks(pre_hooks, request, exc)
        response = ProblemResponse(exc, debug=debug)
        await exec_hooks(post_hooks, request, response, exc)

        # Unhandled exceptions are re-raised to the server after this, which
        # logs them with their traceback.
        if isinstance(exc, (Problem, HTTPException, RequestValidationError)):
            logger.debug('responding with problem: %s', to_string(response.problem))
        else:
            logger.debug('unhandled exception: %s', to_string(response.problem), exc_info=exc)

        return response
    return exception_handler


async def exec_hooks(hooks: Optional[Sequence[Union[PreHook, PostHook]]], *args) -> None:
    """Helper function to execute hooks, if any are defined.

    Args:
        hooks: The hooks, if any, to execute.
        args: Positional arguments to pass to the hooks.
    """
    if hooks:
        for hook in hooks:
            if asyncio.iscoroutinefunction(hook):
                await hook(*args)
            else:
                hook(*args)


def register(
    app: FastAPI,
    pre_hooks: Optional[Sequence[PreHook]] = None,
    post_hooks: Optional[Sequence[PostHook]] = None,
    add_schema: Union[str, bool] = False,
) -> None:
    """Register the Problem middleware and handlers with a FastAPI application.

    This function registers four things:

    1. An exception handler for ThrowableProblems, so problems raised by the
       application are returned as RFC7807 Problem responses.
    2. An exception handler for HTTPExceptions. This ensures that any HTTPException
       raised by the application is properly converted to an RFC7807 Problem response.
    3. An exception handler for RequestValidationError. This ensures that any validation
       errors (e.g. incorrect params) are formatted into an RFC7807 Problem response.
    4. ProblemMiddleware. This middleware handles all other exceptions raised by the
       application and converts them to RFC7807 Problem responses.

    The ProblemMiddleware captures all exceptions before they make it to
    starlette's internal ServerErrorMiddleware. As such, all errors return as
    JSON, and the HTML debug tracebacks of that middleware no longer occur.

    If the FastAPI application is configured for debug mode, this will
    pretty-print the JSON output, making it more human-readable and easier
    to debug. Otherwise, the JSON response is serialized in a more compact
    format.

    This can also add the Problem schema to the application's OpenAPI schema
    components, so that routes can document problem responses with the
    correct content type:

        @app.get(
            path='/',
            responses={
                500: {
                    'content': {'application/problem+json': {
                        'schema': {
                            '$ref': '#/components/schemas/Problem',
                        },
                    }},
                }
            }
        )
        def root():
            ...

    Args:
        app: The FastAPI application instance to register with.
        pre_hooks: Functions which are run before generating a response.
        post_hooks: Functions which are run after generating a response.
        add_schema: Add the Problem pydantic model as a schema to the application's
            OpenAPI definitions. If this is a string, it will be added to the
            schema using the string as the name.
    """
    _handler = get_exception_handler(debug=app.debug, pre_hooks=pre_hooks, post_hooks=post_hooks)

    app.add_exception_handler(ThrowableProblem, _handler)
    app.add_exception_handler(HTTPException, _handler)
    app.add_exception_handler(RequestValidationError, _handler)
    app.add_middleware(ProblemMiddleware, debug=app.debug, pre_hooks=pre_hooks, post_hooks=post_hooks)

    if add_schema:
        if isinstance(add_schema, str):
            name = add_schema
        else:
            name = 'Problem'

        # Override the built-in OpenAPI docs generator with the wrapper.
        # This allows the RFC7807 Problem schema to be added in, so it can be
        # referenced in API route metadata.
        def wrap_openapi() -> Dict:
            if not app.openapi_schema:
                app.openapi_schema = get_openapi(
                    title=app.title,
                    version=app.version,
                    openapi_version=app.openapi_version,
                    description=app.description,
                    routes=app.routes,
                    tags=app.openapi_tags,
                    servers=app.servers,
                )

            app.openapi_schema.setdefault('components', {}).setdefault('schemas', {})[name] = (
                schema.Problem.model_json_schema(ref_template='#/components/schemas/{model}')
            )
            return app.openapi_schema
        app.openapi = wrap_openapi  # type: ignore


class ProblemMiddleware:
    """Middleware to catch all unhandled exceptions in the stack and return
    a corresponding RFC7807 JSON-formatted response.

    If 'debug' is set, the response JSON will be serialized in a more
    human-readable format, making it easier for debugging. Otherwise, the
    response JSON is serialized in a more compact format.
    """

    def __init__(
            self,
            app: ASGIApp,
            debug: bool = False,
            pre_hooks: Optional[Sequence[PreHook]] = None,
            post_hooks: Optional[Sequence[PostHook]] = None,
    ) -> None:
        self.app: ASGIApp = app
        self.pre_hooks = pre_hooks or []
        self.post_hooks = post_hooks or []
        self.debug: bool = debug

        self._handler = get_exception_handler(
            debug=self.debug,
            pre_hooks=self.pre_hooks,
            post_hooks=self.post_hooks,
        )

    # See: starlette.middleware.errors.ServerErrorMiddleware
    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope['type'] != 'http':
            await self.app(scope, receive, send)
            return

        response_started = False

        async def _send(message: Message) -> None:
            nonlocal response_started, send

            if message['type'] == 'http.response.start':
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, _send)
        except Exception as exc:
            if not response_started:
                response = await self._handler(Request(scope), exc)
                await response(scope, receive, send)

            # Continue to raise the exception. This allows the exception to
            # be logged, or optionally allows test clients to raise the error
            # in test cases. The cause chain of the exception is left intact.
            raise
