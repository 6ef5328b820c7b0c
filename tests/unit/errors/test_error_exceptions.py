"""Tests for the route call exception taxonomy."""

import pytest
from httpx import Response

from route_client_core.errors.exceptions import (
    APIError,
    BadRequestError,
    ClientError,
    ForbiddenError,
    GatewayTimeoutError,
    HttpError,
    NotFoundError,
    RateLimitError,
    SchemaError,
    ServerError,
    TransportError,
    UnauthorizedError,
)


@pytest.mark.unit
def test_api_error_instantiation():
    response = Response(status_code=500)

    error = APIError(message="Test error", status_code=500, response=response)

    assert str(error) == "Test error"
    assert error.message == "Test error"
    assert error.status_code == 500
    assert error.response is response


@pytest.mark.unit
def test_exception_inheritance():
    for exc_class in (SchemaError, BadRequestError, GatewayTimeoutError, TransportError, HttpError):
        assert issubclass(exc_class, APIError)

    assert issubclass(ClientError, HttpError)
    assert issubclass(ServerError, HttpError)
    for exc_class in (UnauthorizedError, ForbiddenError, NotFoundError, RateLimitError):
        assert issubclass(exc_class, ClientError)

    # Validation failures are not remote HTTP errors
    assert not issubclass(BadRequestError, HttpError)


@pytest.mark.unit
def test_bad_request_defaults():
    error = BadRequestError("Empty value for parameter 'user': ", param="user")

    assert error.status_code == 400
    assert error.param == "user"


@pytest.mark.unit
def test_gateway_timeout_defaults():
    error = GatewayTimeoutError()

    assert str(error) == "Gateway Timeout"
    assert error.status_code == 504


@pytest.mark.unit
def test_schema_error_carries_route():
    assert SchemaError("broken", route="repos/get").route == "repos/get"


@pytest.mark.unit
def test_http_error_body():
    error = HttpError("HTTP 500", body="oops", status_code=500)

    assert error.body == "oops"
    assert error.status_code == 500
