import httpx

from boxkit.errors import AuthError, ResponseError, UnexpectedResponseError, response_body


def _response(status, body=None):
    request = httpx.Request("GET", "https://api.box.test/2.0/collaborations/1")
    if body is None:
        return httpx.Response(status, request=request)
    return httpx.Response(status, json=body, request=request)


def test_unexpected_response_message_includes_api_details():
    err = UnexpectedResponseError(
        _response(404, {"code": "not_found", "message": "Item not found", "request_id": "abc123"})
    )

    assert str(err) == "Unexpected API Response [404 Not Found | abc123] not_found - Item not found"
    assert err.status_code == 404
    assert err.request_id == "abc123"
    assert err.api_code == "not_found"
    assert err.request.method == "GET"
    assert err.code == "unexpected_response"


def test_message_without_body_details():
    err = ResponseError(_response(500))
    assert str(err) == "API Response Error [500 Internal Server Error]"


def test_auth_error_flags_expiry():
    err = AuthError(_response(401))
    assert err.auth_expired is True
    assert str(err).startswith("Expired Auth: Auth code or refresh token has expired [401 Unauthorized")


def test_response_body_tolerates_non_json():
    request = httpx.Request("GET", "https://api.box.test/")
    assert response_body(httpx.Response(200, content=b"<html>", request=request)) is None
    assert response_body(httpx.Response(204, request=request)) is None
