import pytest
import requests
from unittest.mock import patch, MagicMock
from infrastructure.http.lampy_api_client import ApiError, LampyApiClient


def _response(status_code=200, body=None, json_error=False):
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 300
    resp.url = "http://api.test/api/v1/x"
    if json_error:
        resp.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        resp.json.return_value = body
    return resp


@pytest.fixture
def client():
    return LampyApiClient("http://api.test/api/v1/", timeout=3)


@patch('requests.post')
def test_post_sends_json_with_bearer_token(mock_post, client):
    mock_post.return_value = _response(200, {"message": "ok"})

    result = client.post("/users/location", {"location": "Pune"}, token="tok123")

    assert result == {"message": "ok"}
    args, kwargs = mock_post.call_args
    assert args[0] == "http://api.test/api/v1/users/location"
    assert kwargs["json"] == {"location": "Pune"}
    assert kwargs["headers"]["Authorization"] == "Bearer tok123"
    assert kwargs["headers"]["Content-Type"] == "application/json"
    assert kwargs["timeout"] == 3


@patch('requests.post')
def test_post_without_token_has_no_auth_header(mock_post, client):
    mock_post.return_value = _response(201, {"token": "t", "user": {}})

    client.post("/auth/register", {"name": "A"})

    headers = mock_post.call_args.kwargs["headers"]
    assert "Authorization" not in headers


@patch('requests.post')
def test_post_error_uses_server_error_field(mock_post, client):
    mock_post.return_value = _response(409, {"error": "User already exists"})

    with pytest.raises(ApiError) as excinfo:
        client.post("/auth/register", {})

    assert excinfo.value.message == "User already exists"
    assert excinfo.value.status_code == 409


@patch('requests.get')
def test_get_error_without_error_field_uses_fallback(mock_get, client):
    mock_get.return_value = _response(500, {"detail": "boom"})

    with pytest.raises(ApiError) as excinfo:
        client.get("/counsellors", token="tok")

    assert str(excinfo.value) == "Request failed"


@patch('requests.get')
def test_get_returns_list_body(mock_get, client):
    mock_get.return_value = _response(200, [{"id": 1}])

    assert client.get("/counsellors", token="tok") == [{"id": 1}]
    assert mock_get.call_args.kwargs["headers"] == {"Authorization": "Bearer tok"}


@patch('requests.get')
def test_network_error_becomes_api_error(mock_get, client):
    mock_get.side_effect = requests.ConnectionError("Connection refused")

    with pytest.raises(ApiError) as excinfo:
        client.get("/counsellors")

    assert excinfo.value.status_code is None
    assert "Connection refused" in excinfo.value.message


@patch('requests.get')
def test_malformed_body_becomes_api_error(mock_get, client):
    mock_get.return_value = _response(200, json_error=True)

    with pytest.raises(ApiError):
        client.get("/counsellors")


@patch('requests.post')
def test_post_file_builds_multipart_jpeg_part(mock_post, client):
    mock_post.return_value = _response(200, {"status": "pending"})

    result = client.post_file("/auth/verify-age", "id_document", b"jpegbytes", "id_document.jpg", token="tok")

    assert result == {"status": "pending"}
    kwargs = mock_post.call_args.kwargs
    assert kwargs["files"] == {"id_document": ("id_document.jpg", b"jpegbytes", "image/jpeg")}
    assert kwargs["headers"] == {"Authorization": "Bearer tok"}
    assert "json" not in kwargs


@patch('requests.post')
def test_post_file_error_fallback_message(mock_post, client):
    mock_post.return_value = _response(400, {})

    with pytest.raises(ApiError) as excinfo:
        client.post_file("/users/upload-photo", "photo", b"x", "photo.jpg", token="tok")

    assert excinfo.value.message == "Upload failed"


@patch('requests.put')
def test_put_sends_bearer_token(mock_put, client):
    mock_put.return_value = _response(200, {"message": "Session cancelled successfully"})

    client.put("/sessions/7/cancel", token="tok")

    args, kwargs = mock_put.call_args
    assert args[0] == "http://api.test/api/v1/sessions/7/cancel"
    assert kwargs["headers"]["Authorization"] == "Bearer tok"


@patch('requests.get')
def test_health_hits_server_root(mock_get, client):
    mock_get.return_value = _response(200, {"status": "ok"})

    assert client.health() == {"status": "ok"}
    assert mock_get.call_args.args[0] == "http://api.test/health"
