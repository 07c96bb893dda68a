import logging
from typing import Any, Optional

import requests

log = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8080/api/v1"
DEFAULT_TIMEOUT = 15
JPEG_CONTENT_TYPE = "image/jpeg"


class ApiError(Exception):
    """Single error type for every failed call: HTTP error, network error or bad body."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class LampyApiClient:
    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}{endpoint}"

    def _headers(self, token: Optional[str], json_body: bool = False) -> dict:
        headers = {}
        if json_body:
            headers["Content-Type"] = "application/json"
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _parse(self, resp, fallback_message: str) -> Any:
        try:
            result = resp.json()
        except ValueError as e:
            log.error(f"❌ Unparseable response from {resp.url}: HTTP {resp.status_code}")
            raise ApiError(fallback_message, resp.status_code) from e

        if not resp.ok:
            message = fallback_message
            if isinstance(result, dict) and result.get("error"):
                message = str(result["error"])
            log.error(f"❌ API error {resp.status_code}: {message}")
            raise ApiError(message, resp.status_code)
        return result

    def post(self, endpoint: str, data: Any, token: Optional[str] = None) -> Any:
        try:
            resp = requests.post(
                self._url(endpoint),
                headers=self._headers(token, json_body=True),
                json=data,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            log.error(f"❌ API POST error on {endpoint}: {e}")
            raise ApiError(f"Network error: {e}") from e
        return self._parse(resp, "Request failed")

    def get(self, endpoint: str, token: Optional[str] = None) -> Any:
        try:
            resp = requests.get(
                self._url(endpoint),
                headers=self._headers(token),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            log.error(f"❌ API GET error on {endpoint}: {e}")
            raise ApiError(f"Network error: {e}") from e
        return self._parse(resp, "Request failed")

    def put(self, endpoint: str, data: Any = None, token: Optional[str] = None) -> Any:
        try:
            resp = requests.put(
                self._url(endpoint),
                headers=self._headers(token, json_body=True),
                json=data,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            log.error(f"❌ API PUT error on {endpoint}: {e}")
            raise ApiError(f"Network error: {e}") from e
        return self._parse(resp, "Request failed")

    def post_file(
        self,
        endpoint: str,
        field_name: str,
        content: bytes,
        filename: str,
        token: Optional[str] = None,
    ) -> Any:
        """
        Uploads one file as multipart/form-data under `field_name`.
        requests sets the multipart boundary header itself, so only auth is passed.
        """
        files = {field_name: (filename, content, JPEG_CONTENT_TYPE)}
        try:
            resp = requests.post(
                self._url(endpoint),
                headers=self._headers(token),
                files=files,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            log.error(f"❌ API file upload error on {endpoint}: {e}")
            raise ApiError(f"Network error: {e}") from e
        return self._parse(resp, "Upload failed")

    def health(self) -> dict:
        # /health lives at the server root, outside the versioned API prefix.
        root = self.base_url
        if root.endswith("/api/v1"):
            root = root[: -len("/api/v1")]
        try:
            resp = requests.get(f"{root}/health", timeout=self.timeout)
        except requests.RequestException as e:
            raise ApiError(f"Network error: {e}") from e
        return self._parse(resp, "Health check failed")
