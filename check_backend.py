import os
import sys
import toml

from infrastructure.http.lampy_api_client import ApiError, DEFAULT_BASE_URL, LampyApiClient


def get_api_url():
    try:
        config = toml.load(".streamlit/secrets.toml")
        url = config.get("LAMPY_API_URL")
        if url:
            return url
    except (FileNotFoundError, toml.TomlDecodeError) as e:
        print(f"Secrets not loaded ({e}), using environment")
    return os.getenv("LAMPY_API_URL") or DEFAULT_BASE_URL


def check_backend(base_url):
    client = LampyApiClient(base_url, timeout=5)
    print(f"🔎 Checking LAMPY backend at {base_url}")
    try:
        body = client.health()
    except ApiError as e:
        print(f"❌ Backend unreachable: {e.message}")
        return False

    status = body.get("status") if isinstance(body, dict) else None
    if status != "ok":
        print(f"⚠️ Unexpected health response: {body}")
        return False
    print(f"✅ Backend healthy: {body}")
    return True


if __name__ == "__main__":
    sys.exit(0 if check_backend(get_api_url()) else 1)
