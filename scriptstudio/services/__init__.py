from typing import Tuple

import requests


GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"


def connectivity_probe(url: str = GEMINI_API_BASE, timeout_sec: int = 5) -> Tuple[bool, str]:
    # Any HTTP answer means the host is reachable; an unauthenticated call gets 4xx
    try:
        resp = requests.get(url, timeout=timeout_sec)
        return (resp.status_code < 500, f"HTTP {resp.status_code}")
    except Exception as e:  # noqa: BLE001
        return (False, str(e))


def gemini_models_probe(api_key: str, timeout_sec: int = 8) -> Tuple[bool, str]:
    try:
        resp = requests.get(
            f"{GEMINI_API_BASE}/models",
            headers={"x-goog-api-key": api_key},
            timeout=timeout_sec,
        )
        if resp.ok:
            return True, f"HTTP {resp.status_code}, {len(resp.json().get('models', []))} models"
        return False, f"HTTP {resp.status_code}: {resp.text[:200]}"
    except Exception as e:  # noqa: BLE001
        return False, str(e)
