"""Request tracing for the GBFS, Overpass and MapRoulette clients.

Enabled with BIKESHARE_LOG_REQUESTS=true. Three payload shapes are sent:

- Overpass: the QL query text, posted as the ``data`` form field. It can be
  long for large bounding boxes, so it is truncated.
- MapRoulette challenge: a JSON object. The instruction and blurb repeat the
  Markdown instruction file and are shortened to their first line.
- MapRoulette ``addTasks``: one FeatureCollection per station. Only the
  station address and name are logged.
"""

import json
import logging
import os
from typing import Any

logger = logging.getLogger(__name__)

# MapRoulette authenticates with an "apiKey" header
_CREDENTIAL_HEADERS = frozenset({"apikey", "authorization", "cookie", "x-api-key"})
_MAX_PAYLOAD_CHARS = 2000
_CHALLENGE_TEXT_FIELDS = ("instruction", "blurb")


def should_log_requests() -> bool:
    """Check if request logging is enabled via BIKESHARE_LOG_REQUESTS environment variable."""
    return os.getenv("BIKESHARE_LOG_REQUESTS", "").lower() == "true"


def _url_with_query(url: str, params: dict[str, Any] | None) -> str:
    if not params:
        return url
    query = "&".join(f"{key}={value}" for key, value in sorted(params.items()))
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"


def _mask_credentials(headers: dict[str, str]) -> dict[str, str]:
    return {
        name: "***REDACTED***" if name.lower() in _CREDENTIAL_HEADERS else value
        for name, value in headers.items()
    }


def _truncate(text: str) -> str:
    if len(text) > _MAX_PAYLOAD_CHARS:
        return text[:_MAX_PAYLOAD_CHARS] + f"... ({len(text)} chars)"
    return text


def _describe_challenge(challenge: dict[str, Any]) -> str:
    shown = dict(challenge)
    for field in _CHALLENGE_TEXT_FIELDS:
        text = shown.get(field)
        if isinstance(text, str) and "\n" in text.strip():
            shown[field] = text.strip().splitlines()[0] + " [...]"
    return json.dumps(shown, indent=2, default=str)


def _describe_task_line(text: str) -> str | None:
    """Summarize an addTasks body, or return None when text is not one."""
    stripped = text.lstrip()
    if not stripped.startswith("{"):
        return None
    try:
        collection = json.loads(stripped)
    except ValueError:
        return None
    features = collection.get("features") if isinstance(collection, dict) else None
    if not isinstance(features, list):
        return None
    stations = []
    for feature in features:
        properties = feature.get("properties") if isinstance(feature, dict) else None
        if isinstance(properties, dict):
            stations.append(f"{properties.get('address')} {properties.get('name')!r}")
    return f"GeoJSON task with {len(features)} feature(s): {', '.join(stations)}"


def _format_payload(payload: Any) -> str:
    if isinstance(payload, dict):
        return _truncate(_describe_challenge(payload))
    if isinstance(payload, bytes):
        payload = payload.decode("utf-8", errors="replace")
    text = str(payload)
    return _describe_task_line(text) or _truncate(text)


def log_api_request(
    method: str,
    url: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    payload: Any = None,
) -> None:
    """Log one outgoing request if BIKESHARE_LOG_REQUESTS is enabled.

    Args:
        method: HTTP method (GET, POST, PUT).
        url: Request URL.
        params: Query parameters, appended to the URL in sorted order.
        headers: Request headers. Credential headers are masked.
        payload: Overpass query text, MapRoulette challenge dict or task line.
    """
    if not should_log_requests():
        return

    lines = [f"{method} {_url_with_query(url, params)}"]
    if headers:
        lines.append(f"Headers: {json.dumps(_mask_credentials(headers), indent=2)}")
    if payload is not None:
        lines.append(f"Payload: {_format_payload(payload)}")

    logger.info("API Request:\n" + "\n".join(lines))
