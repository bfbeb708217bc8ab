"""
Helpers for API Gateway proxy events and responses.
"""
import json
from typing import Any, Dict, Optional


def api_response(status_code: int, body: Any, headers: Optional[Dict[str, str]] = None) -> Dict:
    """
    Build an API Gateway proxy response.

    Args:
        status_code: HTTP status code
        body: JSON-serializable payload, or a string sent as is
        headers: Extra response headers

    Returns:
        API Gateway Lambda proxy response
    """
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json", **(headers or {})},
        "body": body if isinstance(body, str) else json.dumps(body)
    }


def error_response(status_code: int, message: str) -> Dict:
    """Build an error response with a message for the user."""
    return api_response(status_code, {"error": message})


def parse_body(event: Dict) -> Dict[str, Any]:
    """
    Decode the JSON body of an event.

    Raises:
        ValueError: If the body is not a JSON object
    """
    body = event.get("body") or {}
    if isinstance(body, str):
        body = json.loads(body)
    if not isinstance(body, dict):
        raise ValueError("Request body must be a JSON object")
    return body


def get_param(event: Dict, name: str, body: Optional[Dict[str, Any]] = None) -> Optional[str]:
    """Read a parameter from the query string, falling back to the body."""
    query_params = event.get("queryStringParameters") or {}
    value = query_params.get(name)
    if value is None and body:
        value = body.get(name)
    return value
