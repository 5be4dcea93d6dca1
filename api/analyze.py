"""Vercel serverless function for ranking a group's restaurant votes."""

import json
import sys
from pathlib import Path
from urllib.parse import urlparse

import httpx

# Add the project root to the path so we can import groupvote modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from groupvote.analyze import AnalysisError, analyze_snapshot  # noqa: E402

INLINE_SOURCE = "request.json"
FETCH_TIMEOUT = 30.0
CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}


def handler(request):
    """Handle incoming requests to rank a group snapshot.

    Accepts:
    - POST with JSON body: {"url": "https://..."} pointing at a snapshot
    - POST with JSON body that is itself a snapshot document
    - POST with multipart form: file upload with 'file' field and optional 'filename' field

    Returns JSON with the ranking and recommendations.
    """
    # Handle CORS preflight
    if request.method == "OPTIONS":
        return create_response(
            "",
            status=204,
            headers={
                "Access-Control-Allow-Methods": "POST, OPTIONS",
                "Access-Control-Allow-Headers": "Content-Type",
            },
        )

    if request.method != "POST":
        return create_response(
            {"error": "Method not allowed. Use POST."},
            status=405,
        )

    try:
        content_type = request.headers.get("content-type", "")

        if "application/json" in content_type:
            data = json.loads(request.body.decode("utf-8"))
            if not isinstance(data, dict):
                return create_response(
                    {"error": "Request body must be a JSON object"},
                    status=400,
                )

            url = data.get("url")
            if url:
                source, content = fetch_url(url)
            else:
                # Inline snapshot document
                source, content = INLINE_SOURCE, request.body

        elif "multipart/form-data" in content_type:
            file_data = request.files.get("file")
            if not file_data:
                return create_response(
                    {"error": "Missing 'file' in form data"},
                    status=400,
                )

            filename = request.form.get("filename", file_data.filename or "upload")
            source = filename
            content = file_data.read()

        else:
            return create_response(
                {"error": f"Unsupported content type: {content_type}"},
                status=400,
            )

        result = analyze_snapshot(source, content)

        return create_response(result.to_dict())

    except AnalysisError as e:
        return create_response(
            {"error": str(e)},
            status=400,
        )
    except json.JSONDecodeError as e:
        return create_response(
            {"error": f"Invalid JSON: {e}"},
            status=400,
        )
    except Exception as e:
        return create_response(
            {"error": f"Internal error: {e}"},
            status=500,
        )


def fetch_url(url: str) -> tuple[str, bytes]:
    """Download a snapshot document.

    Returns (url, content_bytes). Any failure becomes an AnalysisError so the
    handler answers 400 rather than 500.
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise AnalysisError(f"Invalid URL scheme for snapshot: {parsed.scheme or '(none)'}")

    try:
        with httpx.Client(follow_redirects=True, timeout=FETCH_TIMEOUT) as client:
            response = client.get(url, headers={"Accept": "application/json"})
            response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise AnalysisError(
            f"The snapshot server answered {e.response.status_code} for {url}"
        ) from e
    except httpx.RequestError as e:
        raise AnalysisError(f"Couldn't download the snapshot: {e}") from e
    return url, response.content


def create_response(body, status: int = 200, headers: dict | None = None):
    """Wrap a JSON-able body (or a raw string) in a Vercel response dict."""
    if isinstance(body, dict):
        body = json.dumps(body)
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json", **CORS_HEADERS, **(headers or {})},
        "body": body,
    }
