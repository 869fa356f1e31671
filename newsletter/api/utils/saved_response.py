from starlette.responses import Response

from newsletter.app.services.idempotency import SavedResponse


def to_saved_response(response: Response) -> SavedResponse:
    """Snapshot status, raw headers and body of a rendered response"""
    headers = [
        (name.decode("latin-1"), value.decode("latin-1")) for name, value in response.raw_headers
    ]
    return SavedResponse(status_code=response.status_code, headers=headers, body=response.body)


def from_saved_response(saved: SavedResponse) -> Response:
    """Rebuild a response that replays the saved one byte for byte"""
    response = Response(content=saved.body, status_code=saved.status_code)
    response.raw_headers = [
        (name.encode("latin-1"), value.encode("latin-1")) for name, value in saved.headers
    ]
    return response
