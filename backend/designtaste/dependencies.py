from fastapi import Request, Response

from designtaste.services.processing_worker import ProcessingWorker

# The capture extension calls these routes from arbitrary page origins.
EXTENSION_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PATCH, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


async def allow_any_origin(response: Response):
    response.headers.update(EXTENSION_CORS_HEADERS)


def preflight_response() -> Response:
    return Response(status_code=200, headers=EXTENSION_CORS_HEADERS)


async def get_worker(request: Request) -> ProcessingWorker:
    return request.app.state.worker
