"""
CORS Middleware

Answers every preflight with 204 and stamps permissive CORS headers on all
responses. The frontend is served from the same process, but the API is also
used from other origins during development.
"""

from fastapi import Request, Response

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


async def cors_middleware(request: Request, call_next):
    """Short-circuit OPTIONS requests and add CORS headers to everything else"""
    if request.method == "OPTIONS":
        return Response(status_code=204, headers=CORS_HEADERS)

    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response
