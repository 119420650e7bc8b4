from fastapi import APIRouter, Depends, Request, Response
from starlette.concurrency import run_in_threadpool

from content_publisher.api.deps import get_publisher
from content_publisher.components.publisher import ContentPublisher, PublishRequest

router = APIRouter()

# Every method is routed here so the publisher can answer 405 itself,
# with the CORS headers attached.
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route("", methods=ALL_METHODS, include_in_schema=False)
async def save_content(
    request: Request,
    publisher: ContentPublisher = Depends(get_publisher),
) -> Response:
    """Validate the posted content document and commit it to the repository."""
    body = await request.body()
    inp = PublishRequest(
        method=request.method,
        headers=dict(request.headers),
        body=body,
    )
    # The GitHub adapter does blocking I/O.
    result = await run_in_threadpool(publisher.handle, inp)

    return Response(
        content=result.render(),
        status_code=result.status_code,
        headers=result.headers,
    )
