from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import Response
from starlette.requests import ClientDisconnect

from upload_relay.config import Settings
from upload_relay.schemas import UploadMetadata
from upload_relay.service.proxy import forward_upload

router = APIRouter(tags=["upload"])


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def read_body(request: Request, limit: int) -> bytes:
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > limit:
        raise HTTPException(status_code=413, detail=f"Request body exceeds {limit} bytes.")

    buffer = bytearray()
    try:
        async for chunk in request.stream():
            buffer.extend(chunk)
            if len(buffer) > limit:
                raise HTTPException(status_code=413, detail=f"Request body exceeds {limit} bytes.")
    except ClientDisconnect as exc:
        raise HTTPException(status_code=400, detail="Error reading request body.") from exc
    return bytes(buffer)


@router.post("/upload-go")
async def upload(request: Request, settings: Settings = Depends(get_settings)) -> Response:
    body = await read_body(request, settings.max_upload_bytes)
    if not body:
        raise HTTPException(status_code=400, detail="File body is missing or empty.")

    metadata = UploadMetadata.from_headers(request.headers)
    upstream = await forward_upload(settings, body, metadata)
    headers = {"content-type": upstream.content_type} if upstream.content_type else None
    return Response(content=upstream.content, status_code=200, headers=headers)
