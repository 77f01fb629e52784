"""Signed blob download route."""

from fastapi import APIRouter, Query
from fastapi.responses import Response

from app.core.errors import NotFoundError
from app.api.dependencies import Context

router = APIRouter()


@router.get("/blobs/{path:path}")
async def download_blob(path: str, context: Context, token: str = Query(...)):
    """Serve a stored blob to anyone holding its signed URL.

    A bad token and a missing blob are both reported as not found.
    """
    blob_store = context.blob_store
    if not blob_store.verify(path, token):
        raise NotFoundError("Blob not found")

    try:
        data = blob_store.read(path)
    except (FileNotFoundError, ValueError) as e:
        raise NotFoundError("Blob not found") from e

    media_type = "application/json" if path.endswith(".json") else "application/epub+zip"
    return Response(content=data, media_type=media_type)
