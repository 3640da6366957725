"""Asset proxy endpoints.

Every download URL handed to clients points here; the file is streamed from
Artifact Registry in a single hop, never via a redirect.

    GET /download/provider/{namespace}/asset/{asset_name}
    GET /download/module/{namespace}/asset/{asset_name}
"""

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from arregistry.api.dependencies import get_module_store, get_provider_store
from arregistry.logging_config import get_logger
from arregistry.registry import ModuleStore, ProviderStore
from arregistry.storage.protocol import AssetStream

router = APIRouter(prefix="/download", tags=["assets"])
logger = get_logger(__name__)

CHUNK_SIZE = 64 * 1024


def content_type_for(asset_name: str) -> str:
    """Content type served for an asset, chosen from its name."""
    if asset_name.endswith(".zip"):
        return "application/zip"
    if asset_name.endswith(".sig"):
        return "application/pgp-signature"
    if asset_name.endswith((".pem", ".asc")):
        return "application/pgp-keys"
    if asset_name.endswith("SHA256SUMS"):
        return "text/plain; charset=utf-8"
    return "application/octet-stream"


def _stream_response(stream: AssetStream, asset_name: str) -> StreamingResponse:
    headers: dict[str, str] = {}
    if stream.content_length is not None:
        headers["Content-Length"] = str(stream.content_length)

    # iter_bytes releases the upstream response itself; the background task
    # covers the case where the body is never iterated
    return StreamingResponse(
        stream.iter_bytes(CHUNK_SIZE),
        media_type=content_type_for(asset_name),
        headers=headers,
        background=BackgroundTask(stream.aclose),
    )


@router.get("/provider/{namespace}/asset/{asset_name}")
async def download_provider_asset(
    namespace: str,
    asset_name: str,
    store: ProviderStore = Depends(get_provider_store),
) -> StreamingResponse:
    stream = await store.get_asset(namespace, asset_name)
    logger.debug("Streaming provider asset", namespace=namespace, asset=asset_name)
    return _stream_response(stream, asset_name)


@router.get("/module/{namespace}/asset/{asset_name}")
async def download_module_asset(
    namespace: str,
    asset_name: str,
    store: ModuleStore = Depends(get_module_store),
) -> StreamingResponse:
    stream = await store.get_asset(namespace, asset_name)
    logger.debug("Streaming module asset", namespace=namespace, asset=asset_name)
    return _stream_response(stream, asset_name)
