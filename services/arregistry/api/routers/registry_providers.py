"""Provider registry protocol endpoints (what `terraform init` speaks for providers).

    GET /v1/providers/{namespace}/{name}/versions
    GET /v1/providers/{namespace}/{name}/{version}/download/{os}/{arch}
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from arregistry.api.dependencies import get_provider_store
from arregistry.api.schemas import ProviderDownloadResponse, ProviderVersionsResponse
from arregistry.logging_config import get_logger
from arregistry.registry import ProviderStore

router = APIRouter(prefix="/v1/providers", tags=["providers"])
logger = get_logger(__name__)


@router.get("/{namespace}/{name}/versions")
async def list_provider_versions(
    namespace: str,
    name: str,
    store: ProviderStore = Depends(get_provider_store),
) -> JSONResponse:
    """List available versions and platforms of a provider."""
    version_set, errors = await store.list_versions(namespace, name)
    if errors is not None:
        logger.warning(
            "Provider listing found unrecognized version names",
            namespace=namespace,
            name=name,
            error=str(errors),
        )

    return JSONResponse(
        content=ProviderVersionsResponse.from_version_set(version_set).model_dump()
    )


@router.get("/{namespace}/{name}/{version}/download/{os}/{arch}")
async def download_provider(
    namespace: str,
    name: str,
    version: str,
    os: str,
    arch: str,
    store: ProviderStore = Depends(get_provider_store),
) -> JSONResponse:
    """Download descriptor for one provider build."""
    download = await store.get_version(namespace, name, version, os, arch)
    return JSONResponse(content=ProviderDownloadResponse.from_download(download).model_dump())
