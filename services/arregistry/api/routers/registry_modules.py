"""Module registry protocol endpoints (what `terraform init` speaks for modules).

    GET /v1/modules/{namespace}/{name}/{system}/versions
    GET /v1/modules/{namespace}/{name}/{system}/{version}/download
"""

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from arregistry.api.dependencies import get_module_store
from arregistry.api.schemas import ModuleVersionsResponse
from arregistry.logging_config import get_logger
from arregistry.registry import ModuleStore

router = APIRouter(prefix="/v1/modules", tags=["modules"])
logger = get_logger(__name__)


@router.get("/{namespace}/{name}/{system}/versions")
async def list_module_versions(
    namespace: str,
    name: str,
    system: str,
    store: ModuleStore = Depends(get_module_store),
) -> JSONResponse:
    """List available versions of a module."""
    versions = await store.list_versions(namespace, name, system)
    return JSONResponse(content=ModuleVersionsResponse.from_versions(versions).model_dump())


@router.get("/{namespace}/{name}/{system}/{version}/download", status_code=204)
async def download_module(
    namespace: str,
    name: str,
    system: str,
    version: str,
    store: ModuleStore = Depends(get_module_store),
) -> Response:
    """Point the client at the module archive via `X-Terraform-Get`."""
    module_version = store.get_version(namespace, name, system, version)
    logger.debug(
        "Module download location",
        namespace=namespace,
        name=name,
        system=system,
        version=version,
        source_url=module_version.source_url,
    )
    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers={"X-Terraform-Get": module_version.source_url},
    )
