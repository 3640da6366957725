"""Service discovery endpoints.

    GET /                          plain-text banner
    GET /.well-known/terraform.json  module/provider protocol base paths
"""

from fastapi import APIRouter, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse

from arregistry.api.schemas import DiscoveryResponse

router = APIRouter(tags=["discovery"])

BANNER = "Terraform Registry based on GCP Artifact Registry\n"


@router.get("/", response_class=PlainTextResponse)
async def index() -> str:
    return BANNER


@router.get("/.well-known/{name}", response_model=None)
async def service_discovery(name: str) -> Response:
    """Discovery document; only `terraform.json` is served."""
    if name != "terraform.json":
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return JSONResponse(content=DiscoveryResponse().model_dump(by_alias=True))
