"""Service objects API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, status

from shared.models import ServiceObjectsRequest, ServiceObjectsResponse
from shared.observability import RequestContextManager, get_logger

from ..services.errors import UnrecognisedResourceTypeError
from ..services.fanout import KubernetesFanOutHandler

logger = get_logger(__name__)

router = APIRouter()


def get_fanout_handler(request: Request) -> KubernetesFanOutHandler:
    """Get the fan-out handler built at startup."""
    return request.app.state.fanout_handler


@router.post(
    "/services/{service_id}",
    response_model=ServiceObjectsResponse,
    summary="List a service's Kubernetes objects",
    description=(
        "List the objects labelled with the service id on every cluster the "
        "service may run on. Failures are reported per cluster and resource type."
    ),
)
async def get_service_objects(
    request: Request,
    service_id: str,
    body: ServiceObjectsRequest | None = None,
):
    """List objects of a service across clusters."""
    handler = get_fanout_handler(request)
    object_types = body.object_types if body is not None else None

    async with RequestContextManager(service_id=service_id):
        try:
            return await handler.get_kubernetes_objects_by_service_id(
                service_id, object_types
            )
        except UnrecognisedResourceTypeError as e:
            logger.warning("Rejected unrecognised resource type", type=str(e.type_name))
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"error": "UNRECOGNISED_TYPE", "message": str(e)},
            )
