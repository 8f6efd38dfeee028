from fastapi.routing import APIRouter

router = APIRouter(
    tags=["health"],
)


@router.get("/health")
async def health_check():
    """
    Liveness endpoint.

    Returns:
        dict: A static status body.
    """
    return {"status": "healthy"}


@router.get("/ready")
async def readiness_check():
    """
    Readiness endpoint. Backends are not probed here.

    Returns:
        dict: A static status body.
    """
    return {"status": "ready"}
