from fastapi import Request

from ..services.estimate_service import EstimateService


def get_estimate_service(request: Request) -> EstimateService:
    """
    Resolve the EstimateService from FastAPI app state.
    """
    svc = getattr(request.app.state, "estimate_service", None)
    if svc is None:
        raise RuntimeError("EstimateService is not initialized in app.state.estimate_service")
    return svc
