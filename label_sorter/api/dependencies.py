"""Dependencies for FastAPI route handlers."""

from fastapi import Depends, Request

from label_sorter.api.services.labeling_service import LabelingService
from label_sorter.lifecycle import LifecycleController


def get_controller(request: Request) -> LifecycleController:
    """Dependency for FastAPI to get the process-wide lifecycle controller."""
    return request.app.state.controller


def get_labeling_service(
    controller: LifecycleController = Depends(get_controller)
) -> LabelingService:
    return LabelingService(controller)
