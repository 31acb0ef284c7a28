"""Labels router - assigning labels and reading label state."""

from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException
from fastapi.responses import PlainTextResponse

from label_sorter.api.dependencies import get_controller, get_labeling_service
from label_sorter.api.schemas.label import LabelChoice, SortingStatus
from label_sorter.api.services.labeling_service import LabelingService
from label_sorter.errors import ValidationError
from label_sorter.lifecycle import LifecycleController

router = APIRouter(tags=["labels"])


@router.post("/label", response_class=PlainTextResponse)
def assign_label(
    image: Optional[str] = Form(None),
    label: Optional[str] = Form(None),
    controller: LifecycleController = Depends(get_controller),
    service: LabelingService = Depends(get_labeling_service)
):
    """Move an image into the subfolder of the chosen label."""
    with controller.request():
        try:
            service.assign_label(image, label)
        except ValidationError as e:
            return PlainTextResponse(str(e), status_code=400)
        except OSError:
            return PlainTextResponse("Failed to move image", status_code=500)

    return PlainTextResponse("OK")


@router.get("/api/v1/labels", response_model=list[LabelChoice])
def list_labels(service: LabelingService = Depends(get_labeling_service)):
    """List label choices in index order."""
    return [LabelChoice(index=label.index, text=label.text) for label in service.labels]


@router.get("/api/v1/status", response_model=SortingStatus)
def get_status(
    controller: LifecycleController = Depends(get_controller),
    service: LabelingService = Depends(get_labeling_service)
):
    """Counts of unlabeled images and of files per label folder."""
    with controller.request():
        try:
            return service.status()
        except OSError:
            raise HTTPException(status_code=500, detail="Failed to read images")
