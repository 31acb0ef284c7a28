"""Gallery router - the paginated labeling page."""

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from label_sorter.api.dependencies import get_controller, get_labeling_service
from label_sorter.api.services.labeling_service import LabelingService
from label_sorter.lifecycle import LifecycleController

router = APIRouter(tags=["gallery"])
logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


@router.get("/", response_class=HTMLResponse)
def render_page(
    request: Request,
    page: Optional[str] = Query(None, description="1-based page number"),
    controller: LifecycleController = Depends(get_controller),
    service: LabelingService = Depends(get_labeling_service)
):
    """Render one page of unlabeled images with a button per label."""
    with controller.request():
        try:
            current = service.get_page(page)
        except OSError as e:
            logger.error(f"Error reading images: {e}")
            raise HTTPException(status_code=500, detail="Failed to read images")

    return templates.TemplateResponse(
        request,
        "index.html",
        {"page": current, "labels": service.labels},
    )
