"""FastAPI application entry point."""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles

from label_sorter import __version__
from label_sorter.api.routers import gallery, labels
from label_sorter.api.schemas.label import HealthStatus
from label_sorter.config import LabelerConfig
from label_sorter.errors import ServiceUnavailableError
from label_sorter.lifecycle import LifecycleController, LifecycleState

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[LabelerConfig] = None,
    controller: Optional[LifecycleController] = None
) -> FastAPI:
    """
    Build the labeling application.

    Args:
        config: Settings to serve with (defaults when omitted)
        controller: An already started controller; a new one is created
            and started on application startup when omitted

    Returns:
        FastAPI app whose shutdown hook writes the result archive
    """
    if controller is None:
        controller = LifecycleController(config or LabelerConfig())
    config = controller.config

    app = FastAPI(
        title="Label Sorter",
        description="Sort a folder of images into label subfolders",
        version=__version__
    )
    app.state.controller = controller

    app.include_router(gallery.router)
    app.include_router(labels.router)
    app.mount(
        "/images",
        StaticFiles(directory=str(config.images_dir), check_dir=False),
        name="images"
    )

    @app.exception_handler(ServiceUnavailableError)
    def service_unavailable(request: Request, exc: ServiceUnavailableError):
        return PlainTextResponse(str(exc), status_code=503)

    @app.on_event("startup")
    def startup():
        """Load labels and reset label folders."""
        if controller.state is LifecycleState.STARTING:
            logger.info("Starting Label Sorter")
            controller.start()

    @app.on_event("shutdown")
    def shutdown():
        """Archive the label folders on the way out."""
        controller.drain()

    @app.get("/health", response_model=HealthStatus)
    def health_check():
        """Health check endpoint."""
        return {"status": "ok", "state": controller.state.value}

    return app
