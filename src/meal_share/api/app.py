"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import FastAPI, File, Form, HTTPException, Request, UploadFile, status

from meal_share.api.schemas import MealListResponse, MealResponse
from meal_share.app_logging import configure_logging
from meal_share.containers import AppContainer
from meal_share.domain.errors import (
    DuplicateSlugError,
    ImageExistsError,
    MealListingError,
    StoreError,
    ValidationError,
)
from meal_share.domain.meals import MealDraft


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/meals")
    def list_meals(request: Request) -> MealListResponse:
        """Return the community meal feed."""
        state_container: AppContainer = request.app.state.container
        try:
            meals = state_container.meal_service.list_meals()
        except MealListingError as exc:
            logger.exception("Loading meals failed")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Loading meals failed.",
            ) from exc
        base_url = state_container.settings.image_base_url
        return MealListResponse(
            meals=[MealResponse.from_meal(meal, base_url) for meal in meals]
        )

    @app.get("/meals/{slug}")
    def meal_detail(slug: str, request: Request) -> MealResponse:
        """Return one meal by slug."""
        state_container: AppContainer = request.app.state.container
        try:
            meal = state_container.meal_service.get_meal(slug)
        except StoreError as exc:
            logger.exception("Loading meal failed", extra={"slug": slug})
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Loading meal failed.",
            ) from exc
        if meal is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Meal not found."
            )
        return MealResponse.from_meal(meal, state_container.settings.image_base_url)

    @app.post("/meals", status_code=status.HTTP_201_CREATED)
    def share_meal(  # noqa: PLR0913
        request: Request,
        title: Annotated[str, Form()],
        summary: Annotated[str, Form()],
        instructions: Annotated[str, Form()],
        creator: Annotated[str, Form()],
        creator_email: Annotated[str, Form()],
        image: Annotated[UploadFile, File()],
    ) -> MealResponse:
        """Store a submitted meal and its image."""
        state_container: AppContainer = request.app.state.container
        draft = MealDraft(
            title=title,
            summary=summary,
            instructions=instructions,
            creator=creator,
            creator_email=creator_email,
            image_bytes=image.file.read(),
            image_file_name=image.filename or "",
            image_content_type=image.content_type or "application/octet-stream",
        )
        try:
            meal = state_container.meal_service.save_meal(draft)
        except ValidationError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        except (DuplicateSlugError, ImageExistsError) as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="A meal with this title already exists.",
            ) from exc
        except StoreError as exc:
            logger.exception("Saving meal failed", extra={"title": title})
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Saving meal failed.",
            ) from exc
        return MealResponse.from_meal(meal, state_container.settings.image_base_url)

    return app
