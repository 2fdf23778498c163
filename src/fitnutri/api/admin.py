"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import (
    APIRouter,
    Depends,
    Header,
    HTTPException,
    Query,
    Request,
    status,
)

from fitnutri.adapters.codec import recipe_to_dict, report_to_dict
from fitnutri.api.schemas import StatusUpdateRequest
from fitnutri.domain.recipes import RecipeStatus, ReportStatus

if TYPE_CHECKING:
    from fitnutri.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/recipes", dependencies=[Depends(require_admin)])
async def list_recipes(
    request: Request,
    recipe_status: RecipeStatus | None = Query(default=None, alias="status"),
) -> dict[str, object]:
    """Return recipes, by default every status."""
    container: AppContainer = request.app.state.container
    recipes = container.recipe_service.list_recipes(recipe_status)
    return {"recipes": [recipe_to_dict(recipe) for recipe in recipes]}


@router.put("/recipes/{recipe_id}/status", dependencies=[Depends(require_admin)])
async def update_recipe_status(
    recipe_id: str, payload: StatusUpdateRequest, request: Request
) -> dict[str, object]:
    """Overwrite a recipe's moderation status."""
    return _moderate(request, recipe_id, payload.status)


@router.post("/recipes/{recipe_id}/approve", dependencies=[Depends(require_admin)])
async def approve_recipe(recipe_id: str, request: Request) -> dict[str, object]:
    """Publish a recipe."""
    return _moderate(request, recipe_id, RecipeStatus.APPROVED)


@router.post("/recipes/{recipe_id}/reject", dependencies=[Depends(require_admin)])
async def reject_recipe(recipe_id: str, request: Request) -> dict[str, object]:
    """Reject a recipe."""
    return _moderate(request, recipe_id, RecipeStatus.REJECTED)


@router.get("/reports", dependencies=[Depends(require_admin)])
async def list_reports(
    request: Request,
    report_status: ReportStatus | None = Query(default=None, alias="status"),
) -> dict[str, object]:
    """Return recipe reports."""
    container: AppContainer = request.app.state.container
    reports = container.recipe_service.list_reports(report_status)
    return {"reports": [report_to_dict(report) for report in reports]}


@router.post("/reports/{report_id}/reviewed", dependencies=[Depends(require_admin)])
async def mark_report_reviewed(report_id: str, request: Request) -> dict[str, object]:
    """Mark a report as reviewed."""
    container: AppContainer = request.app.state.container
    report = container.recipe_service.mark_report_reviewed(report_id)
    if report is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return report_to_dict(report)


def _moderate(
    request: Request, recipe_id: str, new_status: RecipeStatus
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    recipe = container.recipe_service.update_recipe_status(recipe_id, new_status)
    if recipe is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return recipe_to_dict(recipe)
