"""Goal snapshot endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from plate_nutrition.api.models import GoalSnapshotPayload

if TYPE_CHECKING:
    from plate_nutrition.containers import AppContainer

router = APIRouter(prefix="/goals", tags=["goals"])


def _get_push_token(request: Request) -> str | None:
    container: AppContainer = request.app.state.container
    return container.settings.goals_push_token


async def require_push_token(
    x_goals_token: str | None = Header(default=None),
    push_token: str | None = Depends(_get_push_token),
) -> None:
    """Ensure snapshot pushes carry the configured token."""
    if not push_token or not x_goals_token or x_goals_token != push_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.put("", dependencies=[Depends(require_push_token)])
async def replace_goals(
    payload: GoalSnapshotPayload, request: Request
) -> dict[str, object]:
    """Replace the goal snapshot as a whole."""
    container: AppContainer = request.app.state.container
    goals, daily = payload.to_domain()
    container.goal_store.replace(goals, daily)
    return {"status": "ok", "nutrients": len(goals)}


@router.get("")
async def current_goals(request: Request) -> dict[str, object]:
    """Return the goal snapshot currently in use."""
    container: AppContainer = request.app.state.container
    snapshot = container.goal_store.current()
    return {
        "daily": {
            "calories": snapshot.daily.calories,
            "protein": snapshot.daily.protein,
            "carbs": snapshot.daily.carbs,
            "fat": snapshot.daily.fat,
        },
        "nutrients": {
            slug: {
                "unit": goal.unit,
                "target": goal.target,
                "max": goal.max,
                "ideal_max": goal.ideal_max,
            }
            for slug, goal in snapshot.goals.items()
        },
        "received_at": (
            snapshot.received_at.isoformat() if snapshot.received_at else None
        ),
    }
