"""Goal Routes — create, read, full-replace and delete goals."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from jarbas.api.dependencies import get_goal_registrar
from jarbas.schemas.goal import GoalCreate, GoalResponse, GoalUpdate
from jarbas.services.goal_registrar import GoalRegistrar

router = APIRouter(prefix="/api/v1/goals", tags=["goals"])


@router.post(
    "", response_model=GoalResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_goal(
    body: GoalCreate,
    registrar: GoalRegistrar = Depends(get_goal_registrar),
):
    goal = await registrar.create_goal(body.model_dump())
    return GoalResponse.model_validate(goal)


@router.get("/user/{user_id}", response_model=list[GoalResponse])
async def list_user_goals(
    user_id: UUID,
    registrar: GoalRegistrar = Depends(get_goal_registrar),
):
    goals = await registrar.list_goals(user_id)
    return [GoalResponse.model_validate(g) for g in goals]


@router.get("/{goal_id}", response_model=GoalResponse)
async def get_goal(
    goal_id: int,
    registrar: GoalRegistrar = Depends(get_goal_registrar),
):
    goal = await registrar.get_goal(goal_id)
    return GoalResponse.model_validate(goal)


@router.put("/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_goal(
    goal_id: int,
    body: GoalUpdate,
    registrar: GoalRegistrar = Depends(get_goal_registrar),
):
    """Replace the goal's editable fields. Body id must match the path."""
    await registrar.update_goal(
        goal_id, body.id, body.model_dump(exclude={"id"}),
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{goal_id}", response_model=GoalResponse)
async def delete_goal(
    goal_id: int,
    registrar: GoalRegistrar = Depends(get_goal_registrar),
):
    goal = await registrar.delete_goal(goal_id)
    return GoalResponse.model_validate(goal)
