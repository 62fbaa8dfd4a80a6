"""Directory and profile endpoints."""
from fastapi import APIRouter, Depends, Query, status

from skillbridge.core.security import get_current_user
from skillbridge.interfaces.http.deps import get_user_service
from skillbridge.modules.users import UNSET, CertificationInput, ProfileUpdateInput, User, UserService
from skillbridge.schemas import (
    AvatarRequest,
    CertificationRequest,
    ProfileUpdateRequest,
    SkillRequest,
    UserListResponse,
    UserResponse,
)

router = APIRouter()


def _to_response(user: User) -> UserResponse:
    return UserResponse.model_validate(user)


@router.get("/me", response_model=UserResponse, summary="Current user's profile")
async def read_me(user: User = Depends(get_current_user)) -> UserResponse:
    return _to_response(user)


@router.patch("/me", response_model=UserResponse, summary="Update profile fields")
async def update_me(
    payload: ProfileUpdateRequest,
    user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    provided = payload.model_fields_set
    update = ProfileUpdateInput(
        **{name: getattr(payload, name) if name in provided else UNSET for name in ProfileUpdateRequest.model_fields}
    )
    return _to_response(await service.update_profile(user.id, update))


@router.get("", response_model=UserListResponse, summary="Browse other users")
async def list_users(
    limit: int = Query(100, ge=1, le=200),
    user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserListResponse:
    users = await service.list_users(exclude_id=user.id, limit=limit)
    return UserListResponse(total=len(users), users=[_to_response(item) for item in users])


@router.put("/me/avatar", response_model=UserResponse, summary="Set avatar reference")
async def set_avatar(
    payload: AvatarRequest,
    user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return _to_response(await service.set_avatar(user.id, payload.url, payload.public_id))


@router.delete("/me/avatar", response_model=UserResponse, summary="Remove avatar reference")
async def clear_avatar(
    user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return _to_response(await service.clear_avatar(user.id))


@router.post(
    "/me/skills/teaching",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a skill the user can teach",
)
async def add_teaching_skill(
    payload: SkillRequest,
    user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return _to_response(await service.add_teaching_skill(user.id, payload.name))


@router.delete("/me/skills/teaching/{skill_id}", response_model=UserResponse, summary="Remove a teaching skill")
async def remove_teaching_skill(
    skill_id: str,
    user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return _to_response(await service.remove_teaching_skill(user.id, skill_id))


@router.post(
    "/me/skills/learning",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a learning goal",
)
async def add_learning_goal(
    payload: SkillRequest,
    user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return _to_response(await service.add_learning_goal(user.id, payload.name))


@router.delete("/me/skills/learning/{name}", response_model=UserResponse, summary="Remove a learning goal")
async def remove_learning_goal(
    name: str,
    user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return _to_response(await service.remove_learning_goal(user.id, name))


@router.post(
    "/me/certifications",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Attach a certification",
)
async def add_certification(
    payload: CertificationRequest,
    user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    certification = CertificationInput(**payload.model_dump())
    return _to_response(await service.add_certification(user.id, certification))


@router.delete("/me/certifications/{cert_id}", response_model=UserResponse, summary="Remove a certification")
async def remove_certification(
    cert_id: str,
    user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return _to_response(await service.remove_certification(user.id, cert_id))


@router.get("/{user_id}", response_model=UserResponse, summary="Public profile of a user")
async def read_user(
    user_id: str,
    _: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return _to_response(await service.require(user_id))
