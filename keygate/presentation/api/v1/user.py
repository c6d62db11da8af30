from fastapi import APIRouter, Depends

from ....domain.session import Principal
from ....infrastructure.repositories import UserRepository
from ...schemas.user import UserInfoResponse
from ..deps import get_user_repository, require_principal

router = APIRouter()


@router.get("/get-info", response_model=UserInfoResponse)
async def get_info(
    principal: Principal = Depends(require_principal),
    users: UserRepository = Depends(get_user_repository),
) -> UserInfoResponse:
    """
    プリンシパルのprefixに属するユーザー一覧
    """
    rows = await users.list_profiles(principal.prefix)
    return UserInfoResponse(data=rows)
