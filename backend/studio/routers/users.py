from fastapi import APIRouter, Depends

from ..deps import get_storage
from ..errors import NotFoundError
from ..schemas import UserOut
from ..storage import Storage

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/{user_id}", response_model=UserOut)
async def get_user(user_id: int, storage: Storage = Depends(get_storage)):
    user = storage.get_user(user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    # The stored password hash never leaves the store
    return UserOut(id=user.id, username=user.username)
