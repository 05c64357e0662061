from fastapi import APIRouter, Depends

from agenda.auth.dependencies import get_current_user, is_admin
from agenda.models.user import User

router = APIRouter(tags=['auth'])


@router.get("/me")
def me(current_user: User = Depends(get_current_user)):
    return {
        "email": current_user.email,
        "name": current_user.name,
        "role": current_user.role,
        "is_admin": is_admin(current_user),
    }
