from fastapi import Depends, HTTPException, status
from app.models.user import User
from app.routers.auth import get_current_user, get_token_claims
from app.utils.validation import MANAGER_ROLES


def require_roles(*roles: str):
    """Dependencia que exige que el rol firmado en el token esté entre `roles`."""

    def _checker(
        claims: dict = Depends(get_token_claims),
        user: User = Depends(get_current_user),
    ) -> User:
        if claims.get("role") not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="No tienes permisos para realizar esta acción.",
            )
        return user

    return _checker


require_admin = require_roles("admin")
require_manager = require_roles(*MANAGER_ROLES)
