from app.models.user import User

MANAGER_ROLES = ("admin", "manager")


def is_manager_user(user: User) -> bool:
    """Administradores y responsables pueden registrar movimientos y editar el catálogo."""
    return user.role.lower() in MANAGER_ROLES
