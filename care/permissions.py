"""
Role based permission helpers.
"""
ADMIN_ROLES = {"admin"}

def is_admin(user) -> bool:
    """True for users with an administrative role and for superusers."""
    return bool(user and user.is_authenticated and (getattr(user, "role", None) in ADMIN_ROLES or user.is_superuser))
