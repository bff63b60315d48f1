# gagyebu/models/user.py
# Note: User is defined in core/auth.py next to the fastapi-users setup.
# Import it from there; this module only re-exports it for model discovery.

from gagyebu.core.auth import User

__all__ = ["User"]
