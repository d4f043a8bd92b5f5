# Package initialization
# Import all models so every table is registered on Base.metadata
from .user import User
from .group import Group
from .resource import Resource
from .groups_user import GroupsUser
from .favorite import Favorite
from .comment import Comment
from .permission import Permission
from .secret import Secret
from .permission_history import PermissionHistory

__all__ = [
    "User",
    "Group",
    "Resource",
    "GroupsUser",
    "Favorite",
    "Comment",
    "Permission",
    "Secret",
    "PermissionHistory",
]
