from .user import User
from .permission_module import PermissionModule
from .permission import Permission
from .user_permission import UserPermission
from .client import Client
from .supplier import Supplier
from .certificate import Certificate
from .standard import Standard
from .document import Document


__all__ = [
    "User",
    "PermissionModule",
    "Permission",
    "UserPermission",
    "Client",
    "Supplier",
    "Certificate",
    "Standard",
    "Document",
]
