from .common import Msg

# Token e autenticação
from .token import Token, TokenPayload
from .identity import SessionIdentity

# Usuários e permissões
from .user import User, UserCreate, UserStatusUpdate, UserWithPermissions
from .permission import (
    PermissionModule,
    Permission,
    UserPermission,
    PermissionToggle,
    PermissionToggleResult,
    PermissionCheck,
)

# Cadastros com CNPJ
from .client import Client, ClientCreate, ClientUpdate, ClientSimple
from .supplier import Supplier, SupplierCreate, SupplierUpdate

# Entidades com vencimento
from .certificate import Certificate, CertificateCreate, CertificateUpdate
from .standard import Standard, StandardCreate, StandardUpdate
from .document import Document, DocumentCreate, DocumentUpdate

from .enums import (
    ValidityStatus,
    UserRoleEnum,
    UserStatusEnum,
    RegistrationStatusEnum,
)
