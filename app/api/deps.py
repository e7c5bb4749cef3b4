from typing import Generator, Iterable, Union
import logging

from fastapi import Depends, HTTPException, status, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core import security
from app.core.permissions import PermissionCode, is_catalog_code
from app.db.session import SessionLocal
from app.models.user import User
from app.schemas.identity import SessionIdentity
from app.services.authorization import authorization_checker
from app.services.permission import permission_service
from app.services.user import user_service

logger = logging.getLogger(__name__)

FORBIDDEN_DETAIL = "Permissão insuficiente para esta ação."


# --- Sessão de banco ---
def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# --- Autenticação ---
reusable_oauth2 = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_STR}/auth/login/access-token"
)

def get_current_user(
    db: Session = Depends(get_db), token: str = Depends(reusable_oauth2)
) -> User:
    """Resolve o usuário a partir do token JWT."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Não foi possível validar as credenciais",
        headers={"WWW-Authenticate": "Bearer"},
    )
    token_data = security.decode_access_token(token)
    if not token_data or not token_data.sub:
        logger.warning("Token JWT inválido ou sem 'sub'.")
        raise credentials_exception

    user = db.get(User, token_data.sub)
    if not user:
        logger.warning(f"Usuário {token_data.sub} do token não existe mais.")
        raise credentials_exception
    return user

def get_current_active_user(
    current_user: User = Depends(get_current_user),
) -> User:
    if not user_service.is_active(current_user):
        logger.warning(f"Acesso negado: usuário inativo {current_user.email} (ID: {current_user.id}).")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Usuário inativo.")
    return current_user

def get_session_identity(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> SessionIdentity:
    """
    Identidade explícita da requisição, com as concessões lidas agora do banco.
    """
    grants = permission_service.grants_for(db, current_user.id)
    return SessionIdentity(
        user_id=current_user.id,
        role=current_user.role,
        status=current_user.status,
        grants=frozenset(grants),
    )


class PermissionChecker:
    """
    Dependência que exige AO MENOS UM dos códigos informados (lógica OU).

    Códigos fora de `PermissionCode` são recusados na construção, ou seja,
    quando o módulo de rotas é importado.
    """
    def __init__(self, required_permissions: Union[str, PermissionCode, Iterable[Union[str, PermissionCode]]]):
        if isinstance(required_permissions, (str, PermissionCode)):
            required_permissions = [required_permissions]
        codes = [getattr(code, "value", code) for code in required_permissions]

        if not codes:
            raise ValueError("O conjunto de permissões exigidas não pode ser vazio.")
        unknown = [code for code in codes if not is_catalog_code(code)]
        if unknown:
            raise ValueError(f"Códigos de permissão desconhecidos: {unknown}")
        self.required_permissions = codes

    def __call__(
        self,
        request: Request,
        db: Session = Depends(get_db),
        identity: SessionIdentity = Depends(get_session_identity),
    ) -> SessionIdentity:
        if not authorization_checker.is_allowed_any(db, identity, self.required_permissions):
            logger.warning(
                f"Acesso negado ao usuário {identity.user_id} em '{request.url.path}'. "
                f"Exigidas (uma de): {self.required_permissions}."
            )
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN_DETAIL)
        return identity
