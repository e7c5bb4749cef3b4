import logging
from typing import Iterable

from sqlalchemy.orm import Session

from app.schemas.identity import SessionIdentity
from .permission import permission_service

logger = logging.getLogger(__name__)


class AuthorizationChecker:
    """
    Decide se uma identidade pode executar a ação identificada por um código.

    Ordem de avaliação:
      1. admin sempre pode;
      2. usuário inativo nunca pode;
      3. código fora do catálogo armazenado é negado e registrado como erro;
      4. caso contrário, o código precisa estar nas concessões.
    """

    def is_allowed(self, db: Session, identity: SessionIdentity, required_code: str) -> bool:
        if identity.is_admin:
            return True
        if not identity.is_active:
            logger.warning(f"Acesso negado: usuário {identity.user_id} está '{identity.status}'.")
            return False
        if not permission_service.is_known_code(db, code=required_code):
            logger.error(f"Código de permissão desconhecido verificado: '{required_code}'.")
            return False
        allowed = required_code in identity.grants
        if not allowed:
            logger.warning(f"Acesso negado: usuário {identity.user_id} sem a permissão '{required_code}'.")
        return allowed

    def is_allowed_any(self, db: Session, identity: SessionIdentity, codes: Iterable[str]) -> bool:
        """Semântica OU: basta um dos códigos ser permitido."""
        if identity.is_admin:
            return True
        if not identity.is_active:
            logger.warning(f"Acesso negado: usuário {identity.user_id} está '{identity.status}'.")
            return False
        codes = list(codes)
        for code in codes:
            if not permission_service.is_known_code(db, code=code):
                logger.error(f"Código de permissão desconhecido verificado: '{code}'.")
                continue
            if code in identity.grants:
                return True
        logger.warning(f"Acesso negado: usuário {identity.user_id} sem nenhuma das permissões {codes}.")
        return False


authorization_checker = AuthorizationChecker()
