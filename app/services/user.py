import logging
from typing import List, Optional
from datetime import datetime, timezone

from sqlalchemy.orm import Session
from sqlalchemy import select
from fastapi import HTTPException, status

from app.core.password import verify_password, get_password_hash
from app.core.permissions import USER_STATUS_ATIVO
from app.models.user import User
from app.schemas.enums import UserStatusEnum
from app.schemas.user import UserCreate, UserStatusUpdate

from .base_service import BaseService

logger = logging.getLogger(__name__)

class UserService(BaseService[User, UserCreate, UserStatusUpdate]):
    """
    Serviço de usuários: criação com hash de senha, autenticação e status.
    """
    display_name = "Usuário"

    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        statement = select(self.model).where(self.model.email == email.lower())
        return db.execute(statement).scalar_one_or_none()

    def get_multi(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[User]:
        statement = select(self.model).order_by(self.model.name).offset(skip).limit(limit)
        return list(db.execute(statement).scalars().all())

    def create(self, db: Session, *, obj_in: UserCreate) -> User:
        """
        Cria um usuário. E-mail duplicado gera 409.
        NÃO faz db.commit().
        """
        if self.get_by_email(db, email=obj_in.email):
            logger.warning(f"Tentativa de criar usuário com e-mail duplicado: {obj_in.email}")
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Já existe um usuário com esse e-mail.")

        create_data = obj_in.model_dump()
        plain_password = create_data.pop("password")
        create_data["email"] = create_data["email"].lower()
        create_data["role"] = obj_in.role.value
        create_data["status"] = obj_in.status.value
        create_data["hashed_password"] = get_password_hash(plain_password)

        db_obj = self.model(**create_data)
        db.add(db_obj)
        logger.info(f"Usuário '{db_obj.email}' preparado para criação (papel: {db_obj.role}).")
        return db_obj

    def set_status(self, db: Session, *, user: User, new_status: UserStatusEnum) -> User:
        """Ativa ou desativa um usuário. NÃO faz db.commit()."""
        user.status = new_status.value
        db.add(user)
        logger.info(f"Status do usuário '{user.email}' alterado para '{new_status.value}'.")
        return user

    def authenticate(self, db: Session, *, email: str, password: str) -> Optional[User]:
        user = self.get_by_email(db, email=email)
        if not user:
            logger.warning(f"Login falhou: usuário '{email}' não encontrado.")
            return None
        if not verify_password(password, user.hashed_password):
            logger.warning(f"Login falhou: senha incorreta para '{email}'.")
            return None
        return user

    def is_active(self, user: User) -> bool:
        return user.status == USER_STATUS_ATIVO

    def handle_successful_login(self, db: Session, *, user: User) -> None:
        """Registra o último login. NÃO faz db.commit()."""
        user.last_login = datetime.now(timezone.utc)
        db.add(user)
        logger.info(f"Login bem-sucedido registrado para {user.email}.")

user_service = UserService(User)
