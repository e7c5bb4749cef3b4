import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status, Request
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from app.api import deps
from app.core import security
from app.schemas.token import Token
from app.services.user import user_service

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/login/access-token", response_model=Token)
def login_access_token(
    request: Request,
    db: Session = Depends(deps.get_db),
    form_data: OAuth2PasswordRequestForm = Depends()
) -> Any:
    """
    Login OAuth2 (campo `username` recebe o e-mail). Devolve um token de acesso.
    """
    ip_address = request.client.host if request.client else "N/A"
    logger.info(f"Tentativa de login para '{form_data.username}' a partir de {ip_address}")

    user = user_service.authenticate(db, email=form_data.username, password=form_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="E-mail ou senha incorretos.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not user_service.is_active(user):
        logger.warning(f"Login recusado: usuário inativo '{user.email}'.")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Usuário inativo.")

    user_service.handle_successful_login(db, user=user)
    db.commit()
    return {"access_token": security.create_access_token(subject=user.id), "token_type": "bearer"}
