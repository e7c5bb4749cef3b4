import uuid

from pydantic import BaseModel

# Resposta do endpoint de login
class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

# Dados contidos no JWT
class TokenPayload(BaseModel):
    sub: uuid.UUID
