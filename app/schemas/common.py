from pydantic import BaseModel

class Msg(BaseModel):
    """Schema genérico para mensagens de resposta."""
    msg: str
