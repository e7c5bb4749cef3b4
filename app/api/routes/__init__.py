from fastapi import APIRouter

from . import auth, usuarios, permissoes, cnpj
from . import clientes, fornecedores, certificados, padroes, documentos

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(usuarios.router, prefix="/usuarios", tags=["Usuários"])
api_router.include_router(permissoes.router, prefix="/permissoes", tags=["Permissões"])
api_router.include_router(cnpj.router, prefix="/cnpj", tags=["CNPJ"])
api_router.include_router(clientes.router, prefix="/clientes", tags=["Clientes"])
api_router.include_router(fornecedores.router, prefix="/fornecedores", tags=["Fornecedores"])
api_router.include_router(certificados.router, prefix="/certificados", tags=["Certificados"])
api_router.include_router(padroes.router, prefix="/padroes", tags=["Padrões"])
api_router.include_router(documentos.router, prefix="/documentos", tags=["Documentos"])
