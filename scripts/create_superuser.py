import sys
from os.path import abspath, dirname

root_dir = dirname(dirname(abspath(__file__)))
sys.path.append(root_dir)

from sqlalchemy.orm import Session
from app.db.session import SessionLocal
from app.services.permission import permission_service
from app.services.user import user_service
from app.schemas.user import UserCreate
from app.schemas.enums import UserRoleEnum
from app.core.config import settings

def create_superuser():
    """
    Sincroniza o catálogo de permissões e cria o administrador definido no .env.
    """
    db: Session = SessionLocal()

    print("--- Iniciando criação do superusuário ---")

    try:
        # 1. Catálogo de módulos e permissões
        result = permission_service.sync_catalog(db)
        db.commit()
        print(f"Catálogo sincronizado: {result['created']} criados, {result['updated']} atualizados.")

        # 2. Credenciais do .env
        admin_email = settings.SUPERUSER_EMAIL
        admin_password = settings.SUPERUSER_PASSWORD

        if not all([admin_email, admin_password]):
            print("!!! ERRO: defina SUPERUSER_EMAIL e SUPERUSER_PASSWORD no arquivo .env. !!!")
            return

        # 3. Administrador
        if user_service.get_by_email(db, email=admin_email):
            print(f"O superusuário '{admin_email}' já existe.")
            return

        print(f"Criando superusuário: {admin_email}")
        superuser_in = UserCreate(
            name="Administrador",
            email=admin_email,
            password=admin_password,
            role=UserRoleEnum.ADMIN,
        )
        user_service.create(db, obj_in=superuser_in)
        db.commit()
        print("Superusuário criado com sucesso!")

    except Exception as e:
        db.rollback()
        print(f"Ocorreu um erro: {e}")
        raise
    finally:
        print("--- Script finalizado ---")
        db.close()

if __name__ == "__main__":
    create_superuser()
