import sys
import argparse
from os.path import abspath, dirname
from getpass import getpass

root_dir = dirname(dirname(abspath(__file__)))
sys.path.append(root_dir)

from fastapi import HTTPException

from app.db.session import SessionLocal
from app.services import permission_service, user_service
from app.schemas.user import UserCreate
from app.schemas.enums import UserRoleEnum

ROLES_PERMITIDOS = [role.value for role in UserRoleEnum]

# --- Usuários ---

def create_user(db, nome: str, email: str, papel: str):
    """Cria um usuário pedindo a senha no terminal."""
    print(f"Criando usuário: {email}")
    if user_service.get_by_email(db, email=email):
        print(f"❌ Erro: já existe um usuário com o e-mail '{email}'.")
        return
    password = getpass("Senha do novo usuário: ")
    if not password or len(password) < 8:
        print("❌ Erro: a senha deve ter ao menos 8 caracteres.")
        return
    try:
        user_in = UserCreate(name=nome, email=email, password=password, role=UserRoleEnum(papel))
        user_service.create(db, obj_in=user_in)
        db.commit()
        print(f"✅ Usuário '{email}' criado com papel '{papel}'.")
    except Exception as e:
        db.rollback()
        print(f"❌ Erro inesperado ao criar o usuário: {e}")

def delete_user(db, email: str):
    user = user_service.get_by_email(db, email=email)
    if not user:
        print(f"⚠️ Nenhum usuário com o e-mail '{email}'.")
        return
    db.delete(user)
    db.commit()
    print(f"✅ Usuário '{email}' removido.")

def list_users(db):
    print("\n--- USUÁRIOS ---")
    all_users = user_service.get_multi(db, skip=0, limit=1000)
    if not all_users:
        print("-> Nenhum usuário cadastrado.")
        return
    print(f"{'PAPEL':<10} | {'STATUS':<8} | {'E-MAIL'}")
    print("-" * 70)
    for user in all_users:
        print(f"{user.role:<10} | {user.status:<8} | {user.email}")
    print("-" * 70)
    print(f"Total: {len(all_users)} usuários.")

# --- Permissões ---

def list_permissions(db, email: str):
    user = user_service.get_by_email(db, email=email)
    if not user:
        print(f"⚠️ Nenhum usuário com o e-mail '{email}'.")
        return
    print(f"\n--- PERMISSÕES DE {email} ---")
    for item in permission_service.list_for_user(db, user.id):
        mark = "x" if item["granted"] else " "
        print(f"[{mark}] {item['code']:<32} {item['module_name']}")

def set_permission(db, email: str, code: str, granted: bool):
    """Concede ou revoga um código de permissão."""
    user = user_service.get_by_email(db, email=email)
    permission = permission_service.get_by_code(db, code=code)
    if not user or not permission:
        print("❌ Erro: usuário ou código de permissão não encontrado.")
        return
    try:
        permission_service.toggle(db, user_id=user.id, permission_id=permission.id, granted=granted)
        db.commit()
    except HTTPException as e:
        db.rollback()
        print(f"❌ Erro: {e.detail}")
        return
    print(f"✅ '{code}' {'concedida a' if granted else 'revogada de'} '{email}'.")

def sync_catalog(db):
    result = permission_service.sync_catalog(db)
    db.commit()
    print(f"✅ Catálogo sincronizado: {result['created']} criados, {result['updated']} atualizados, {result['orphans']} órfãos.")

# --- CLI ---

def main():
    parser = argparse.ArgumentParser(description="Ferramenta de linha de comando para administração do sistema.")
    subparsers = parser.add_subparsers(dest="command", help="Comandos disponíveis", required=True)

    parser_create = subparsers.add_parser("create", help="Criar um usuário.")
    parser_create.add_argument("--nome", type=str, required=True, help="Nome completo.")
    parser_create.add_argument("--email", type=str, required=True, help="E-mail do usuário.")
    parser_create.add_argument("--papel", type=str, default="cliente", choices=ROLES_PERMITIDOS, help="Papel do usuário.")

    parser_delete = subparsers.add_parser("delete", help="Remover um usuário.")
    parser_delete.add_argument("--email", type=str, required=True)

    subparsers.add_parser("list-users", help="Listar usuários.")

    parser_perms = subparsers.add_parser("list-permissions", help="Listar permissões de um usuário.")
    parser_perms.add_argument("--email", type=str, required=True)

    for name, help_text in (("grant", "Conceder permissão."), ("revoke", "Revogar permissão.")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--email", type=str, required=True)
        sub.add_argument("--code", type=str, required=True, help="Código, ex.: certificates.view")

    subparsers.add_parser("sync-catalog", help="Sincronizar o catálogo de permissões.")

    args = parser.parse_args()
    db = SessionLocal()
    try:
        if args.command == "create":
            create_user(db, nome=args.nome, email=args.email, papel=args.papel)
        elif args.command == "delete":
            delete_user(db, email=args.email)
        elif args.command == "list-users":
            list_users(db)
        elif args.command == "list-permissions":
            list_permissions(db, email=args.email)
        elif args.command == "grant":
            set_permission(db, email=args.email, code=args.code, granted=True)
        elif args.command == "revoke":
            set_permission(db, email=args.email, code=args.code, granted=False)
        elif args.command == "sync-catalog":
            sync_catalog(db)
    finally:
        db.close()

if __name__ == "__main__":
    main()
