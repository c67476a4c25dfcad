# backend/Auth/manage_users.py
import typer, getpass
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select
from tabulate import tabulate

from Auth import database
from Auth.models import User
from Auth.security import MIN_PASSWORD_LENGTH, hash_password
from Records.seed import seed as seed_records

ROLES = ("personnel", "supervisor", "admin", "commander")

cli = typer.Typer(help="District command user management")


def _ask_password(prompt: str) -> str:
    pwd = getpass.getpass(prompt)
    if len(pwd) < MIN_PASSWORD_LENGTH:
        typer.echo(f"❌ Password needs at least {MIN_PASSWORD_LENGTH} characters"); raise typer.Exit(1)
    return pwd


@cli.callback()
def main():
    database.init_db()


@cli.command()
def add(
    email: str = typer.Argument(...),
    first_name: str = typer.Option(..., help="Voornaam"),
    last_name: str = typer.Option(..., help="Achternaam"),
    role: str = typer.Option("personnel", help="Rol van de gebruiker"),
):
    """Add a new user."""
    if role not in ROLES:
        typer.echo(f"❌ Unknown role, pick one of {', '.join(ROLES)}"); raise typer.Exit(1)
    pwd = _ask_password("Password: ")
    with Session(database.engine) as s:
        if s.exec(select(User).where(User.email == email)).first():
            typer.echo("❌ Already exists"); raise typer.Exit(1)
        s.add(User(email=email, first_name=first_name, last_name=last_name,
                   password=hash_password(pwd), role=role))
        s.commit(); typer.echo("✅ Created")


@cli.command()
def passwd(email: str):
    """Change a password."""
    pwd = _ask_password("New password: ")
    with Session(database.engine) as s:
        user = s.exec(select(User).where(User.email == email)).first()
        if not user: typer.echo("❌ Not found"); raise typer.Exit(1)
        user.password = hash_password(pwd)
        s.add(user); s.commit(); typer.echo("🔑 Changed")


@cli.command()
def delete(email: str):
    """Delete a user."""
    with Session(database.engine) as s:
        user = s.exec(select(User).where(User.email == email)).first()
        if not user: typer.echo("❌ Not found"); raise typer.Exit(1)
        s.delete(user)
        try:
            s.commit()
        except IntegrityError:
            typer.echo("❌ Still linked to personnel, duties or alerts"); raise typer.Exit(1)
        typer.echo("🗑️  Deleted")


@cli.command("list")
def list_users(
    full: bool = typer.Option(False, help="Toon hashes erbij"),
    show_role: bool = typer.Option(True, help="Toon de role-kolom"),
):
    """List all users (id, email, name, role, optionally hash)."""
    cols = [User.id, User.email, User.first_name, User.last_name]
    headers = ["id", "email", "first_name", "last_name"]

    if show_role:
        cols.append(User.role)
        headers.append("role")

    if full:
        cols.append(User.password)
        headers.append("password")

    with Session(database.engine) as s:
        rows = s.exec(select(*cols)).all()

    typer.echo(tabulate(rows, headers=headers))


@cli.command()
def seed():
    """Load the district sample data."""
    with Session(database.engine) as s:
        added = seed_records(s)
    typer.echo(tabulate(sorted(added.items()), headers=["table", "added"]))


if __name__ == "__main__":
    cli()
