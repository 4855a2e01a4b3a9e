import click
from flask.cli import FlaskGroup, with_appcontext
from app import create_app
from models import db
from models.users import User
from classes.validators import normalize_email


@click.group(cls=FlaskGroup, create_app=create_app)
def cli():
    """Management commands. Flask-Migrate's `db` group is available as well."""


@cli.command("create-db")
@with_appcontext
def create_db():
    """Create all tables without running migrations."""
    db.create_all()
    click.echo("Database tables created.")


@cli.command("reset-password")
@click.argument("email")
@click.argument("password")
@with_appcontext
def reset_password(email, password):
    """Set a new password for the user with EMAIL."""
    user = User.query.filter_by(email=normalize_email(email)).first()
    if not user:
        raise click.ClickException("User not found!")

    user.set_password(password)
    db.session.commit()
    click.echo("Password updated successfully!")


if __name__ == "__main__":
    cli()
