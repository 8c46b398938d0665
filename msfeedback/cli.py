import click
from flask.cli import with_appcontext

from msfeedback.models.external_system import ExternalSystem
from msfeedback.services import external_service
from msfeedback.services.seed_service import seed_defaults
from msfeedback.utils.enums import Permission
from msfeedback.utils.errors import NotFoundError

PERMISSION_CHOICES = [p.value for p in Permission]


def _system_or_fail(name: str):
    try:
        return external_service.get_system(name)
    except NotFoundError as exc:
        raise click.ClickException(exc.message)


@click.command("seed")
@with_appcontext
def seed():
    """Create tables, the default external system, its key and categories."""
    result = seed_defaults()
    system = result["system"]
    click.echo(f"External system: {system.name} (id={system.id}, {'created' if result['created_system'] else 'exists'})")
    click.echo(f"Default API key: {'created' if result['created_key'] else 'exists'}")
    click.echo(f"Categories added: {result['categories']}")


@click.group()
def external():
    """External system and API key management."""


@external.command("create")
@click.argument("name")
@click.option("--permission", "permissions", multiple=True, type=click.Choice(PERMISSION_CHOICES),
              help="Repeat for each permission; defaults to all.")
@click.option("--description", default=None)
@click.option("--rate-limit", type=int, default=100, show_default=True)
@with_appcontext
def external_create(name, permissions, description, rate_limit):
    if ExternalSystem.query.filter_by(name=name).count():
        raise click.ClickException(f"External system '{name}' already exists")
    system = external_service.create_system(name, permissions, description=description, rate_limit=rate_limit)
    click.echo(f"Created external system id={system.id} name={system.name} permissions={','.join(system.permissions)}")


@external.command("issue-key")
@click.argument("name")
@click.option("--key-name", default=None, help="Label stored with the key.")
@with_appcontext
def external_issue_key(name, key_name):
    system = _system_or_fail(name)
    record, raw_key = external_service.issue_key(system, name=key_name)
    click.echo(f"Issued key id={record.id} for {system.name}. Store it now, it is not shown again:")
    click.echo(raw_key)


@external.command("disable")
@click.argument("name")
@with_appcontext
def external_disable(name):
    system = external_service.set_system_status(_system_or_fail(name), False)
    click.echo(f"Disabled external system {system.name}")


@external.command("enable")
@click.argument("name")
@with_appcontext
def external_enable(name):
    system = external_service.set_system_status(_system_or_fail(name), True)
    click.echo(f"Enabled external system {system.name}")


@external.command("list")
@with_appcontext
def external_list():
    for system in external_service.list_systems():
        state = "enabled" if system.status else "disabled"
        click.echo(f"{system.id}\t{system.name}\t{state}\t{','.join(system.permissions or [])}")


def register_cli(app):
    app.cli.add_command(seed)
    app.cli.add_command(external)
