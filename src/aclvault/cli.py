from __future__ import annotations

import json
from typing import Any

import typer

from aclvault import __version__
from aclvault.config import get_settings
from aclvault.dal import DataAccessLayer
from aclvault.exceptions import DalException
from aclvault.logging_config import configure_logging
from aclvault.storage import get_document_store
from aclvault.storage.tables import table_specs

app = typer.Typer(add_completion=False, help="aclvault access-control store CLI")


@app.callback()
def _root() -> None:
    configure_logging(get_settings().LOG_LEVEL)


def _dal() -> DataAccessLayer:
    return DataAccessLayer.from_settings(get_settings())


def _echo_json(dal: DataAccessLayer, entity: Any) -> None:
    typer.echo(json.dumps(dal.codec.encode(entity), indent=2))


def _fail(exc: DalException) -> None:
    typer.echo(f"{exc.code}: {exc.message}", err=True)
    raise typer.Exit(1)


@app.command()
def version() -> None:
    typer.echo(__version__)


@app.command("init-tables")
def init_tables() -> None:
    """
    Create the user, group, membership and secure object tables.

    Existing tables are left untouched.
    """
    settings = get_settings()
    store = get_document_store(settings)
    for spec in table_specs(settings):
        created = store.ensure_table(spec)
        status = "created" if created else "already exists"
        typer.echo(f"Table '{spec.name}' {status}.")


@app.command("get-user")
def get_user(user_uid: str = typer.Argument(..., help="User unique Id")) -> None:
    dal = _dal()
    try:
        _echo_json(dal, dal.get_user_by_uid(user_uid))
    except DalException as e:
        _fail(e)


@app.command("get-group")
def get_group(group_uid: str = typer.Argument(..., help="Group unique Id")) -> None:
    dal = _dal()
    try:
        _echo_json(dal, dal.get_group_by_uid(group_uid))
    except DalException as e:
        _fail(e)


@app.command("get-secure-object")
def get_secure_object(
    secure_object_uid: str = typer.Argument(..., help="Secure object unique Id"),
    include_children: bool = typer.Option(False, help="Keep the stored subtree"),
) -> None:
    dal = _dal()
    try:
        _echo_json(dal, dal.get_secure_object_by_uid(secure_object_uid, include_children))
    except DalException as e:
        _fail(e)


@app.command("group-members")
def group_members(
    group_uid: str = typer.Argument(..., help="Group unique Id"),
    include_disabled: bool = typer.Option(False, help="Include disabled members"),
) -> None:
    dal = _dal()
    try:
        items = dal.get_group_members(group_uid, include_disabled)
    except DalException as e:
        _fail(e)
        return
    typer.echo(json.dumps([dal.codec.encode(item) for item in items], indent=2))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
