"""ADT CLI - Main commands."""
import asyncio
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from adtpy.core.exceptions import AdtException, PartialCreateError

app = typer.Typer(
    name="adt",
    help="SAP ABAP Development Tools CLI",
    add_completion=False
)
console = Console()


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


class Connection:
    """Connection options shared by all commands."""

    def __init__(self, host, port, client, user, password, insecure):
        self.host = host
        self.port = port
        self.client = client
        self.user = user
        self.password = password
        self.insecure = insecure

    def build_client(self):
        from adtpy import AdtClient, APIConfig
        from adtpy.core.api import SSLConfig

        config = APIConfig.from_env(host=self.host, port=self.port, sap_client=self.client)
        if self.insecure:
            config.ssl = SSLConfig(verify=False, check_hostname=False)
        return AdtClient(config)

    async def open(self):
        """Create a client and log in, prompting for missing credentials."""
        adt = self.build_client()
        user = self.user or typer.prompt("SAP user")
        password = self.password or typer.prompt("Password", hide_input=True)
        try:
            await adt.connect(user, password)
        except Exception:
            await adt.close()
            raise
        return adt


@app.callback()
def main_options(
    ctx: typer.Context,
    host: Optional[str] = typer.Option(None, "--host", "-H", help="SAP host (default: $SAP_HOST)"),
    port: Optional[str] = typer.Option(None, "--port", "-P", help="ICM port (default: $SAP_PORT or 8000)"),
    client: Optional[str] = typer.Option(None, "--client", "-c", help="SAP client (default: $SAP_CLIENT)"),
    user: Optional[str] = typer.Option(None, "--user", "-u", envvar="SAP_USER", help="SAP user"),
    password: Optional[str] = typer.Option(None, "--password", "-p", envvar="SAP_PASSWORD", help="SAP password"),
    insecure: bool = typer.Option(False, "--insecure", help="Skip TLS certificate verification"),
):
    """Connection settings."""
    ctx.obj = Connection(host, port, client, user, password, insecure)


def _fail(error: Exception):
    console.print(f"[red]{error}[/red]")
    if isinstance(error, PartialCreateError):
        console.print("[yellow]The object exists on the server and may need manual cleanup.[/yellow]")
    raise typer.Exit(1)


def _run(ctx: typer.Context, action):
    """Open a connection, run ``action(adt)`` and report ADT errors."""
    connection: Connection = ctx.obj

    async def runner():
        adt = await connection.open()
        try:
            return await action(adt)
        finally:
            await adt.close()

    try:
        return run_async(runner())
    except (AdtException, ValueError) as e:
        _fail(e)


@app.command()
def info(ctx: typer.Context):
    """Check the connection and show its details."""
    async def show(adt):
        details = adt.get_connection_info()
        console.print(f"[green]Connected[/green] to {details.url}")
        console.print(f"User: {details.username}")

    _run(ctx, show)


@app.command()
def discover(ctx: typer.Context):
    """List the services advertised by the system."""
    async def show(adt):
        collections = await adt.discover()
        table = Table()
        table.add_column("Workspace", style="cyan")
        table.add_column("Title")
        table.add_column("Href", style="dim")
        for collection in collections:
            table.add_row(collection.workspace or "", collection.title, collection.href)
        console.print(table)

    _run(ctx, show)


@app.command()
def packages(
    ctx: typer.Context,
    parent: Optional[str] = typer.Argument(None, help="Parent package (default: main packages)"),
):
    """List packages."""
    async def show(adt):
        objects = await adt.list_root_packages(parent)
        if not objects:
            console.print("[yellow]No packages found[/yellow]")
            return
        table = Table()
        table.add_column("Name", style="cyan")
        table.add_column("Type")
        table.add_column("Description")
        table.add_column("URI", style="dim")
        for obj in objects:
            table.add_row(obj.name, obj.type, obj.description or "", obj.uri)
        console.print(table)

    _run(ctx, show)


@app.command()
def tree(
    ctx: typer.Context,
    package: str = typer.Argument(..., help="Package to browse"),
    depth: int = typer.Option(3, "--depth", "-d", help="Levels to expand"),
):
    """Browse a package by facets (package, group, type, object)."""
    async def add_level(adt, branch: Tree, nodes, parent, level):
        for node in nodes:
            label = f"[blue]{node.display_name}[/blue] [dim]{node.facet}[/dim]"
            if node.counter:
                label += f" ({node.counter})"
            child = branch.add(label)
            if level < depth and node.is_expandable:
                children = await adt.expand(node, package, parent)
                await add_level(adt, child, children, node, level + 1)

    async def show(adt):
        root = Tree(f"[bold]{package}[/bold]")
        nodes = await adt.get_root_package_contents(package)
        await add_level(adt, root, nodes, None, 1)
        console.print(root)

    _run(ctx, show)


@app.command()
def source(
    ctx: typer.Context,
    kind: str = typer.Argument(..., help="program, class, ddl or uri"),
    name: str = typer.Argument(..., help="Object name or URI"),
):
    """Print the source of an object."""
    async def show(adt):
        text = await adt.get_source(kind, name)
        console.print(text, markup=False, highlight=False)

    _run(ctx, show)


@app.command("create-class")
def create_class(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Class name, e.g. ZCL_DEMO"),
    package: str = typer.Option(..., "--package", help="Target package"),
    description: str = typer.Option(..., "--description", help="Short description"),
    superclass: Optional[str] = typer.Option(None, "--superclass", help="Superclass"),
    interface: Optional[List[str]] = typer.Option(None, "--interface", "-i", help="Interface to implement"),
):
    """Create a class with a generated skeleton."""
    from adtpy import ClassDetails

    details = ClassDetails(
        name=name,
        description=description,
        package=package,
        superclass=superclass,
        interfaces=list(interface or [])
    )

    async def create(adt):
        uri = await adt.create_class(details)
        console.print(f"[green]Created:[/green] {details.name}")
        console.print(f"URI: {uri}")

    _run(ctx, create)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
