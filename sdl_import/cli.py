"""Click CLI with load, graph, validate, bundle, and serve subcommands."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from graphql import GraphQLError, build_schema, validate_schema

from sdl_import import __version__
from sdl_import.errors import SDLImportError
from sdl_import.loader import GraphQLFileLoader
from sdl_import.models import LoaderOptions

_CWD_OPTION = click.option(
    "--cwd", type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".", help="Directory relative entry paths are resolved against",
)


def _load(loader: GraphQLFileLoader, cwd: Path, entry: str, options: LoaderOptions | None = None):
    try:
        return loader.load(cwd, entry, options)
    except (SDLImportError, GraphQLError, ValueError) as e:
        raise click.ClickException(str(e))
    except OSError as e:
        raise click.ClickException(f"Cannot read {e.filename}: {e.strerror}")


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log import resolution details")
def cli(verbose: bool):
    """sdl-import: merge GraphQL SDL files connected by #import lines."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("entry")
@_CWD_OPTION
@click.option("--no-imports", is_flag=True, help="Return the file unmodified")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), help="Write to a file")
def load(entry: str, cwd: Path, no_imports: bool, output: Path | None):
    """Merge ENTRY and everything it imports into one SDL document."""
    result = _load(GraphQLFileLoader(), cwd, entry, LoaderOptions(no_imports=no_imports))

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(result.sdl + "\n", encoding="utf-8")
        click.echo(f"Wrote {result.definition_count} definition(s) to {output}", err=True)
        return

    click.echo(result.sdl)


@cli.command()
@click.argument("entry")
@_CWD_OPTION
def graph(entry: str, cwd: Path):
    """List the files ENTRY pulls in and the types requested from each."""
    loader = GraphQLFileLoader()
    try:
        import_graph = loader.build_import_graph(loader.resolve_entry(cwd, entry))
    except SDLImportError as e:
        raise click.ClickException(str(e))
    except OSError as e:
        raise click.ClickException(f"Cannot read {e.filename}: {e.strerror}")

    for file_name, types in import_graph.items():
        click.echo(click.style(str(file_name), fg="cyan"))
        if import_graph.is_wildcard(file_name):
            click.echo(f"  {click.style('*', fg='yellow')}  (whole file)")
            continue
        for type_name in dict.fromkeys(types):
            click.echo(f"  {click.style(type_name, fg='green')}")

    click.echo(f"\n{len(import_graph)} file(s)")


@cli.command()
@click.argument("entry")
@_CWD_OPTION
def validate(entry: str, cwd: Path):
    """Merge ENTRY and check the result builds a valid schema."""
    result = _load(GraphQLFileLoader(), cwd, entry)

    try:
        errors = validate_schema(build_schema(result.sdl))
    except (GraphQLError, TypeError) as e:
        errors = [e]

    if errors:
        for error in errors:
            click.echo(click.style(f"  {error}", fg="red"), err=True)
        raise click.ClickException(f"Invalid schema: {len(errors)} error(s)")

    click.echo(f"OK: {result.definition_count} definition(s) from {len(result.graph)} file(s)")


@cli.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False, path_type=Path), default=".")
@click.option("--pattern", "-p", default="**/*.graphql", help="Glob pattern for entry files")
@click.option("--ignore", "-i", multiple=True, help="Glob to skip (repeatable)")
def bundle(directory: Path, pattern: str, ignore: tuple[str, ...]):
    """Load every matching file under DIRECTORY as its own entry."""
    options = LoaderOptions()
    options.ignore.extend(ignore)

    try:
        results = GraphQLFileLoader().load_many(directory, pattern, options)
    except (SDLImportError, GraphQLError, ValueError) as e:
        raise click.ClickException(str(e))

    if not results:
        click.echo("No matching files found.")
        return

    for path, sdl in results.items():
        click.echo(click.style(f"# {path}", fg="cyan"))
        click.echo(sdl)
        click.echo()


@cli.command()
@click.option("--port", "-p", default=8430, help="Port number")
@click.option("--host", default="127.0.0.1", help="Host address")
@click.option("--root", type=click.Path(exists=True, file_okay=False, path_type=Path),
              help="Only serve files under this directory")
def serve(port: int, host: str, root: Path | None):
    """Start the HTTP API."""
    try:
        import uvicorn
    except ImportError:
        raise click.ClickException(
            "uvicorn is required for the HTTP API. "
            "Install with: pip install 'sdl-import[web]'"
        )

    from sdl_import.web import create_app

    click.echo(f"Starting sdl-import API at http://{host}:{port}")
    uvicorn.run(create_app(root_dir=root), host=host, port=port, log_level="info")


if __name__ == "__main__":
    cli()
