"""CLI module for blog-taxonomy."""

from typing import Annotated, NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from blog_taxonomy import __version__
from blog_taxonomy.db import get_session
from blog_taxonomy.logging import configure_logging, get_logger
from blog_taxonomy.naming import TaxonomyNamingService
from blog_taxonomy.services import (
    DefaultCategoryDeletionError,
    TaxonomyNotFoundError,
    TaxonomyService,
)
from blog_taxonomy.slugs import SlugCollisionUnresolvedError
from blog_taxonomy.validation import TaxonomyType, TaxonomyValidationError

console = Console()

app = typer.Typer(
    name="blog-taxonomy",
    help="Manage blog categories and tags.",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit.

    Args:
        value: Whether the version flag was provided.
    """
    if value:
        console.print(f"blog-taxonomy version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    _ctx: typer.Context,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable verbose output")
    ] = False,
    _version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
) -> None:
    """Manage blog categories and tags."""
    # Initialize logging once at startup
    configure_logging()
    log = get_logger()

    if verbose:
        log.debug("Verbose mode enabled")


@app.command(name="slug")
def slug_cmd(
    title: Annotated[str, typer.Argument(help="Title to derive a slug from.")],
    taxonomy_type: Annotated[
        TaxonomyType | None,
        typer.Option(
            "--type",
            "-t",
            case_sensitive=False,
            help="Account for existing slugs of this type",
        ),
    ] = None,
) -> None:
    """Print the slug a title derives to.

    Without --type existing entries are ignored; with it, the slug a new
    entry of that type would get right now is printed.
    """
    if taxonomy_type is None:
        console.print(TaxonomyNamingService().derive_slug(title), markup=False)
        return

    with get_session() as session:
        try:
            slug = TaxonomyService(session).preview_slug(taxonomy_type, title)
        except TaxonomyValidationError as e:
            _fail(e.message)

    console.print(slug, markup=False)


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
    raise typer.Exit(code=1)


def _build_taxonomy_app(taxonomy_type: TaxonomyType) -> typer.Typer:
    """Build the add/rename/delete/list command group for one taxonomy type."""
    noun = taxonomy_type.value.lower()
    group = typer.Typer(help=f"Manage {noun} entries.", no_args_is_help=True)

    @group.command(name="add")
    def add_cmd(
        title: Annotated[str, typer.Argument(help=f"Title of the new {noun}.")],
        description: Annotated[
            str | None, typer.Option("--description", "-d", help="Description")
        ] = None,
    ) -> None:
        """Create an entry; its slug is derived from the title."""
        log = get_logger()
        with get_session() as session:
            service = TaxonomyService(session)
            try:
                entry = service.create(taxonomy_type, title, description)
                session.commit()
            except TaxonomyValidationError as e:
                _fail(e.message)
            except SlugCollisionUnresolvedError as e:
                log.error("Slug derivation failed", title=title, error=str(e))
                _fail(f"Could not create {noun} '{title}', please try again later.")

            console.print(
                f"Created {noun} [bold]{escape(entry.title)}[/bold] ({entry.slug})",
                highlight=False,
            )

    @group.command(name="rename")
    def rename_cmd(
        taxonomy_id: Annotated[int, typer.Argument(help=f"Id of the {noun}.")],
        title: Annotated[str, typer.Argument(help="New title.")],
    ) -> None:
        """Rename an entry and re-derive its slug."""
        with get_session() as session:
            service = TaxonomyService(session)
            try:
                entry = service.update(taxonomy_type, taxonomy_id, title)
                session.commit()
            except (TaxonomyValidationError, TaxonomyNotFoundError) as e:
                _fail(e.message)

            console.print(
                f"Renamed {noun} to [bold]{escape(entry.title)}[/bold] ({entry.slug})",
                highlight=False,
            )

    @group.command(name="delete")
    def delete_cmd(
        taxonomy_id: Annotated[int, typer.Argument(help=f"Id of the {noun}.")],
    ) -> None:
        """Delete an entry."""
        with get_session() as session:
            service = TaxonomyService(session)
            try:
                service.delete(taxonomy_type, taxonomy_id)
                session.commit()
            except (TaxonomyNotFoundError, DefaultCategoryDeletionError) as e:
                _fail(e.message)

            console.print(f"Deleted {noun} {taxonomy_id}")

    @group.command(name="list")
    def list_cmd() -> None:
        """List entries with their published post counts."""
        with get_session() as session:
            rows = TaxonomyService(session).list_with_counts(taxonomy_type)

            if not rows:
                console.print(f"No {noun} entries found")
                return

            table = Table(title=f"{taxonomy_type.value} entries")
            table.add_column("Id", justify="right")
            table.add_column("Title")
            table.add_column("Slug")
            table.add_column("Posts", justify="right")
            for entry, count in rows:
                table.add_row(str(entry.id), escape(entry.title), entry.slug, str(count))
            console.print(table)

    return group


app.add_typer(_build_taxonomy_app(TaxonomyType.CATEGORY), name="category")
app.add_typer(_build_taxonomy_app(TaxonomyType.TAG), name="tag")


if __name__ == "__main__":
    app()
