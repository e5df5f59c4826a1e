"""Category management commands."""

import click
from ledgerimport.cli.error_handling import handle_domain_error
from ledgerimport.domain.category import CategoryService
from ledgerimport.domain.errors import DomainError


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List all categories."""
    service = CategoryService(ctx.obj["db"])

    categories = service.list_categories(ctx.obj["user_id"])
    if not categories:
        click.echo("No categories found.")
        return

    click.echo("\nCategories:")
    for cat in categories:
        click.echo(f"ID: {cat.id:3d} | {cat.name:25s} | {cat.category_type.value}")


@category_group.command("create")
@click.argument("name")
@click.option(
    "--type",
    "category_type",
    type=click.Choice(["expense", "income"], case_sensitive=False),
    default="expense",
    help="Category type (default: expense)",
)
@click.pass_context
def create_category(ctx, name: str, category_type: str):
    """Create a new category."""
    service = CategoryService(ctx.obj["db"])

    try:
        category_id = service.create_category(
            user_id=ctx.obj["user_id"], name=name, category_type=category_type.lower()
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created category '{name}' (ID: {category_id})")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
