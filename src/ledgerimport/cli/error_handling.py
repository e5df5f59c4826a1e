"""CLI error handling helpers."""

import click

from ledgerimport.domain.errors import DomainError, ValidationError, format_field_errors


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    if isinstance(error, ValidationError) and error.field_errors:
        click.echo(f"  {format_field_errors(error.field_errors)}", err=True)
    ctx.exit(1)
