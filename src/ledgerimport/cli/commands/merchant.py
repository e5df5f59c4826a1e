"""Merchant mapping commands."""

import click
from ledgerimport.cli.error_handling import handle_domain_error
from ledgerimport.domain.errors import DomainError
from ledgerimport.domain.merchant import MerchantMappingService


@click.group()
def merchant_group():
    """Manage merchant name mappings."""
    pass


@merchant_group.command("add")
@click.argument("original_name")
@click.argument("normalized_name")
@click.option("--global", "is_global", is_flag=True, help="Make the mapping visible to all users")
@click.pass_context
def add_mapping(ctx, original_name: str, normalized_name: str, is_global: bool):
    """Map a raw merchant name to a display name.

    Examples:
        ledgerimport merchant add "WOOLWORTHS SANDTON" "Woolworths"
    """
    service = MerchantMappingService(ctx.obj["db"])

    try:
        mapping = service.create_mapping(
            user_id=ctx.obj["user_id"],
            original_name=original_name,
            normalized_name=normalized_name,
            is_global=is_global,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(
        f"Mapped '{mapping.original_name}' -> '{mapping.normalized_name}' (ID: {mapping.id})"
    )


@merchant_group.command("list")
@click.pass_context
def list_mappings(ctx):
    """List merchant mappings."""
    service = MerchantMappingService(ctx.obj["db"])

    mappings = service.list_mappings(ctx.obj["user_id"])
    if not mappings:
        click.echo("No merchant mappings found.")
        return

    for m in mappings:
        scope = " (global)" if m.is_global else ""
        click.echo(f"ID: {m.id:3d} | {m.original_name} -> {m.normalized_name}{scope}")


@merchant_group.command("resolve")
@click.argument("raw_name")
@click.pass_context
def resolve_name(ctx, raw_name: str):
    """Show what a raw merchant name resolves to."""
    service = MerchantMappingService(ctx.obj["db"])
    click.echo(service.resolve(ctx.obj["user_id"], raw_name))


@merchant_group.command("delete")
@click.argument("mapping_id", type=int)
@click.pass_context
def delete_mapping(ctx, mapping_id: int):
    """Delete a merchant mapping."""
    service = MerchantMappingService(ctx.obj["db"])

    try:
        service.delete_mapping(mapping_id, ctx.obj["user_id"])
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Deleted merchant mapping {mapping_id}")


def register_commands(cli):
    """Register merchant commands with main CLI."""
    cli.add_command(merchant_group, name="merchant")
