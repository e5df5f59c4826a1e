"""Categorization rule commands."""

import click
from ledgerimport.cli.error_handling import handle_domain_error
from ledgerimport.domain.entities import format_money, matcher_kind, matcher_value
from ledgerimport.domain.errors import DomainError
from ledgerimport.domain.rules import CategorizationRuleService


@click.group()
def rule_group():
    """Manage categorization rules."""
    pass


@rule_group.command("add")
@click.argument("category_id", type=int)
@click.option("--merchant", "merchant_exact", help="Exact merchant name (case-insensitive)")
@click.option("--merchant-pattern", help="Regex searched in the normalized merchant")
@click.option("--description-pattern", help="Regex searched in the description")
@click.option("--min", "amount_min", help="Minimum amount (inclusive)")
@click.option("--max", "amount_max", help="Maximum amount (inclusive)")
@click.option("--priority", type=int, default=50, show_default=True, help="Lower runs first (0-100)")
@click.option("--confidence", default="1.00", show_default=True, help="Confidence recorded on matches")
@click.pass_context
def add_rule(
    ctx,
    category_id: int,
    merchant_exact: str | None,
    merchant_pattern: str | None,
    description_pattern: str | None,
    amount_min: str | None,
    amount_max: str | None,
    priority: int,
    confidence: str,
):
    """Add a rule assigning CATEGORY_ID to matching imported rows.

    Exactly one of --merchant, --merchant-pattern or --description-pattern
    is required.

    Examples:
        ledgerimport rule add 3 --merchant "Woolworths"
        ledgerimport rule add 7 --description-pattern "^UBER" --max 500
    """
    service = CategorizationRuleService(ctx.obj["db"])

    try:
        rule = service.create_rule(
            user_id=ctx.obj["user_id"],
            category_id=category_id,
            merchant_exact=merchant_exact,
            merchant_pattern=merchant_pattern,
            description_pattern=description_pattern,
            amount_min=amount_min,
            amount_max=amount_max,
            priority=priority,
            confidence=confidence,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created rule {rule.id} (priority {rule.priority})")


@rule_group.command("list")
@click.option("--all", "include_inactive", is_flag=True, help="Include disabled rules")
@click.pass_context
def list_rules(ctx, include_inactive: bool):
    """List rules in evaluation order."""
    service = CategorizationRuleService(ctx.obj["db"])

    rules = service.list_rules(ctx.obj["user_id"], include_inactive=include_inactive)
    if not rules:
        click.echo("No rules found.")
        return

    for r in rules:
        bounds = ""
        if r.amount_min is not None or r.amount_max is not None:
            low = format_money(r.amount_min) or "-"
            high = format_money(r.amount_max) or "-"
            bounds = f" | amount {low}..{high}"
        state = "" if r.is_active else " | disabled"
        click.echo(
            f"ID: {r.id:3d} | p{r.priority:<3d} | {matcher_kind(r.matcher)}="
            f"{matcher_value(r.matcher)!r} -> category {r.category_id}"
            f"{bounds} | applied {r.times_applied}{state}"
        )


def _set_active(ctx, rule_id: int, is_active: bool) -> None:
    service = CategorizationRuleService(ctx.obj["db"])
    try:
        service.set_active(rule_id, ctx.obj["user_id"], is_active)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Rule {rule_id} {'enabled' if is_active else 'disabled'}")


@rule_group.command("enable")
@click.argument("rule_id", type=int)
@click.pass_context
def enable_rule(ctx, rule_id: int):
    """Enable a rule."""
    _set_active(ctx, rule_id, True)


@rule_group.command("disable")
@click.argument("rule_id", type=int)
@click.pass_context
def disable_rule(ctx, rule_id: int):
    """Disable a rule without deleting it."""
    _set_active(ctx, rule_id, False)


@rule_group.command("delete")
@click.argument("rule_id", type=int)
@click.pass_context
def delete_rule(ctx, rule_id: int):
    """Delete a rule."""
    service = CategorizationRuleService(ctx.obj["db"])

    try:
        service.delete_rule(rule_id, ctx.obj["user_id"])
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Deleted rule {rule_id}")


def register_commands(cli):
    """Register rule commands with main CLI."""
    cli.add_command(rule_group, name="rule")
