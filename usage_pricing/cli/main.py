"""
CLI interface for usage-pricing.

Provides command-line access to pricing lookup and cost calculation.
"""

import logging
import sys
from decimal import Decimal
from typing import Optional

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from usage_pricing.config.loader import load_pricing_table
from usage_pricing.core.audit import audit_pricing_conventions
from usage_pricing.core.cost import calculate_cost
from usage_pricing.core.pricing import PRICING_TABLE, ModelPricing, PricingTable
from usage_pricing.core.resolver import MatchKind, resolve_model_pricing
from usage_pricing.core.token_counter import UsageTokens

app = typer.Typer()
console = Console()

EXIT_CODE_PASS = 0
EXIT_CODE_FAIL = 1


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML file with pricing overrides"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging"
    )
):
    """Claude API usage pricing."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    if ctx.invoked_subcommand is None:
        console.print("usage-pricing - Use --help to see available commands")
        return

    try:
        ctx.obj = load_pricing_table(config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Error loading pricing config:[/] {escape(str(e))}")
        sys.exit(EXIT_CODE_FAIL)


def _table_from(ctx: typer.Context) -> PricingTable:
    return ctx.obj if isinstance(ctx.obj, PricingTable) else PRICING_TABLE


def _format_rate(rate: Decimal) -> str:
    """Format a per-million rate without trailing zeros."""
    return f"${rate.normalize():f}"


def _format_currency(amount: Decimal) -> str:
    """Format a cost to six places, keeping the sign."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.6f}"


def _print_rates(pricing: ModelPricing):
    console.print(f"Input:       {_format_rate(pricing.input_per_1m)} / 1M tokens")
    console.print(f"Output:      {_format_rate(pricing.output_per_1m)} / 1M tokens")
    console.print(f"Cache write: {_format_rate(pricing.cache_write_per_1m)} / 1M tokens")
    console.print(f"Cache read:  {_format_rate(pricing.cache_read_per_1m)} / 1M tokens")


def _describe_match(kind: MatchKind, key: Optional[str]) -> str:
    if kind == MatchKind.DEFAULT:
        return "default pricing"
    return f"{kind.value} match ({key})"


@app.command()
def models(ctx: typer.Context):
    """List known models and their rates (USD per 1M tokens)."""
    table = _table_from(ctx)

    output = Table(title="Model pricing (USD / 1M tokens)")
    output.add_column("Model", no_wrap=True)
    output.add_column("Input", justify="right")
    output.add_column("Output", justify="right")
    output.add_column("Cache write", justify="right")
    output.add_column("Cache read", justify="right")

    for model in table:
        pricing = table.prices[model]
        output.add_row(
            model,
            _format_rate(pricing.input_per_1m),
            _format_rate(pricing.output_per_1m),
            _format_rate(pricing.cache_write_per_1m),
            _format_rate(pricing.cache_read_per_1m),
        )

    console.print(output)


@app.command()
def price(
    ctx: typer.Context,
    model: str = typer.Argument(..., help="Model identifier to resolve")
):
    """Show the pricing a model identifier resolves to."""
    resolution = resolve_model_pricing(model, _table_from(ctx))

    console.print(f"\n[bold]Model:[/bold] {escape(model)}")
    console.print(f"Resolved via: {_describe_match(resolution.matched_via, resolution.matched_key)}")
    _print_rates(resolution.pricing)


@app.command()
def cost(
    ctx: typer.Context,
    model: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="Model identifier (default pricing if omitted)"
    ),
    input_tokens: int = typer.Option(0, "--input-tokens", "-i", help="Input tokens"),
    output_tokens: int = typer.Option(0, "--output-tokens", "-o", help="Output tokens"),
    cache_write_tokens: int = typer.Option(
        0,
        "--cache-write-tokens",
        help="Cache creation input tokens"
    ),
    cache_read_tokens: int = typer.Option(
        0,
        "--cache-read-tokens",
        help="Cache read input tokens"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the breakdown as JSON")
):
    """Calculate the cost of a single API call."""
    table = _table_from(ctx)
    usage = UsageTokens(
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        cache_creation_input_tokens=cache_write_tokens,
        cache_read_input_tokens=cache_read_tokens
    )
    breakdown = calculate_cost(usage, model, table)

    if as_json:
        console.print_json(data=breakdown.to_dict())
        return

    resolution = resolve_model_pricing(model, table)
    console.print(f"\n[bold]Model:[/bold] {escape(model or '(none)')}")
    console.print(f"Pricing: {_describe_match(resolution.matched_via, resolution.matched_key)}")

    output = Table()
    output.add_column("Component")
    output.add_column("Tokens", justify="right")
    output.add_column("Cost", justify="right")
    output.add_row("Input", f"{usage.input_tokens:,}", _format_currency(breakdown.input))
    output.add_row("Output", f"{usage.output_tokens:,}", _format_currency(breakdown.output))
    output.add_row(
        "Cache write",
        f"{usage.cache_creation_input_tokens:,}",
        _format_currency(breakdown.cache_write)
    )
    output.add_row(
        "Cache read",
        f"{usage.cache_read_input_tokens:,}",
        _format_currency(breakdown.cache_read)
    )
    output.add_row(
        "[bold]Total[/bold]",
        f"{usage.total_tokens:,}",
        f"[bold]{_format_currency(breakdown.total)}[/bold]"
    )
    console.print(output)


@app.command()
def audit(
    ctx: typer.Context,
    strict: bool = typer.Option(
        False,
        "--strict",
        "-s",
        help="Exit with error code if any violation is found"
    )
):
    """Check cache rates against the 1.25x write / 0.10x read convention."""
    violations = audit_pricing_conventions(_table_from(ctx))

    if not violations:
        console.print("[green]✓[/] All pricing entries follow the cache rate convention")
        sys.exit(EXIT_CODE_PASS)

    console.print(f"\n[bold yellow]{len(violations)} convention violation(s)[/]")
    for violation in violations:
        console.print(
            f"{escape(violation.model)}: {violation.field} is {_format_rate(violation.actual)}, "
            f"expected {_format_rate(violation.expected)}"
        )

    sys.exit(EXIT_CODE_FAIL if strict else EXIT_CODE_PASS)


if __name__ == "__main__":
    app()
