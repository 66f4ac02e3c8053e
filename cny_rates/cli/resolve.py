"""CLI for resolving a currency's CNY rate from the shell."""

from __future__ import annotations

import click
from flask import current_app
from flask.cli import with_appcontext

from cny_rates.services.orchestrator import RateOrchestrator, RateUnavailable


@click.command("resolve-rate")
@click.argument("currency")
@with_appcontext
def resolve_rate(currency: str) -> None:
    """Resolve CURRENCY against CNY (and GBP) the same way the API does."""

    orchestrator: RateOrchestrator = current_app.extensions["rate_orchestrator"]
    try:
        resolved = orchestrator.resolve_with_gbp(currency)
    except RateUnavailable as exc:
        raise click.ClickException(str(exc)) from exc

    result = resolved.result
    click.echo(f"1 {resolved.currency} = {result.rate:.4f} CNY (source: {result.source.value})")
    if resolved.gbp_rate is not None:
        click.echo(f"1 {resolved.currency} = {resolved.gbp_rate:.4f} GBP")
    else:
        click.echo("GBP cross-rate unavailable")
