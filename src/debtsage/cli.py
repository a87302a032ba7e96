"""Command line entry point for DebtSage."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation
from pathlib import Path

import click

from .config import BaseConfig
from .logging_config import setup_logging
from .models.payoff import Policy, SimulationResult
from .services.debts import MONTH_CAP, InvalidInput, simulate
from .services.import_csv import load_debts_csv
from .services.reports import payoff_order, summarize_debts

_CENT = Decimal("0.01")


def _money(value: Decimal) -> str:
    """Display helper: cents, thousands separators."""
    # A stalled balance can outgrow the default 28 digits.
    context = Context(prec=max(28, value.adjusted() + 3))
    return f"{value.quantize(_CENT, rounding=ROUND_HALF_UP, context=context):,}"


class _MoneyParam(click.ParamType):
    name = "amount"

    def convert(self, value, param, ctx):
        if isinstance(value, Decimal):
            return value
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            self.fail(f"{value!r} is not a number", param, ctx)
        if not amount.is_finite() or amount < 0:
            self.fail("must be a non-negative amount", param, ctx)
        return amount


MONEY = _MoneyParam()


def _load(debts_csv: Path):
    try:
        return load_debts_csv(csv_path=debts_csv)
    except InvalidInput as exc:
        raise click.UsageError(str(exc)) from exc


def _echo_result(result: SimulationResult) -> None:
    click.echo(f"{result.policy.value.title()} ({result.policy.label})")
    if result.paid_off:
        click.echo(f"  Debt-free in: {result.months} months ({result.months / 12:.1f} years)")
    else:
        click.echo(
            f"  Not paid off within {MONTH_CAP} months; "
            f"{_money(result.remaining_balance)} still owed"
        )
    click.echo(f"  Total interest: {_money(result.total_interest_paid)}")
    if result.stalled_debt_ids:
        stalled = ", ".join(str(debt_id) for debt_id in result.stalled_debt_ids)
        click.echo(f"  Minimum payment does not cover interest for: {stalled}")


@click.group()
@click.pass_context
def main(ctx: click.Context) -> None:
    """Plan debt payoff with the snowball and avalanche methods."""

    try:
        config = BaseConfig()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    setup_logging(config)
    ctx.obj = config


@main.command("simulate")
@click.argument("debts_csv", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--extra", type=MONEY, default=None, help="Extra monthly payment")
@click.option(
    "--policy",
    type=click.Choice([p.value for p in Policy], case_sensitive=False),
    default=Policy.SNOWBALL.value,
    show_default=True,
)
@click.option(
    "--export",
    "export_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the ledger to this CSV file",
)
@click.pass_obj
def simulate_command(
    config: BaseConfig,
    debts_csv: Path,
    extra: Decimal | None,
    policy: str,
    export_path: Path | None,
) -> None:
    """Simulate one payoff policy for the debts in DEBTS_CSV."""

    debts = _load(debts_csv)
    extra_payment = config.DEFAULT_EXTRA_PAYMENT if extra is None else extra
    try:
        result = simulate(debts, extra_payment, Policy(policy.lower()))
    except InvalidInput as exc:
        raise click.UsageError(str(exc)) from exc

    _echo_result(result)
    click.echo("  Payoff order: " + ", ".join(d.name for d in payoff_order(debts=debts, policy=policy)))

    if export_path is not None:
        from .services.export_csv import export_ledger_csv

        path = export_ledger_csv(result=result, output_path=export_path)
        click.echo(f"Ledger written: {path}")


@main.command("compare")
@click.argument("debts_csv", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--extra", type=MONEY, default=None, help="Extra monthly payment")
@click.option("--parallel", is_flag=True, default=False, help="Run both policies concurrently")
@click.option(
    "--chart",
    "chart_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write a PNG comparing both balance curves",
)
@click.pass_obj
def compare_command(
    config: BaseConfig,
    debts_csv: Path,
    extra: Decimal | None,
    parallel: bool,
    chart_path: Path | None,
) -> None:
    """Compare snowball and avalanche for the debts in DEBTS_CSV."""

    from .services.comparison import compare

    debts = _load(debts_csv)
    extra_payment = config.DEFAULT_EXTRA_PAYMENT if extra is None else extra
    try:
        comparison = compare(debts, extra_payment, parallel=parallel)
    except InvalidInput as exc:
        raise click.UsageError(str(exc)) from exc

    summary = summarize_debts(debts=debts, extra_payment=extra_payment)
    click.echo(f"Debts: {summary.debt_count}  Total balance: {_money(summary.total_balance)}")
    click.echo(
        f"Monthly minimums: {_money(summary.total_minimum_payment)}  "
        f"With extra: {_money(summary.total_with_extra)}"
    )
    click.echo("")
    _echo_result(comparison.snowball)
    _echo_result(comparison.avalanche)
    click.echo("")
    click.echo(f"Time difference: {comparison.months_saved} months")
    click.echo(f"Interest difference: {_money(comparison.interest_saved)}")
    if comparison.is_tie:
        click.echo("Both methods cost the same interest.")
    else:
        click.echo(f"Cheaper method: {comparison.cheaper_policy.value.title()}")

    if chart_path is not None:
        from .charts import payoff_comparison_chart_png

        path = payoff_comparison_chart_png(comparison, output_path=chart_path)
        click.echo(f"Chart written: {path}")


if __name__ == "__main__":  # pragma: no cover
    main()
