"""Flask CLI commands for DebtSage."""

from __future__ import annotations

from pathlib import Path

import click


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("debtsage-payoff")
    @click.option("--user-id", type=int, default=None, help="Owner of the debts")
    @click.option(
        "--strategy",
        type=click.Choice(["snowball", "avalanche", "highest_rate"], case_sensitive=False),
        default="avalanche",
        show_default=True,
    )
    @click.option("--extra", type=float, default=0.0, show_default=True, help="Extra monthly payment")
    @click.option("--debt-id", "debt_ids", type=int, multiple=True, help="Limit to these debts")
    @click.option(
        "--export",
        "export_path",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Write the monthly breakdown to CSV",
    )
    def debtsage_payoff(
        user_id: int | None,
        strategy: str,
        extra: float,
        debt_ids: tuple[int, ...],
        export_path: Path | None,
    ) -> None:
        """Simulate paying off a user's debts."""

        from .errors import DebtEngineError
        from .extensions import get_planning_service
        from .services.export_csv import export_payoff_csv

        owner = user_id if user_id is not None else app.config["DEFAULT_USER_ID"]
        try:
            result = get_planning_service().payoff_strategy(
                user_id=owner,
                strategy=strategy,
                extra_monthly_payment=extra,
                debt_ids=list(debt_ids) or None,
            )
        except DebtEngineError as exc:
            raise click.ClickException(str(exc)) from exc

        click.echo(f"Strategy: {result.strategy.value}")
        click.echo(f"Months to debt-free: {result.total_months}")
        click.echo(f"Total interest: ${result.total_interest_paid:,.2f}")
        click.echo(f"Total paid: ${result.total_paid:,.2f}")
        click.echo(f"Recommended strategy: {result.summary.recommended_strategy.value}")
        for schedule in result.payoff_schedule:
            click.echo(
                f"  {schedule.payoff_order}. {schedule.debt_name} "
                f"(${schedule.original_balance:,.2f} @ {schedule.interest_rate:g}%)"
            )

        if export_path is not None:
            path = export_payoff_csv(rows=result.monthly_breakdown, output_path=export_path)
            click.echo(f"Export written: {path}")

    @app.cli.command("debtsage-utilization")
    @click.option("--user-id", type=int, default=None, help="Owner of the credit cards")
    def debtsage_utilization(user_id: int | None) -> None:
        """Report credit utilization across credit cards."""

        from .errors import DebtEngineError
        from .extensions import get_planning_service

        owner = user_id if user_id is not None else app.config["DEFAULT_USER_ID"]
        try:
            result = get_planning_service().credit_utilization(user_id=owner)
        except DebtEngineError as exc:
            raise click.ClickException(str(exc)) from exc

        click.echo(f"Overall utilization: {result.utilization_percentage:.1f}% ({result.band.value})")
        for card in result.utilization_by_card:
            click.echo(f"  {card.card_name}: {card.utilization:.1f}% - {card.recommendation}")
        click.echo(result.impact_on_credit_score)
