"""Chart helpers for payoff projections."""

from __future__ import annotations

from pathlib import Path
from tempfile import NamedTemporaryFile

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
from matplotlib.figure import Figure

from .models.payoff import Policy, SimulationResult
from .services.comparison import PolicyComparison
from .services.reports import balance_timeline

_POLICY_COLORS = {Policy.SNOWBALL: "#4F46E5", Policy.AVALANCHE: "#F97316"}


def _save_png(fig: Figure, output_path: Path | None) -> Path:
    if output_path is None:
        with NamedTemporaryFile(delete=False, suffix=".png") as tmp:
            path = Path(tmp.name)
    else:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, bbox_inches="tight", dpi=100)
    plt.close(fig)
    return path


def _plot_result(ax, result: SimulationResult) -> None:
    # Period 0 is the starting balance so the line begins at the full debt.
    totals = [float(result.starting_balance)] + [float(total) for total in balance_timeline(result)]
    x_vals = list(range(len(totals)))
    color = _POLICY_COLORS[result.policy]
    label = f"{result.policy.value.title()} ({result.months} months)"
    if not result.paid_off:
        label += " - not paid off"
    ax.plot(x_vals, totals, color=color, linewidth=2.5, label=label)
    ax.fill_between(x_vals, totals, color=color, alpha=0.08)

    if result.paid_off and result.months:
        ax.scatter([result.months], [0], s=120, c="gold", marker="*", zorder=5, edgecolors=color)


def _style_axes(ax, title: str) -> None:
    ax.grid(True, linestyle="--", alpha=0.3)
    ax.set_axisbelow(True)
    ax.set_title(title, fontsize=14, fontweight="bold", pad=15)
    ax.set_ylabel("Remaining Balance", fontsize=11)
    ax.set_xlabel("Month", fontsize=11)
    ax.yaxis.set_major_formatter(mticker.FuncFormatter(lambda x, p: f"{x:,.0f}"))
    ax.legend(loc="upper right", framealpha=0.9)


def debt_payoff_chart_png(result: SimulationResult, *, output_path: Path | None = None) -> Path:
    """Render remaining balance per month for a single policy run."""

    fig, ax = plt.subplots(figsize=(10, 6))
    if result.ledger:
        _plot_result(ax, result)
        _style_axes(ax, "Debt Payoff Projection")
    else:
        ax.text(0.5, 0.5, "No payoff schedule", ha="center", va="center", fontsize=14, color="#666")
        ax.axis("off")
    plt.tight_layout()
    return _save_png(fig, output_path)


def payoff_comparison_chart_png(
    comparison: PolicyComparison, *, output_path: Path | None = None
) -> Path:
    """Render snowball and avalanche balance curves on one chart."""

    fig, ax = plt.subplots(figsize=(10, 6))
    if comparison.snowball.ledger or comparison.avalanche.ledger:
        for result in (comparison.snowball, comparison.avalanche):
            _plot_result(ax, result)
        _style_axes(ax, "Snowball vs. Avalanche")

        verdict = (
            "Same interest either way"
            if comparison.is_tie
            else f"{comparison.cheaper_policy.value.title()} saves {float(comparison.interest_saved):,.0f}"
        )
        props = dict(boxstyle="round", facecolor="lavender", alpha=0.8)
        ax.text(0.02, 0.98, verdict, transform=ax.transAxes, fontsize=9,
                verticalalignment="top", bbox=props)
    else:
        ax.text(0.5, 0.5, "No debts to compare", ha="center", va="center", fontsize=14, color="#666")
        ax.axis("off")
    plt.tight_layout()
    return _save_png(fig, output_path)


__all__ = ["debt_payoff_chart_png", "payoff_comparison_chart_png"]
