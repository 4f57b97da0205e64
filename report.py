"""
Chart rendering for the mortgage repayment calculator.

Provides:
  - Base64-encoded chart images for web embedding (get_web_charts)
  - The individual chart builders, usable on their own
"""

from __future__ import annotations

import base64
import io
from typing import Any, Dict, List, Optional

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.ticker import FuncFormatter
import numpy as np

import config as cfg
from calculator import RateSensitivity

# ═══════════════════════════════════════════════════════════════════
# Style constants
# ═══════════════════════════════════════════════════════════════════

BG = "#0a101f"
CARD = "#131b2e"
TEXT = "#f1f5f9"
TEXT2 = "#cbd5e1"
INDIGO = "#818cf8"
EMERALD = "#34d399"
AMBER = "#fbbf24"
SLATE = "#94a3b8"
BORDER = "#1e293b"

WEB_W, WEB_H = 10, 6


# ═══════════════════════════════════════════════════════════════════
# Axis formatters
# ═══════════════════════════════════════════════════════════════════

def _usd_fmt(x, _):
    sym = cfg.CURRENCY_SYMBOL
    if abs(x) >= 1e6:
        return f"{sym}{x / 1e6:.1f}M"
    if abs(x) >= 1e3:
        return f"{sym}{x / 1e3:.0f}k"
    return f"{sym}{x:.0f}"


def _pct_fmt(x, _):
    return f"{x:g}%"


USD_FMT = FuncFormatter(_usd_fmt)
PCT_FMT = FuncFormatter(_pct_fmt)


# ═══════════════════════════════════════════════════════════════════
# Style helpers
# ═══════════════════════════════════════════════════════════════════

def _style(fig, *axes):
    """Apply dark theme to figure and all axes."""
    fig.patch.set_facecolor(BG)
    for ax in axes:
        ax.set_facecolor(CARD)
        ax.tick_params(colors=TEXT, labelsize=8)
        ax.xaxis.label.set_color(TEXT)
        ax.yaxis.label.set_color(TEXT)
        ax.title.set_color(TEXT)
        for spine in ax.spines.values():
            spine.set_color(BORDER)
        ax.grid(True, alpha=0.15, color=SLATE)


def _legend(ax, loc="upper left"):
    ax.legend(loc=loc, fontsize=8, facecolor=CARD, edgecolor=BORDER, labelcolor=TEXT)


# ═══════════════════════════════════════════════════════════════════
# Chart 1: Cost breakdown (principal vs interest, both types)
# ═══════════════════════════════════════════════════════════════════

def _chart_cost_breakdown(d: Dict[str, Any], figsize=(WEB_W, WEB_H - 2)) -> plt.Figure:
    fig, ax = plt.subplots(figsize=figsize)
    _style(fig, ax)

    labels = ["Repayment", "Interest only"]
    principal = np.array([d["principal"], d["principal"]])
    interest = np.array([d["cmp_repayment_interest"], d["cmp_interest_only_interest"]])
    y = np.arange(len(labels))

    ax.barh(y, principal, color=INDIGO, height=0.5, label="Principal")
    ax.barh(y, interest, left=principal, color=AMBER, height=0.5, label="Interest")

    for i in range(len(labels)):
        total = principal[i] + interest[i]
        ax.text(total, y[i], f"  {cfg.CURRENCY_SYMBOL}{total:,.0f}",
                va="center", fontsize=9, color=TEXT, fontweight="bold")

    # Highlight the type the user picked
    chosen = 1 if d["is_interest_only"] else 0
    ax.set_yticks(y)
    ax.set_yticklabels(labels)
    ax.get_yticklabels()[chosen].set_color(EMERALD)
    ax.get_yticklabels()[chosen].set_fontweight("bold")

    ax.xaxis.set_major_formatter(USD_FMT)
    ax.set_xlim(0, (principal + interest).max() * 1.2)
    ax.set_xlabel("Total paid over the term")
    ax.set_title(
        f"Where the Money Goes: {cfg.CURRENCY_SYMBOL}{d['principal']:,.0f} "
        f"at {d['annual_rate']:g}% over {d['years']:g} years",
        fontsize=12, pad=10,
    )
    ax.invert_yaxis()
    _legend(ax, loc="lower right")
    fig.tight_layout()
    return fig


# ═══════════════════════════════════════════════════════════════════
# Chart 2: Rate sensitivity
# ═══════════════════════════════════════════════════════════════════

def _chart_rate_sensitivity(sens: RateSensitivity, figsize=(WEB_W, WEB_H)) -> plt.Figure:
    fig, ax = plt.subplots(figsize=figsize)
    _style(fig, ax)

    ax.plot(sens.rates, sens.monthly_payments, color=INDIGO, linewidth=2.2,
            marker="o", markersize=4, label="Monthly payment")
    ax.yaxis.set_major_formatter(USD_FMT)
    ax.xaxis.set_major_formatter(PCT_FMT)
    ax.set_xlabel("Annual interest rate")
    ax.set_ylabel("Monthly payment")

    ax2 = ax.twinx()
    ax2.plot(sens.rates, sens.total_interest, color=AMBER, linewidth=1.6,
             linestyle="--", label="Total interest")
    ax2.yaxis.set_major_formatter(USD_FMT)
    ax2.tick_params(colors=TEXT2, labelsize=8)
    ax2.set_ylabel("Total interest", color=TEXT2)
    for spine in ax2.spines.values():
        spine.set_color(BORDER)

    # Star at the chosen rate
    i = sens.base_index
    ax.plot(sens.rates[i], sens.monthly_payments[i], marker="*", markersize=16,
            color=EMERALD, zorder=10, markeredgecolor="white", markeredgewidth=0.5)
    ax.annotate(
        f"You: {cfg.CURRENCY_SYMBOL}{sens.monthly_payments[i]:,.2f}/mo",
        (sens.rates[i], sens.monthly_payments[i]),
        textcoords="offset points", xytext=(8, -16),
        fontsize=9, color=EMERALD, fontweight="bold",
        bbox=dict(boxstyle="round,pad=0.3", facecolor=BG,
                  edgecolor=EMERALD, alpha=0.9),
    )

    lines = ax.get_lines()[:1] + ax2.get_lines()
    ax.legend(lines, [ln.get_label() for ln in lines], loc="upper left",
              fontsize=8, facecolor=CARD, edgecolor=BORDER, labelcolor=TEXT)
    ax.set_title("How the Payment Moves with the Rate", fontsize=12, pad=10)
    fig.tight_layout()
    return fig


# ═══════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════

def figure_to_base64(fig: plt.Figure) -> str:
    """Convert a matplotlib figure to a base64-encoded PNG string."""
    buf = io.BytesIO()
    fig.savefig(buf, format="png", facecolor=fig.get_facecolor(),
                dpi=130, bbox_inches="tight")
    buf.seek(0)
    b64 = base64.b64encode(buf.read()).decode()
    buf.close()
    return b64


def _all_finite(*values) -> bool:
    return all(np.isfinite(np.asarray(v, dtype=float)).all() for v in values)


def get_web_charts(d: Dict[str, Any]) -> List[Optional[str]]:
    """Return base64-encoded PNG chart images for web embedding.

    Returns 2 slots:
      [0] Cost breakdown  (principal vs interest, both mortgage types)
      [1] Rate sensitivity  (monthly payment and total interest vs rate)

    A slot is None when its figures overflowed and cannot be plotted.
    """
    sens: RateSensitivity = d["sensitivity"]
    builders = [
        (
            _all_finite(d["principal"], d["cmp_repayment_interest"],
                        d["cmp_interest_only_interest"],
                        (d["principal"] + d["cmp_interest_only_interest"]) * 1.2),
            lambda: _chart_cost_breakdown(d),
        ),
        (
            _all_finite(sens.monthly_payments, sens.total_interest),
            lambda: _chart_rate_sensitivity(sens),
        ),
    ]

    images: List[Optional[str]] = []
    for plottable, build in builders:
        if not plottable:
            images.append(None)
            continue
        fig = build()
        images.append(figure_to_base64(fig))
        plt.close(fig)
    return images
