"""
Price curve charts: call and put value against strike.

Two backends:
    - matplotlib: static PNG
    - plotly: interactive HTML with hover tooltips

Both use the same dark theme. This module only draws what a sweep
returns; it never prices anything itself.
"""

from pathlib import Path
from typing import Optional

import matplotlib
matplotlib.use("Agg")  # non-interactive backend for server/CI environments
import matplotlib.pyplot as plt

import plotly.graph_objects as go

from . import config
from .inputs import PricingInputs, SweepResult


def _title(result: SweepResult, inputs: PricingInputs, pair: Optional[str]) -> str:
    domain = config.ASSET_DOMAINS.get(inputs.asset, config.ASSET_DOMAINS[config.DEFAULT_ASSET])
    model = config.MODEL_LABELS.get(result.model, result.model)
    prefix = f"{pair} " if pair else ""
    return f"{prefix}{domain['title']} Prices \u2014 {model} (\u03c3 = {result.sigma:.2%})"


def _default_path(name: str) -> str:
    config.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    return str(config.OUTPUT_DIR / name)


# ════════════════════════════════════════════════════════════════════════
#  MATPLOTLIB (static PNG)
# ════════════════════════════════════════════════════════════════════════

def plot_curve_matplotlib(
    result: SweepResult,
    inputs: PricingInputs,
    pair: Optional[str] = None,
    output_path: str = None,
) -> str:
    """
    Render call/put price curves as a PNG.

    Parameters
    ----------
    result : SweepResult from sweep()
    inputs : the request that produced it (for the ATM marker and labels)
    pair : currency pair label such as "USD/JPY" (fx only)
    output_path : PNG save path (default: config.OUTPUT_DIR / "price_curve.png")

    Returns
    -------
    str : the path written
    """
    if output_path is None:
        output_path = _default_path("price_curve.png")

    curve = result.curve
    fig, ax = plt.subplots(figsize=(config.FIG_WIDTH_2D, config.FIG_HEIGHT_2D))
    fig.patch.set_facecolor(config.DARK_BG)
    ax.set_facecolor(config.DARK_BG)

    ax.plot(curve.strikes, curve.calls, color=config.CALL_COLOR, linewidth=2.2, label="Call")
    ax.plot(curve.strikes, curve.puts, color=config.PUT_COLOR, linewidth=2.2, label="Put")

    # ATM line
    ax.axvline(inputs.level, color="white", alpha=0.35, linestyle="--", linewidth=1)
    ylim = ax.get_ylim()
    ax.text(inputs.level, ylim[1] * 0.95, f" ATM \u2248 {inputs.level:.2f}",
            color="white", alpha=0.6, fontsize=10)

    domain = config.ASSET_DOMAINS.get(inputs.asset, config.ASSET_DOMAINS[config.DEFAULT_ASSET])
    ax.set_xlabel("Strike (K)", fontsize=13, color="white")
    ax.set_ylabel("Option value", fontsize=13, color="white")
    ax.set_title(_title(result, inputs, pair), fontsize=16, fontweight="bold", color="white")
    ax.tick_params(colors="white", labelsize=10)
    ax.grid(True, alpha=config.GRID_COLOR_ALPHA, color="white")

    leg = ax.legend(title=domain["level_label"], loc="upper center", fontsize=10,
                    title_fontsize=11, facecolor="#191930", edgecolor="#ffffff30",
                    labelcolor="white")
    leg.get_title().set_color("white")

    for spine in ax.spines.values():
        spine.set_color("#333355")

    plt.tight_layout()
    plt.savefig(output_path, dpi=config.DPI, bbox_inches="tight",
                facecolor=config.DARK_BG, edgecolor="none")
    plt.close(fig)
    return output_path


# ════════════════════════════════════════════════════════════════════════
#  PLOTLY (interactive HTML)
# ════════════════════════════════════════════════════════════════════════

def plot_curve_plotly(
    result: SweepResult,
    inputs: PricingInputs,
    pair: Optional[str] = None,
    output_path: str = None,
) -> str:
    """Render interactive call/put curves as HTML. Returns the path written."""
    if output_path is None:
        output_path = _default_path("price_curve.html")

    curve = result.curve
    fig = go.Figure()
    for name, values, color in (
        ("Call", curve.calls, config.CALL_COLOR),
        ("Put", curve.puts, config.PUT_COLOR),
    ):
        fig.add_trace(go.Scatter(
            x=curve.strikes, y=values,
            mode="lines+markers", name=name,
            line=dict(color=color, width=2.5),
            hovertemplate=f"K=%{{x:.2f}}  {name}=%{{y:.2f}}<extra></extra>",
        ))

    fig.add_vline(
        x=inputs.level, line_dash="dash", line_color="rgba(255,255,255,0.4)",
        annotation_text=f"ATM \u2248 {inputs.level:.2f}",
        annotation_font=dict(color="rgba(255,255,255,0.7)", size=12),
    )

    fig.update_layout(
        title=dict(
            text=f"<b>{_title(result, inputs, pair)}</b>",
            font=dict(size=20, color="white"), x=0.5,
        ),
        xaxis=dict(
            title=dict(text="Strike (K)", font=dict(size=14, color="#ddd")),
            tickfont=dict(size=11, color="#ccc"),
            gridcolor=f"rgba(200,200,200,{config.GRID_COLOR_ALPHA})",
        ),
        yaxis=dict(
            title=dict(text="Option value", font=dict(size=14, color="#ddd")),
            tickfont=dict(size=11, color="#ccc"),
            gridcolor=f"rgba(200,200,200,{config.GRID_COLOR_ALPHA})",
        ),
        plot_bgcolor=config.DARK_BG,
        paper_bgcolor=config.DARK_BG,
        font=dict(color="white"),
        legend=dict(
            x=0.45, y=0.97, bgcolor="rgba(25,25,45,0.85)",
            bordercolor="rgba(255,255,255,0.15)", borderwidth=1,
            font=dict(size=12),
        ),
        width=1000, height=550,
        margin=dict(l=60, r=30, t=60, b=50),
    )

    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(output_path)
    return output_path
