"""
Global configuration for the option price curve engine.

Keeps all magic numbers in one place. Override per call via keyword
arguments, via CLI args in main.py, or by editing this file directly
for persistent changes.
"""

from pathlib import Path


# ── paths ────────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent
OUTPUT_DIR = PROJECT_ROOT / "output"


# ── strike sweep ─────────────────────────────────────────────────────────
STRIKE_LOW_MULT = 0.5           # first strike = 0.5 x level
STRIKE_HIGH_MULT = 1.5          # last strike = 1.5 x level
STRIKE_STEP_MULT = 0.05         # 21 strikes across the range
PRICE_DECIMALS = 2              # strikes and prices are quoted to the cent


# ── simulation sizes ─────────────────────────────────────────────────────
MC_PATHS = 10_000               # terminal-value Monte Carlo trials
BINOMIAL_STEPS = 100            # CRR lattice depth
HESTON_STEPS = 100              # Euler steps per Heston path
HESTON_PATHS = 10_000           # Heston paths
PATH_BATCH_SIZE = 5_000         # paths per vectorized batch; cancel is checked between batches
SWEEP_WORKERS = 1               # >1 prices strikes on a thread pool


# ── default pricing request (what the input form starts with) ───────────
DEFAULT_LEVEL = 100.0
DEFAULT_STRIKE = 100.0
DEFAULT_MATURITY = 1.0          # years
DEFAULT_RATE = 0.05             # annualized, continuous compounding
DEFAULT_LOW = 90.0
DEFAULT_HIGH = 110.0

# heston defaults: equity-like, negative spot/vol correlation
DEFAULT_V0 = 0.04
DEFAULT_KAPPA = 2.0
DEFAULT_THETA = 0.04
DEFAULT_XI = 0.3
DEFAULT_RHO = -0.7


# ── asset domains ────────────────────────────────────────────────────────
# the math is identical; only labels differ
ASSET_DOMAINS = {
    "equity": {
        "title": "Stock Option",
        "level_label": "Spot price (S)",
        "range_label": "price",
    },
    "fx": {
        "title": "FX Option",
        "level_label": "Exchange rate (R)",
        "range_label": "exchange rate",
    },
}
DEFAULT_ASSET = "equity"
DEFAULT_BASE_CCY = "USD"
DEFAULT_QUOTE_CCY = "JPY"
FX_DEFAULT_LEVEL = 110.0
FX_DEFAULT_LOW = 105.0
FX_DEFAULT_HIGH = 115.0


# ── visualization ────────────────────────────────────────────────────────
DARK_BG = "#0c0c16"
GRID_COLOR_ALPHA = 0.12
DPI = 200                       # matplotlib export resolution
FIG_WIDTH_2D = 12
FIG_HEIGHT_2D = 6
CALL_COLOR = "#4d96ff"
PUT_COLOR = "#ff6b6b"

MODEL_LABELS = {
    "closed_form": "Black-Scholes",
    "monte_carlo": "Monte Carlo",
    "binomial": "Binomial (CRR)",
    "heston": "Heston",
}


# ── random seed ──────────────────────────────────────────────────────────
SEED = None  # None = OS entropy; pass an int for reproducible sweeps
