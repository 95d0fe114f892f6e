#!/usr/bin/env python3
"""
main.py — Price a European call/put curve across strikes.

Usage:
    python main.py                                    # Black-Scholes, equity defaults
    python main.py --model heston --seed 7            # Heston with default parameters
    python main.py --asset fx --pair USD/JPY --model binomial
"""

import argparse
import logging
import sys
import time

from option_curve import config
from option_curve.errors import PricingError
from option_curve.inputs import HestonParams, PricingInputs
from option_curve.models import ModelSettings, PricingModel
from option_curve.sweep import price_at_strike, sweep
from option_curve.visualization import plot_curve_matplotlib, plot_curve_plotly


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Price option curves across a strike range.")
    p.add_argument("--model", default=PricingModel.CLOSED_FORM.value,
                   help="closed_form | monte_carlo | binomial | heston (aliases accepted)")
    p.add_argument("--asset", choices=sorted(config.ASSET_DOMAINS), default=config.DEFAULT_ASSET)
    p.add_argument("--pair", type=str, default=None,
                   help="currency pair label for fx, e.g. USD/JPY")

    p.add_argument("--level", type=float, default=None, help="spot price or exchange rate")
    p.add_argument("--strike", type=float, default=config.DEFAULT_STRIKE)
    p.add_argument("--maturity", type=float, default=config.DEFAULT_MATURITY)
    p.add_argument("--rate", type=float, default=config.DEFAULT_RATE)
    p.add_argument("--low", type=float, default=None)
    p.add_argument("--high", type=float, default=None)

    p.add_argument("--v0", type=float, default=config.DEFAULT_V0)
    p.add_argument("--kappa", type=float, default=config.DEFAULT_KAPPA)
    p.add_argument("--theta", type=float, default=config.DEFAULT_THETA)
    p.add_argument("--xi", type=float, default=config.DEFAULT_XI)
    p.add_argument("--rho", type=float, default=config.DEFAULT_RHO)

    p.add_argument("--paths", type=int, default=None)
    p.add_argument("--steps", type=int, default=None)
    p.add_argument("--seed", type=int, default=config.SEED)
    p.add_argument("--workers", type=int, default=config.SWEEP_WORKERS)

    p.add_argument("--no-charts", action="store_true")
    p.add_argument("--no-html", action="store_true")
    p.add_argument("--verbose", action="store_true")
    return p.parse_args(argv)


def build_inputs(args) -> PricingInputs:
    """Fill asset-specific defaults (fx uses a USD/JPY-like range)."""
    fx = args.asset == "fx"
    level = args.level if args.level is not None else (
        config.FX_DEFAULT_LEVEL if fx else config.DEFAULT_LEVEL)
    low = args.low if args.low is not None else (
        config.FX_DEFAULT_LOW if fx else config.DEFAULT_LOW)
    high = args.high if args.high is not None else (
        config.FX_DEFAULT_HIGH if fx else config.DEFAULT_HIGH)
    return PricingInputs(
        level=level,
        strike=args.strike,
        maturity=args.maturity,
        rate=args.rate,
        low=low,
        high=high,
        heston=HestonParams(args.v0, args.kappa, args.theta, args.xi, args.rho),
        asset=args.asset,
    )


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    inputs = build_inputs(args)
    domain = config.ASSET_DOMAINS[inputs.asset]
    pair = args.pair
    if inputs.asset == "fx" and pair is None:
        pair = f"{config.DEFAULT_BASE_CCY}/{config.DEFAULT_QUOTE_CCY}"
    settings = ModelSettings(
        mc_paths=args.paths,
        binomial_steps=args.steps,
        heston_steps=args.steps,
        heston_paths=args.paths,
    )

    print(f"\n{'='*60}")
    print(f"  {domain['title']} Price Curve" + (f"  |  {pair}" if pair else ""))
    print(f"  Model: {args.model}  |  {domain['level_label']}: {inputs.level:g}")
    print(f"{'='*60}\n")

    t0 = time.time()
    print("[1/3] Pricing strike sweep...")
    try:
        result = sweep(inputs, args.model, settings=settings, sampler=args.seed,
                       workers=args.workers)
        quote = price_at_strike(inputs, args.model, settings=settings, sampler=args.seed)
    except PricingError as e:
        print(f"\n  ERROR: {e}")
        sys.exit(1)

    print(f"       Volatility (σ): {result.sigma:.4f}")
    print(f"       At K={quote.strike:.2f}: call {quote.call:.2f}  put {quote.put:.2f}")

    print("\n[2/3] Price curve:")
    print(result.curve.to_frame().to_string(index=False, float_format=lambda x: f"{x:.2f}"))

    if args.no_charts:
        print("\n[3/3] Skipping charts (--no-charts flag)")
    else:
        print("\n[3/3] Generating charts...")
        print(f"       -> {plot_curve_matplotlib(result, inputs, pair)}")
        if not args.no_html:
            print(f"       -> {plot_curve_plotly(result, inputs, pair)}")

    elapsed = time.time() - t0
    print(f"\n  Done in {elapsed:.1f}s.\n")


if __name__ == "__main__":
    main()
