#!/usr/bin/env python3
"""Scenario drag comparison — console report.

Runs the pre-funded, internal cash pool and external LOC scenarios against
one generated event sequence and prints each scenario's horizon and
annualized performance drag, plus the daily cumulative drag table.

Usage:
  cd backend
  source .venv/bin/activate
  python scripts/scenario_report.py
  python scripts/scenario_report.py --days 90 --seed 7 --csv drag.csv
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import pandas as pd

# Add backend to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from cashpool.services.report_service import comparison_frame, drag_summary_frame
from cashpool.services.simulation_service import compare_scenarios
from cashpool.simulation.validation import ConfigurationError

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s", datefmt="%H:%M:%S")
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Compare performance drag across funding scenarios")
    parser.add_argument("--days", type=int, default=None, help="Simulation horizon in days (default: 30)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the day-event generator")
    parser.add_argument("--csv", help="Write the daily drag comparison to this CSV path")
    args = parser.parse_args()

    try:
        comparison = compare_scenarios(days=args.days, seed=args.seed)
    except ConfigurationError as e:
        logger.error("Invalid configuration: %s", e)
        sys.exit(1)

    with pd.option_context("display.width", 160, "display.max_rows", 400):
        print(drag_summary_frame(comparison)[["name", "horizon_drag_usd", "annualized_drag_usd"]])
        print()
        cumulative = comparison_frame(comparison).filter(like="_cumulative") * 1_000_000
        print(cumulative.round(0))

    if args.csv:
        out_path = Path(args.csv)
        comparison_frame(comparison).to_csv(out_path)
        logger.info("Wrote %s", out_path)


if __name__ == "__main__":
    main()
