#!/usr/bin/env python3
"""
Export the synthesized tide curve for offline inspection.

Usage:
    python scripts/export_curve.py --station tower-pier --output results/
    python scripts/export_curve.py --predictions data/predictions.json --plot

Outputs:
    results/<station>_curve.csv      - Interpolated samples (time, level)
    results/<station>_extrema.csv    - Padded extrema, synthetic ones flagged
    results/<station>_curve.png      - Curve plot (with --plot)
"""

import argparse
import logging
import sys
import time
from datetime import datetime, timezone
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config.settings import Settings, get_settings
from tidecurve.core.events import RenderWindow
from tidecurve.core.interpolation import interpolate_curve
from tidecurve.core.padding import pad_extrema
from tidecurve.data.predictions import load_predictions, synthesize_predictions
from tidecurve.data.stations import DEFAULT_STATION, get_station

logger = logging.getLogger(__name__)


def build_frames(predictions, window: RenderWindow, settings: Settings):
    """Pad and interpolate, returning (samples, extrema) DataFrames."""
    curve = settings.curve
    series = pad_extrema(predictions, window, curve.half_cycle_seconds)
    samples = interpolate_curve(series, window, curve.sample_step_seconds)

    samples_df = pd.DataFrame({
        "time": pd.to_datetime(samples.times, unit="s", utc=True),
        "level": samples.levels,
    })
    extrema_df = pd.DataFrame([
        {
            "time": pd.to_datetime(event.time, unit="s", utc=True),
            "type": event.kind.value,
            "level": event.level,
            "synthetic": event.synthetic,
        }
        for event in series
        if window.contains(event.time)
    ])
    return samples_df, extrema_df


def plot_curve(samples_df: pd.DataFrame, extrema_df: pd.DataFrame, now: float, title: str, path: Path) -> None:
    fig, ax = plt.subplots(figsize=(12, 4))

    now_ts = pd.to_datetime(now, unit="s", utc=True)
    past = samples_df[samples_df["time"] <= now_ts]
    future = samples_df[samples_df["time"] >= now_ts]

    ax.plot(past["time"], past["level"], color="tab:cyan", linewidth=2, label="Past")
    ax.plot(future["time"], future["level"], color="tab:cyan", linestyle="--", alpha=0.6, label="Forecast")
    ax.fill_between(past["time"], past["level"], samples_df["level"].min(), color="tab:cyan", alpha=0.15)

    if not extrema_df.empty:
        real = extrema_df[~extrema_df["synthetic"]]
        synthetic = extrema_df[extrema_df["synthetic"]]
        ax.scatter(real["time"], real["level"], marker="D", color="tab:orange", zorder=3, label="Predicted")
        ax.scatter(synthetic["time"], synthetic["level"], marker="D", facecolors="none",
                   edgecolors="tab:orange", zorder=3, label="Padded")

    ax.axvline(now_ts, color="grey", linewidth=1)
    ax.set_xlabel("Time (UTC)")
    ax.set_ylabel("Level (m)")
    ax.set_title(title)
    ax.legend(loc="upper right")

    plt.tight_layout()
    plt.savefig(path, dpi=150)
    plt.close(fig)


def main():
    parser = argparse.ArgumentParser(
        description="Export the interpolated tide curve to CSV (and optionally PNG)"
    )
    parser.add_argument(
        "--predictions",
        type=str,
        default=None,
        help="Path to predictions JSON file (default: synthesize for --station)",
    )
    parser.add_argument(
        "--station",
        type=str,
        default=DEFAULT_STATION.id,
        help=f"Station id (default: {DEFAULT_STATION.id})",
    )
    parser.add_argument(
        "--now",
        type=str,
        default=None,
        help="Anchor time as ISO-8601 (default: current time)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to settings YAML file",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="results/",
        help="Output directory (default: results/)",
    )
    parser.add_argument(
        "--plot",
        action="store_true",
        help="Also save a PNG plot",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    settings = Settings.load(Path(args.config)) if args.config else get_settings()
    station = get_station(args.station)
    if station is None:
        logger.error(f"Unknown station: {args.station}")
        sys.exit(1)

    if args.now:
        parsed = datetime.fromisoformat(args.now.replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        now = parsed.timestamp()
    else:
        now = time.time()

    curve = settings.curve
    window = RenderWindow.around(now, curve.past_seconds, curve.future_seconds)

    if args.predictions:
        predictions = load_predictions(args.predictions)
    else:
        predictions = synthesize_predictions(
            window.start - curve.half_cycle_seconds,
            window.end,
            mean_level=station.mean_level,
            amplitude=station.amplitude,
            half_cycle=curve.half_cycle_seconds,
        )
        logger.info(f"Synthesized {len(predictions)} extrema for {station.name}")

    if len(predictions) < 2:
        logger.error("Need at least 2 predictions to build a curve")
        sys.exit(1)

    samples_df, extrema_df = build_frames(predictions, window, settings)

    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)

    curve_path = output_dir / f"{station.id}_curve.csv"
    samples_df.to_csv(curve_path, index=False)
    logger.info(f"Saved {len(samples_df)} samples to {curve_path}")

    extrema_path = output_dir / f"{station.id}_extrema.csv"
    extrema_df.to_csv(extrema_path, index=False)
    logger.info(f"Saved {len(extrema_df)} extrema to {extrema_path}")

    if args.plot:
        plot_path = output_dir / f"{station.id}_curve.png"
        plot_curve(samples_df, extrema_df, now, station.name, plot_path)
        logger.info(f"Curve plot saved to {plot_path}")


if __name__ == "__main__":
    main()
