#!/usr/bin/env python3
"""
Basic Usage Example - FVG Highlighter

This script demonstrates the basic usage of the Fair Value Gap highlighter
with simulated EURUSD hourly bars. It shows how to:
- Load configuration and set up logging
- Backfill the bars already on the chart
- Annotate gaps as new bars open
- Disable, re-enable and tear the highlighter down

Run: python examples/basic_usage.py
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

from fvg_app.config.loader import ConfigLoader
from fvg_app.data.models import BarSeries
from fvg_app.engine import FVGHighlighter
from fvg_app.logging import configure_logging
from fvg_app.rendering.memory import InMemoryChart

# (high, low) per bar
HISTORY = [
    (1.10100, 1.10000),
    (1.10120, 1.10020),
    (1.10110, 1.10030),
    (1.10130, 1.10040),
    (1.10300, 1.10100),
    (1.10420, 1.10210),
    (1.10450, 1.10330),
    (1.10440, 1.10320),
]

LIVE = [
    (1.10400, 1.10250),
    (1.10300, 1.10080),
    (1.10180, 1.09950),
    (1.10020, 1.09900),
    (1.10010, 1.09880),
]


def create_bar_payloads(prices: List[tuple], start: datetime, first_index: int = 0) -> List[Dict[str, Any]]:
    """Create raw bar payloads with epoch-millisecond timestamps."""
    payloads = []
    for i, (high, low) in enumerate(prices, start=first_index):
        open_time = start + timedelta(hours=i)
        payloads.append({
            "timestamp": int(open_time.timestamp() * 1000),
            "open": low,
            "high": high,
            "low": low,
            "close": high,
        })
    return payloads


def print_annotations(highlighter: FVGHighlighter) -> None:
    """Print every annotation currently on the chart."""
    for index in sorted(highlighter.annotations.annotations):
        annotation = highlighter.get_annotation(index)
        rectangle = annotation["rectangle"]
        print(f"   🟨 Bar {index}: {annotation['direction']} gap, color {annotation['color']}")
        if rectangle:
            print(f"      {rectangle['name']}: {rectangle['gap_low']:.5f} - {rectangle['gap_high']:.5f}"
                  f" ({rectangle['start_time']} → {rectangle['end_time']})")


def main():
    """Main demonstration function."""
    print("🚀 FVG Highlighter - Basic Usage Demo")
    print("=" * 60)

    loader = ConfigLoader.create()
    config = loader.merge_config("EURUSD")
    configure_logging(**config["logging"])

    print("1. Loading bar history...")
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    bars = BarSeries(symbol="EURUSD")
    loaded = bars.load(create_bar_payloads(HISTORY, start))
    print(f"   Loaded {loaded} bars")
    print()

    print("2. Initializing the highlighter...")
    chart = InMemoryChart()
    highlighter = FVGHighlighter.from_config(bars, chart, "EURUSD")
    highlighter.attach()
    print(f"   Minimum gap: {highlighter.minimum_gap_price:.5f}")
    print()

    print("3. Backfilling...")
    created = highlighter.backfill()
    print(f"   Created {created} annotations")
    print_annotations(highlighter)
    print()

    print("4. Streaming live bars...")
    for payload in create_bar_payloads(LIVE, start, first_index=len(HISTORY)):
        bar = bars.append_payload(payload)
        highlighter.on_calculate(bar.index)
        print(f"   Bar {bar.index} opened at {bar.open_time.isoformat()}")
    print_annotations(highlighter)
    print()

    print("5. Disabling and re-enabling...")
    highlighter.set_enabled(False)
    print(f"   Annotations after disable: {len(highlighter.annotations)}")
    print(f"   Chart objects after disable: {len(list(chart.object_names()))}")
    highlighter.set_enabled(True)
    print(f"   Annotations after re-enable: {len(highlighter.annotations)}")
    print()

    stats = highlighter.get_runtime_stats()
    print("6. Runtime stats:")
    print(f"   State: {stats['state']}")
    print(f"   Evaluations: {stats['evaluations']}")
    print(f"   Detections: {stats['detections']}")
    print(f"   Skipped ticks: {stats['skipped_ticks']}")
    print()

    highlighter.destroy()
    print("✅ Demo completed successfully!")


if __name__ == "__main__":
    main()
