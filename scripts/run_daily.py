#!/usr/bin/env python3
"""
COGNITIVE CALENDAR daily load report.

Usage:
    python scripts/run_daily.py
    python scripts/run_daily.py --events data/sample_events.json
    python scripts/run_daily.py --json
    python scripts/run_daily.py --ask "how heavy is my day?"
    python scripts/run_daily.py -v
"""

import argparse
import asyncio
import base64
import logging
import sys
from pathlib import Path

# Ensure cognitive_calendar is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cognitive_calendar.config import CalendarConfig
from cognitive_calendar.explain.generator import generate_explanation
from cognitive_calendar.ingest.loader import EventSourceError, load_events
from cognitive_calendar.pipeline.daily import DailyPipeline
from cognitive_calendar.voice.synthesizer import VoiceSynthesizer


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Run COGNITIVE CALENDAR load scoring for one day of meetings",
    )
    parser.add_argument(
        "--events", "-e", type=str, default=None, help="Events JSON file, default: sample day"
    )
    parser.add_argument("--json", "-j", action="store_true", help="Output JSON only")
    parser.add_argument("--ask", "-a", type=str, default=None, help="Voice query to answer")
    parser.add_argument(
        "--speak", type=str, default=None, help="Write the spoken answer to this MP3 path"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    args = parser.parse_args()

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        events = load_events(args.events)
    except EventSourceError as exc:
        print(f"Error: {exc}")
        return 1

    config = CalendarConfig.from_env()
    pipeline = DailyPipeline(config)
    schedule = asyncio.run(pipeline.run(events))

    if args.json:
        print(schedule.to_json())
    else:
        summary = schedule.summary
        print()
        print("=" * 60)
        print("COGNITIVE CALENDAR")
        print("=" * 60)
        for scored in schedule.events:
            start = scored.start.strftime("%H:%M") if scored.start else "--:--"
            print(
                f"{start}  {scored.event.title:<32} "
                f"load={scored.total_load:.2f} capacity={scored.capacity_remaining:.0f}"
            )
            for driver in generate_explanation(scored):
                print(f"         - {driver}")
        print("-" * 60)
        print(f"Day load:   {summary.total_load:.0%}")
        print(f"Capacity:   {summary.capacity_remaining:.0f}")
        print(f"High risk:  {'YES' if summary.high_risk else 'no'}")
        print("=" * 60)

    if args.ask:
        answer = pipeline.respond(args.ask, schedule.summary)
        print(answer)
        if args.speak:
            result = asyncio.run(VoiceSynthesizer(config.voice).synthesize(answer))
            if result.status == "ok":
                Path(args.speak).write_bytes(base64.b64decode(result.audio_base64))
                print(f"Speech saved to {args.speak}")
            else:
                print(f"Speech {result.status}: {result.reason}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
