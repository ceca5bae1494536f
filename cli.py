import argparse
import json
import sys
from pathlib import Path

from birthchart.services.orchestrators.chart_analysis import analyze_chart, build_payload
from birthchart.services.positions import ChartInputError


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Analyse a birth chart from a JSON placement list.")
    parser.add_argument("input", type=Path, help="JSON file: a placement list or {\"placements\": [...]}")
    parser.add_argument("output", type=Path, help="where to write the analysis JSON")
    parser.add_argument("--derive-descendant", action="store_true")
    parser.add_argument("--max-aspects", type=int, default=None)
    args = parser.parse_args(argv)

    data = json.loads(args.input.read_text(encoding="utf-8"))
    placements = data.get("placements") if isinstance(data, dict) else data
    if not isinstance(placements, list):
        placements = None
    try:
        analysis = analyze_chart(placements, derive_descendant=args.derive_descendant)
    except ChartInputError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    payload = build_payload(analysis, max_aspects=args.max_aspects)
    args.output.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"Wrote chart analysis → {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
