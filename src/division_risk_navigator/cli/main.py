from __future__ import annotations

import argparse
import sys
from pathlib import Path

from ..core import PROJECTION_YEARS, apply_scenario, project_future_risk, resolve_year
from ..io import dump_result_file, load_assessment_file
from ..models import ScenarioModifiers, classify_risk, to_scenario_modifiers


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dnr-score",
        description="Score a division risk assessment, optionally projected to a year and adjusted by a scenario.",
    )
    parser.add_argument("input", help="JSON file containing a risk assessment or a map of risk factors")
    parser.add_argument(
        "--out",
        default="examples/output/result.json",
        help="Output JSON file path (default: examples/output/result.json)",
    )
    parser.add_argument(
        "--year",
        default=None,
        help=f"Treat the input as a future baseline and project it ({', '.join(PROJECTION_YEARS)})",
    )
    parser.add_argument(
        "--modifier",
        action="append",
        default=[],
        metavar="FACTOR=PCT",
        help="Scenario change in percent, e.g. hospital_stress=-10 (repeatable)",
    )
    return parser


def _parse_modifiers(items: list[str]) -> ScenarioModifiers:
    changes: dict[str, str] = {}
    for item in items:
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise ValueError(f"modifier must look like FACTOR=PCT, got {item!r}")
        changes[name.strip()] = value.strip()
    return to_scenario_modifiers(changes)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    input_path = Path(args.input).resolve()
    output_path = Path(args.out).resolve()

    if not input_path.exists() or not input_path.is_file():
        print(f"error: input file not found: {input_path}", file=sys.stderr)
        return 2

    try:
        base = load_assessment_file(input_path)
        modifiers = _parse_modifiers(args.modifier)
    except Exception as exc:
        print(f"error: invalid input: {exc}", file=sys.stderr)
        return 2

    year = None
    if args.year is not None:
        year = resolve_year(args.year)
        base = project_future_risk(base, year)
    result = apply_scenario(base, modifiers)
    level = classify_risk(result.overall)

    payload = {
        "base": base.as_dict(),
        "result": result.as_dict(),
        "risk_level": level.value,
        "year": year,
        "modifiers": modifiers.as_dict(),
    }

    output_path.parent.mkdir(parents=True, exist_ok=True)
    dump_result_file(output_path, payload)

    print(f"overall={result.overall}")
    print(f"risk_level={level.value}")
    print(f"wrote={output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
