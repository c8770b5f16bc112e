from __future__ import annotations

import argparse
from pathlib import Path

from .writer import (
    build_export_df,
    default_export_name,
    format_results_text,
    load_result_json,
    write_results_csv,
)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="python -m processes.lottery_export")
    p.add_argument("--result-json", type=Path, required=True)
    p.add_argument("--out-csv", type=Path)
    p.add_argument("--out-dir", type=Path, default=Path("."))
    p.add_argument("--text", action="store_true", help="Print pick lines to stdout")
    return p


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    result = load_result_json(args.result_json)
    out = args.out_csv or args.out_dir / default_export_name(result.timestamp or None)
    write_results_csv(build_export_df(result), out)
    if args.text:
        print(format_results_text(result))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
