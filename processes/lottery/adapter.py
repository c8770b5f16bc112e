from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from pipeline.io.files import write_json, write_text, write_yaml
from pipeline.io.validate import load_schema, schema_errors, validate_obj
from processes.lottery_export.writer import (
    build_export_df,
    format_results_text,
    write_results_csv,
)
from validators import validate_draft_config

from .engine import run_draft
from .odds import format_distribution, simulate_pick_distribution
from .types import DraftConfig, DraftConfigError, DraftResult, DraftStep, GenerationError, Team

# Resolve repo root (two levels up from this file) and schemas root
REPO_ROOT = Path(__file__).resolve().parents[2]
SCHEMAS_ROOT = REPO_ROOT / "pipeline" / "schemas"

KNOWN_KEYS = {"totalTeams", "lotteryTeams", "teams", "seed"}

# snake_case spellings accepted in config files
_CONFIG_ALIASES = {"total_teams": "totalTeams", "lottery_teams": "lotteryTeams"}
_TEAM_ALIASES = {"is_lottery": "isLottery"}


def _rename_keys(d: Mapping[str, Any], aliases: Mapping[str, str]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for k, v in d.items():
        key = aliases.get(k, k)
        # an explicit camelCase key wins over its alias
        if key in out and k != key:
            continue
        out[key] = v
    return out


def normalize_config_keys(cfg: Mapping[str, Any]) -> dict[str, Any]:
    """Map snake_case config keys onto the camelCase names the schema uses."""
    out = _rename_keys(cfg, _CONFIG_ALIASES)
    teams = out.get("teams")
    if isinstance(teams, list):
        out["teams"] = [
            _rename_keys(t, _TEAM_ALIASES) if isinstance(t, Mapping) else t for t in teams
        ]
    return out


def _coerce_scalar(val: str) -> int | float | bool | str:
    lower = val.lower()
    if lower in ("true", "false"):
        return lower == "true"
    try:
        if "." in val:
            return float(val)
        return int(val)
    except ValueError:
        return val


def load_config(config_path: Path | None, inline_kv: Sequence[str] | None = None) -> dict[str, Any]:
    cfg: dict[str, Any] = {}
    if config_path:
        text = config_path.read_text(encoding="utf-8")
        if config_path.suffix.lower() in (".yaml", ".yml"):
            import yaml  # lazy

            try:
                cfg = dict(yaml.safe_load(text) or {})
            except yaml.YAMLError as e:
                msg = f"Failed to parse YAML config {config_path}: {e}"
                raise ValueError(msg) from e
        else:
            try:
                cfg = dict(json.loads(text))
            except json.JSONDecodeError as e:
                msg = f"Failed to parse JSON config {config_path}: {e}"
                raise ValueError(msg) from e
    if inline_kv:
        for item in inline_kv:
            if "=" not in item:
                continue
            k, v = item.split("=", 1)
            cfg[k.strip()] = _coerce_scalar(v.strip())
    return cfg


def default_teams(
    total_teams: int, lottery_teams: int, percentage: float | None = None
) -> list[Team]:
    """Starter roster: ``Team 1..N``, lottery teams first.

    Without an explicit percentage each lottery team gets an equal whole
    share, ``floor(100 / lottery_teams)``.
    """
    if lottery_teams < 1:
        raise ValueError(f"lottery_teams must be >= 1, got {lottery_teams}")
    if percentage is None:
        percentage = float(100 // lottery_teams)
    teams: list[Team] = []
    for i in range(total_teams):
        is_lottery = i < lottery_teams
        teams.append(
            Team(
                id=i + 1,
                name=f"Team {i + 1}",
                percentage=percentage if is_lottery else None,
                is_lottery=is_lottery,
            )
        )
    return teams


def default_config(
    total_teams: int, lottery_teams: int, percentage: float | None = None
) -> DraftConfig:
    return DraftConfig(
        total_teams=total_teams,
        lottery_teams=lottery_teams,
        teams=default_teams(total_teams, lottery_teams, percentage),
    )


def config_from_mapping(
    cfg: Mapping[str, Any],
    *,
    schemas_root: Path | None = None,
    validate: bool = True,
) -> DraftConfig:
    """Build a DraftConfig from a loaded config mapping.

    With ``validate`` the mapping is first checked against
    draft_config.schema.yaml; every structural problem is reported at once.
    """
    cfg = normalize_config_keys(cfg)
    if validate:
        schema = load_schema((schemas_root or SCHEMAS_ROOT) / "draft_config.schema.yaml")
        problems = schema_errors(schema, cfg)
        if problems:
            raise ValueError("Config failed schema validation: " + "; ".join(problems))
    try:
        return DraftConfig.from_dict(cfg)
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed draft config: {e!r}") from e


def _schema_version(schemas_root: Path | None, name: str) -> str:
    schema = load_schema((schemas_root or SCHEMAS_ROOT) / f"{name}.schema.yaml")
    return str(schema.get("version", "0.0.0"))


def _log_step(step: DraftStep, verbose: bool, msg: str = "") -> None:
    if verbose:
        print(f"[lottery] step={step.value} {msg}".rstrip(), file=sys.stderr)


def run_adapter(
    *,
    config_path: Path | None,
    config_kv: Sequence[str] | None = None,
    seed: int | None = None,
    out_csv: Path | None = None,
    out_text: Path | None = None,
    out_json: Path | None = None,
    schemas_root: Path | None = None,
    validate: bool = True,
    verbose: bool = False,
) -> dict[str, Any]:
    """Load, validate, draw and export one lottery run.

    Raises DraftConfigError when the config breaks a draft rule and
    GenerationError when no valid draw exists for it.
    """
    step = DraftStep.SETUP
    cfg = normalize_config_keys(load_config(config_path, config_kv))
    unknown = sorted(set(cfg) - KNOWN_KEYS)
    if unknown and verbose:
        print(
            f"[lottery] Warning: unknown config keys ignored: {', '.join(unknown)}",
            file=sys.stderr,
        )
    config = config_from_mapping(cfg, schemas_root=schemas_root, validate=validate)
    if seed is None and cfg.get("seed") is not None:
        seed = int(cfg["seed"])

    check = validate_draft_config(config)
    if not check.is_valid:
        raise DraftConfigError(check.errors)
    _log_step(step, verbose, f"teams={config.total_teams} lottery={config.lottery_teams}")

    step = DraftStep.ANIMATING
    _log_step(step, verbose, f"seed={seed}")
    result = run_draft(config, seed=seed, validate=False)

    step = DraftStep.RESULTS
    outputs: dict[str, str] = {}
    if out_csv is not None:
        outputs["csv"] = str(write_results_csv(build_export_df(result), out_csv))
    if out_text is not None:
        outputs["text"] = str(write_text(format_results_text(result), out_text))
    if out_json is not None:
        payload = result.to_dict()
        payload["schema_version"] = _schema_version(schemas_root, "draft_result")
        if validate:
            schema = load_schema((schemas_root or SCHEMAS_ROOT) / "draft_result.schema.yaml")
            validate_obj(schema, payload)
        outputs["json"] = str(write_json(payload, out_json))
    _log_step(step, verbose, f"first_pick={result.order[0].name}")

    return {
        "step": step.value,
        "config": config,
        "result": result,
        "outputs": outputs,
    }


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="python -m processes.lottery")
    p.add_argument("--config", type=Path)
    p.add_argument("--config-kv", nargs="*", help="Inline overrides key=value")
    p.add_argument("--seed", type=int)
    p.add_argument("--out-csv", type=Path)
    p.add_argument("--out-text", type=Path)
    p.add_argument("--out-json", type=Path)
    p.add_argument(
        "--simulate",
        type=int,
        metavar="N",
        help="Print the pick distribution over N seeded draws instead of drawing once",
    )
    p.add_argument(
        "--template-out",
        type=Path,
        help="Write a starter config (see --total-teams/--lottery-teams) and exit",
    )
    p.add_argument("--total-teams", type=int, default=12)
    p.add_argument("--lottery-teams", type=int, default=6)
    p.add_argument(
        "--schemas-root",
        type=Path,
        help="Override schemas root (defaults to repo-relative pipeline/schemas)",
    )
    p.add_argument("--no-validate", action="store_true")
    p.add_argument("--verbose", action="store_true")
    return p


def _print_errors(errors: Sequence[str]) -> None:
    for err in errors:
        print(f"[lottery] ✗ {err}", file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    if args.template_out:
        cfg = default_config(args.total_teams, args.lottery_teams)
        write_yaml(cfg.to_dict(), args.template_out)
        if args.verbose:
            print(f"[lottery] template={args.template_out}", file=sys.stderr)
        return 0

    if args.config is None and not args.config_kv:
        print("[lottery] error: --config is required", file=sys.stderr)
        return 1

    try:
        if args.simulate is not None:
            if args.out_csv or args.out_text or args.out_json:
                print(
                    "[lottery] error: --simulate cannot be combined with --out-csv/--out-text/--out-json",
                    file=sys.stderr,
                )
                return 1
            cfg = normalize_config_keys(load_config(args.config, args.config_kv))
            config = config_from_mapping(
                cfg, schemas_root=args.schemas_root, validate=not args.no_validate
            )
            check = validate_draft_config(config)
            if not check.is_valid:
                raise DraftConfigError(check.errors)
            seed = args.seed if args.seed is not None else int(cfg.get("seed") or 0)
            table = simulate_pick_distribution(config, trials=args.simulate, seed=seed)
            print(format_distribution(table))
            return 0

        res = run_adapter(
            config_path=args.config,
            config_kv=args.config_kv,
            seed=args.seed,
            out_csv=args.out_csv,
            out_text=args.out_text,
            out_json=args.out_json,
            schemas_root=args.schemas_root,
            validate=not args.no_validate,
            verbose=bool(args.verbose),
        )
    except DraftConfigError as e:
        _print_errors(e.errors)
        return 1
    except GenerationError as e:
        print(f"[lottery] ✗ cannot run lottery ({e.code.value}): {e.message}", file=sys.stderr)
        return 2
    except ValueError as e:
        print(f"[lottery] error: {e}", file=sys.stderr)
        return 1

    result: DraftResult = res["result"]
    if not res["outputs"]:
        print(format_results_text(result))
    elif args.verbose:
        for kind, path in res["outputs"].items():
            print(f"[lottery] {kind}={path}", file=sys.stderr)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
