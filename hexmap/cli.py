from __future__ import annotations

import argparse
import datetime as dt
import json
import os
from pathlib import Path
from typing import Any, Dict, List

from .config import MAP_SIZES, MapGeneratorConfig, resolve_config
from .export import write_map_json
from .generator import generate_map
from .territory import format_stats


class RunLog:
    """Plain-text record of one CLI generation run under ``logs/``.

    The header line holds the resolved config and seed, so a logged map can
    be regenerated exactly; ``log`` is handed to ``generate_map`` as its
    ``log_fn`` and collects the pipeline messages that follow.
    """

    def __init__(self, *, run_label: str = "hexmap", log_dir: str = "logs") -> None:
        os.makedirs(log_dir, exist_ok=True)
        run_id = dt.datetime.now(dt.timezone.utc).strftime("%Y%m%d_%H%M%S")
        self.log_path = os.path.join(log_dir, f"{run_label}_{run_id}.log")
        self._log_fp = open(self.log_path, "w", encoding="utf-8")

    def close(self) -> None:
        self._log_fp.close()

    def log(self, msg: str) -> None:
        self._log_fp.write(msg + "\n")
        self._log_fp.flush()

    def log_config(self, config: MapGeneratorConfig, seed: int | None) -> None:
        self.log(f"Config: {json.dumps(config.to_dict(), sort_keys=True)} seed={seed}")


def _load_config_file(path: Path) -> Dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise SystemExit(f"Failed to read config from {path}: {exc}")
    if not isinstance(data, dict):
        raise SystemExit(f"Expected top-level object in {path}.")
    return data


def build_config(args: argparse.Namespace) -> MapGeneratorConfig:
    config = MAP_SIZES[args.size]
    try:
        if args.config:
            config = MapGeneratorConfig.from_mapping(_load_config_file(Path(args.config)), base=config)
        return resolve_config(
            config,
            grid_width=args.width,
            grid_height=args.height,
            territory_count=args.territories,
            min_territory_size=args.min_size,
            max_territory_size=args.max_size,
            empty_tile_percent=args.empty_percent,
        )
    except ValueError as exc:
        raise SystemExit(f"Invalid configuration: {exc}")


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a hex territory map.")
    parser.add_argument("--size", choices=sorted(MAP_SIZES), default="medium", help="Size preset")
    parser.add_argument("--config", type=str, default=None, help="JSON file with config overrides")
    parser.add_argument("--width", type=int, default=None, help="Grid width in tiles")
    parser.add_argument("--height", type=int, default=None, help="Grid height in tiles")
    parser.add_argument("--territories", type=int, default=None, help="Requested territory count")
    parser.add_argument("--min-size", type=int, default=None, help="Minimum territory size")
    parser.add_argument("--max-size", type=int, default=None, help="Maximum territory size")
    parser.add_argument("--empty-percent", type=float, default=None, help="Blocked tile percent (0-50)")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--json", type=str, default=None, help="Write the map as JSON to this path")
    parser.add_argument("--show", action="store_true", help="Render a PNG preview")
    parser.add_argument(
        "--out",
        type=str,
        default="visualizations/hex_map.png",
        help="Preview path used with --show",
    )
    parser.add_argument("--log", action="store_true", help="Write a run log under logs/")
    return parser


def main(argv: List[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    config = build_config(args)

    run_log = RunLog() if args.log else None
    try:
        if run_log is not None:
            run_log.log_config(config, args.seed)
        game_map = generate_map(
            config,
            seed=args.seed,
            log_fn=run_log.log if run_log is not None else None,
        )
        stats_line = format_stats(game_map.stats())
        if run_log is not None:
            run_log.log(stats_line)
    finally:
        if run_log is not None:
            run_log.close()

    print(stats_line)
    if args.json:
        json_path = Path(args.json)
        write_map_json(game_map, json_path)
        print(f"Saved map JSON to {json_path}")
    if args.show:
        from .render import render_map_png

        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_bytes(render_map_png(game_map))
        print(f"Saved map PNG to {out_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
