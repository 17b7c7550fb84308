"""Command line interface over JSON dumps of tracker responses."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from .config import get_settings
from .meta import Mode
from .services import (
    METRICS,
    ScoreDelta,
    build_hiscores_series,
    build_trend_chart,
    parse_scores_response,
    parse_stats_history,
    parse_update_data,
)
from .utils.logging import configure_logging, get_logger

configure_logging()
LOGGER = get_logger(__name__)


def _read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _emit(payload: Dict[str, Any]) -> None:
    json.dump(payload, sys.stdout, indent=2)
    sys.stdout.write("\n")


def cmd_window(path: Path, metric: str, zoom_start: Optional[float], zoom_end: Optional[float]) -> int:
    history = parse_stats_history(_read_json(path))
    if history is None:
        LOGGER.error("Stats history in %s is empty (user not found)", path.as_posix())
        return 1
    chart = build_trend_chart(history, metric, zoom_start, zoom_end, settings=get_settings())
    LOGGER.info(
        "Analysed %s snapshots of %s: axis %.3f..%.3f",
        len(history),
        metric,
        chart["y_axis"]["min"],  # type: ignore[index]
        chart["y_axis"]["max"],  # type: ignore[index]
    )
    _emit(chart)
    return 0


def cmd_hiscores(path: Path, update_path: Optional[Path], mode: Mode) -> int:
    score_set = parse_scores_response(_read_json(path))
    delta = None
    if update_path is not None:
        update = parse_update_data(_read_json(update_path))
        delta = ScoreDelta(scores=update.new_scores, mode=mode)
    series = build_hiscores_series(score_set.scores, delta)
    LOGGER.info(
        "Built hiscores series for %s: %s",
        mode.label,
        ", ".join(f"{entry.grade.value}={len(entry.data)}" for entry in series),
    )
    _emit({"mode": mode.label, "series": [entry.as_dict() for entry in series]})
    return 0


def cmd_serve(host: str, port: int, reload: bool) -> int:
    import uvicorn

    uvicorn.run("quavertrack.api.app:app", host=host, port=port, reload=reload, log_level="info")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="quavertrack chart CLI")
    sub = parser.add_subparsers(dest="command")

    window = sub.add_parser("window", help="Trend chart bounds for a stats history dump")
    window.add_argument("path", type=Path)
    window.add_argument("--metric", choices=sorted(METRICS), default="global_rank")
    window.add_argument("--zoom-start", dest="zoom_start", type=float, default=None)
    window.add_argument("--zoom-end", dest="zoom_end", type=float, default=None)

    hiscores = sub.add_parser("hiscores", help="Per-grade series for a scores dump")
    hiscores.add_argument("path", type=Path)
    hiscores.add_argument("--update", type=Path, default=None)
    hiscores.add_argument("--mode", default="4k")

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--reload", action="store_true")

    args = parser.parse_args(argv)

    try:
        if args.command == "window":
            return cmd_window(args.path, args.metric, args.zoom_start, args.zoom_end)
        if args.command == "hiscores":
            return cmd_hiscores(args.path, args.update, Mode.parse(args.mode))
        if args.command == "serve":
            return cmd_serve(args.host, args.port, args.reload)
    except (OSError, ValueError) as exc:
        LOGGER.error("%s failed: %s", args.command, exc)
        return 2
    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
