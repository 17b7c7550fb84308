"""FastAPI app that turns tracker records into chart-ready series."""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..config import get_settings
from ..errors import UpdateStatusError
from ..meta import Meta, Mode
from ..services import (
    METRICS,
    Score,
    ScoreDelta,
    analyze_time_series,
    build_hiscores_series,
    build_trend_chart,
    describe_point,
    grade_color,
    parse_maps,
    parse_score,
    parse_stats_history,
    parse_stats_update,
    parse_update_data,
    summarize_update,
)
from ..services.records import UpdateData
from ..version import APP_VERSION
from .dto import ChangesRequest, HiscoresRequest, ResolveRequest, TrendRequest, WindowRequest

LOGGER = logging.getLogger(__name__)

app = FastAPI(title=get_settings().api.title)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().api.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _parse_mode(value: str) -> Mode:
    try:
        return Mode.parse(value)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="Invalid mode provided") from exc


def _parse_hiscores(payload: HiscoresRequest) -> tuple[Mode, List[Score], UpdateData | None]:
    mode = _parse_mode(payload.mode)
    try:
        scores = [parse_score(row) for row in payload.scores]
        update = parse_update_data(payload.update) if payload.update is not None else None
    except ValueError as exc:
        LOGGER.warning("Rejecting hiscores payload: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return mode, scores, update


@app.post("/charts/window")
async def window_endpoint(payload: WindowRequest) -> JSONResponse:
    chart = get_settings().chart
    stats = analyze_time_series(
        payload.series,
        chart.default_zoom_start if payload.zoom_start is None else payload.zoom_start,
        chart.default_zoom_end if payload.zoom_end is None else payload.zoom_end,
        padding_ms=chart.window_padding_ms,
        offset_ratio=chart.axis_offset_ratio,
    )
    return JSONResponse(stats.as_dict())


@app.post("/charts/trend/{metric}")
async def trend_endpoint(metric: str, payload: TrendRequest) -> JSONResponse:
    if metric not in METRICS:
        raise HTTPException(status_code=404, detail="Unknown metric")
    try:
        history = parse_stats_history(payload.history)
    except ValueError as exc:
        LOGGER.warning("Rejecting stats history: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if history is None:
        raise HTTPException(status_code=404, detail="User not found")

    chart = build_trend_chart(
        history,
        metric,
        payload.zoom_start,
        payload.zoom_end,
        settings=get_settings(),
    )
    return JSONResponse(chart)


@app.post("/charts/hiscores")
async def hiscores_endpoint(payload: HiscoresRequest) -> JSONResponse:
    mode, scores, update = _parse_hiscores(payload)
    delta = ScoreDelta(scores=update.new_scores, mode=mode) if update is not None else None

    settings = get_settings()
    marker = settings.hiscores
    series = [
        entry.as_dict(
            color=grade_color(entry.grade, settings.ui.grade_colors),
            marker_symbol=marker.new_score_symbol,
            marker_size=marker.new_score_symbol_size,
        )
        for entry in build_hiscores_series(scores, delta)
    ]
    return JSONResponse({"mode": mode.label, "symbol_size": marker.default_symbol_size, "series": series})


@app.post("/charts/hiscores/resolve")
async def resolve_endpoint(payload: ResolveRequest) -> JSONResponse:
    _, scores, update = _parse_hiscores(payload)
    try:
        maps = parse_maps(payload.maps)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    delta_scores: List[Score] = []
    if update is not None:
        maps.update(update.maps)
        delta_scores = update.new_scores

    try:
        detail = describe_point(payload.origin_index, scores, delta_scores, maps)
    except IndexError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return JSONResponse(detail)


@app.post("/changes")
async def changes_endpoint(payload: ChangesRequest) -> JSONResponse:
    mode = _parse_mode(payload.mode)
    try:
        last_update = parse_stats_update(payload.last_update) if payload.last_update is not None else None
        update: UpdateData | UpdateStatusError | None = None
        if payload.error_status is not None:
            update = UpdateStatusError(payload.error_status)
        elif payload.update is not None:
            update = parse_update_data(payload.update)
    except ValueError as exc:
        LOGGER.warning("Rejecting update payload: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return JSONResponse(summarize_update(last_update, update, mode, settings=get_settings()))


@app.get("/metrics")
async def metrics() -> Dict[str, Any]:
    return {"metrics": [spec.as_dict() for spec in METRICS.values()]}


@app.get("/grades")
async def grades() -> Dict[str, Any]:
    overrides = get_settings().ui.grade_colors
    return {
        "grades": [
            {"grade": grade.value, "label": grade.label, "color": grade_color(grade, overrides)}
            for grade in Meta.iter_grades()
        ]
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/version")
async def version() -> dict[str, str]:
    return {"version": APP_VERSION}
