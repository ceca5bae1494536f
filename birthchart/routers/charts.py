import os

from fastapi import APIRouter, HTTPException

from ..schemas import AnalyzeRequest, AnalyzeResponse, InterpretResponse
from ..services.orchestrators.chart_analysis import analyze_chart, build_interpretation, build_payload
from ..services.positions import ChartInputError

router = APIRouter(prefix="/v1/charts", tags=["charts"])


def _default_max_aspects():
    raw = os.getenv("DEFAULT_MAX_ASPECTS")
    return int(raw) if raw else None


def _run(req: AnalyzeRequest):
    raw = None if req.placements is None else [p.model_dump() for p in req.placements]
    try:
        return analyze_chart(raw, derive_descendant=req.options.derive_descendant)
    except ChartInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze(req: AnalyzeRequest):
    analysis = _run(req)
    max_aspects = req.options.max_aspects
    if max_aspects is None:
        max_aspects = _default_max_aspects()
    return build_payload(analysis, max_aspects=max_aspects)


@router.post("/interpret", response_model=InterpretResponse)
def interpret(req: AnalyzeRequest):
    return build_interpretation(_run(req))
