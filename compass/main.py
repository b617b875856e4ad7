"""FastAPI application for Decision Compass: analysis and AHP weighting endpoints."""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from compass.ahp import (
    PairwiseComparison,
    calculate_ahp_weights,
    generate_pairs,
    interpret_consistency,
    scale_label,
)
from compass.ahp.scale import SAATY_SCALE
from compass.ahp.weighting import apply_ahp_weights, apply_weights, reweight_group, sibling_groups
from compass.cache import AnalysisCache, hash_decision
from compass.config.settings import Settings
from compass.engine import AnalysisResult, DecisionAnalyzer
from compass.models.tree import Decision
from compass.recommendation import (
    ClaudeRecommendationService,
    Recommendation,
    RecommendationError,
    RecommendationService,
    fallback_recommendation,
)
from compass.schemas import (
    ApplyWeightsRequest,
    ComparisonPayload,
    DecisionPayload,
    FactorTreeRequest,
    PairsRequest,
    ReweightRequest,
    TreeAHPRequest,
    WeightsRequest,
)

settings = Settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Decision Compass API", version="0.1.0")

# CORS: allow the Next.js frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.state.analysis_cache = AnalysisCache(ttl_seconds=settings.analysis_cache_ttl)
app.state.recommendation_service = (
    ClaudeRecommendationService(settings) if settings.recommendations_enabled else None
)


def get_analyzer() -> DecisionAnalyzer:
    return DecisionAnalyzer()


def get_analysis_cache(request: Request) -> AnalysisCache:
    return request.app.state.analysis_cache


def get_recommendation_service(request: Request) -> Optional[RecommendationService]:
    return request.app.state.recommendation_service


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"success": False, "message": str(exc)})


def _analysis_envelope(
    analysis: dict[str, Any],
    recommendation: dict[str, Any],
    cached: bool,
    ai_unavailable: bool = False,
) -> dict[str, Any]:
    data: dict[str, Any] = {
        "analysis": analysis,
        "recommendation": recommendation,
        "cached": cached,
    }
    if ai_unavailable:
        data["aiUnavailable"] = True
    return {"success": True, "data": data}


async def _recommend(
    service: Optional[RecommendationService],
    analysis: AnalysisResult,
    decision: Decision,
) -> Optional[Recommendation]:
    """Ask the AI service for advice; None means fall back to the algorithm."""
    if service is None:
        return None
    try:
        return await service.generate(analysis, decision)
    except RecommendationError:
        logger.exception(f"Recommendation failed for decision {decision.id}")
        return None


@app.post("/api/decisions/{decision_id}/analyze")
async def analyze_decision(
    decision_id: str,
    body: DecisionPayload,
    analyzer: DecisionAnalyzer = Depends(get_analyzer),
    cache: AnalysisCache = Depends(get_analysis_cache),
    service: Optional[RecommendationService] = Depends(get_recommendation_service),
):
    """Score the decision tree and attach AI advice, reusing cached results."""
    decision = body.to_decision(decision_id)
    decision_hash = hash_decision(decision)

    entry = cache.get(decision_id, decision_hash)
    if entry is not None:
        logger.info(f"Analysis cache hit for decision {decision_id} (hits={entry.hit_count})")
        return _analysis_envelope(entry.analysis, entry.recommendation, cached=True)

    try:
        analysis = analyzer.analyze(decision)
    except Exception as e:
        logger.exception(f"Analysis failed for decision {decision_id}")
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Failed to analyze decision", "error": str(e)},
        )

    recommendation = await _recommend(service, analysis, decision)
    if recommendation is None:
        return _analysis_envelope(
            analysis.to_dict(),
            fallback_recommendation(analysis, decision).to_dict(),
            cached=False,
            ai_unavailable=True,
        )

    analysis_data = analysis.to_dict()
    recommendation_data = recommendation.to_dict()
    cache.put(decision_id, decision_hash, analysis_data, recommendation_data)
    return _analysis_envelope(analysis_data, recommendation_data, cached=False)


@app.get("/api/decisions/{decision_id}/analysis")
async def get_cached_analysis(
    decision_id: str,
    cache: AnalysisCache = Depends(get_analysis_cache),
):
    """Return the newest unexpired analysis for a decision."""
    entry = cache.latest(decision_id)
    if entry is None:
        return JSONResponse(
            status_code=404,
            content={"success": False, "message": "No cached analysis found"},
        )
    envelope = _analysis_envelope(entry.analysis, entry.recommendation, cached=True)
    envelope["data"]["cachedAt"] = entry.created_at.isoformat()
    return envelope


@app.delete("/api/decisions/{decision_id}/analysis/cache")
async def clear_analysis_cache(
    decision_id: str,
    cache: AnalysisCache = Depends(get_analysis_cache),
):
    removed = cache.clear(decision_id)
    return {"success": True, "message": "Analysis cache cleared", "removed": removed}


def _comparisons(payloads: list[ComparisonPayload]) -> list[PairwiseComparison]:
    return [PairwiseComparison(item_a=c.item_a, item_b=c.item_b, value=c.ratio()) for c in payloads]


@app.post("/api/ahp/pairs")
async def ahp_pairs(body: PairsRequest):
    """All pairs to compare, in the order the UI should present them."""
    pairs = generate_pairs(body.items)
    return {
        "success": True,
        "data": {
            "pairs": [p.to_dict() for p in pairs],
            "total": len(pairs),
            "scale": [{"value": v, "label": scale_label(v)} for v in SAATY_SCALE],
        },
    }


@app.post("/api/ahp/weights")
async def ahp_weights(body: WeightsRequest):
    """Solve one sibling group's pairwise judgments into weights."""
    result = calculate_ahp_weights(body.items, _comparisons(body.comparisons))
    data = result.to_dict()
    data["interpretation"] = interpret_consistency(result.consistency_ratio).to_dict()
    return {"success": True, "data": data}


@app.post("/api/tree/sibling-groups")
async def tree_sibling_groups(body: FactorTreeRequest):
    """Sibling groups the pairwise workflow should visit, top-down."""
    factors = [f.to_factor() for f in body.factors]
    groups = [
        [{"id": node.id, "name": node.name} for node in group]
        for group in sibling_groups(factors)
    ]
    return {"success": True, "data": {"groups": groups, "total": len(groups)}}


@app.post("/api/tree/apply-weights")
async def tree_apply_weights(body: ApplyWeightsRequest):
    """Write an id-keyed weight map back onto the factor tree."""
    factors = apply_weights([f.to_factor() for f in body.factors], body.weights)
    return {"success": True, "data": {"factors": [f.to_dict() for f in factors]}}


@app.post("/api/tree/reweight")
async def tree_reweight(body: ReweightRequest):
    """Apply the equal or slider-normalized weighting method to one sibling group."""
    factors = reweight_group([f.to_factor() for f in body.factors], body.method, body.parent_id)
    return {"success": True, "data": {"factors": [f.to_dict() for f in factors]}}


@app.post("/api/tree/ahp-weights")
async def tree_ahp_weights(body: TreeAHPRequest):
    """Solve a sibling group's pairwise judgments and write them onto the tree."""
    factors, result = apply_ahp_weights(
        [f.to_factor() for f in body.factors],
        _comparisons(body.comparisons),
        body.parent_id,
    )
    data = result.to_dict()
    data["interpretation"] = interpret_consistency(result.consistency_ratio).to_dict()
    data["factors"] = [f.to_dict() for f in factors]
    return {"success": True, "data": data}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level=settings.log_level.lower())
