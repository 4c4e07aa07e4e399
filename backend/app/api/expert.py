"""Expert-system recommendation endpoints."""
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.services.rule_engine import RuleEngine, SqlRuleEngine, summarize_facts

router = APIRouter(prefix="/expert", tags=["expert"])


class FactsRequest(BaseModel):
    facts: list[Any] = Field(..., min_length=1)
    userId: str | None = None


class RecommendationResponse(BaseModel):
    ok: bool = True
    top: dict | None
    recomendaciones: list[dict]
    fallas: dict[str, list[dict]]


def get_rule_engine(db: Session = Depends(get_db)) -> RuleEngine:
    return SqlRuleEngine(db)


@router.post("/recomendar", response_model=RecommendationResponse)
def recommend(
    request: FactsRequest,
    engine: RuleEngine = Depends(get_rule_engine),
):
    """Evaluate facts and return ranked recommendations and failures."""
    rows = engine.evaluate(request.facts, request.userId)
    return RecommendationResponse(**summarize_facts(rows))


@router.post("/eval-pretty")
def evaluate_pretty(
    request: FactsRequest,
    engine: RuleEngine = Depends(get_rule_engine),
):
    """Pass through the engine's human-readable evaluation."""
    return engine.evaluate_pretty(request.facts)
