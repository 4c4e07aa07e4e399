"""Client for the external rule engine and shaping of its ranked facts."""
import json
from typing import Any, Protocol

from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.orm import Session

MAX_RESULTS = 12
SEVERITIES = ("critical", "warning", "info")


class RuleFact(BaseModel):
    """One row fired by the engine."""

    rule_id: int | str | None = None
    name: str
    action_type: str
    action_value: str | None = None
    priority: int = 0
    severity: str | None = None
    category: str | None = None


class RuleEngine(Protocol):
    def evaluate(self, facts: list[Any], user_id: str | None = None) -> list[RuleFact]:
        ...

    def evaluate_pretty(self, facts: list[Any]) -> Any:
        ...


class SqlRuleEngine:
    """Engine backed by the ``es_eval`` database functions."""

    def __init__(self, db: Session):
        self.db = db

    def evaluate(self, facts: list[Any], user_id: str | None = None) -> list[RuleFact]:
        rows = self.db.execute(
            text(
                "SELECT * FROM es_eval(CAST(:facts AS jsonb), CAST(:user_id AS uuid)) "
                "ORDER BY priority ASC, rule_id ASC LIMIT :limit"
            ),
            {"facts": json.dumps(facts), "user_id": user_id, "limit": MAX_RESULTS},
        ).mappings().all()
        return [RuleFact.model_validate(dict(row)) for row in rows]

    def evaluate_pretty(self, facts: list[Any]) -> Any:
        row = self.db.execute(
            text("SELECT es_eval_pretty(CAST(:facts AS jsonb)) AS result"),
            {"facts": json.dumps(facts)},
        ).mappings().first()
        return row["result"] if row else None


def _dedupe_by_value(items: list[dict]) -> list[dict]:
    seen = set()
    unique = []
    for item in items:
        key = (item.get("valor") or "").strip().lower()
        if key not in seen:
            seen.add(key)
            unique.append(item)
    return unique


def summarize_facts(rows: list[RuleFact]) -> dict:
    """Split fired rules into recommendations and failures and pick the top one.

    Unknown severities are filed as warnings. ``top`` is the first
    recommendation, else the most severe failure.
    """
    recommendations = []
    failures: dict[str, list[dict]] = {severity: [] for severity in SEVERITIES}

    for row in rows:
        if row.action_type == "RECOMENDAR":
            recommendations.append({
                "regla": row.name,
                "valor": row.action_value,
                "prioridad": row.priority,
            })
        elif row.action_type == "FALLA":
            severity = row.severity if row.severity in failures else "warning"
            failures[severity].append({
                "regla": row.name,
                "valor": row.action_value,
                "prioridad": row.priority,
                "category": row.category,
            })

    recommendations = _dedupe_by_value(recommendations)
    failures = {severity: _dedupe_by_value(items) for severity, items in failures.items()}

    top = None
    if recommendations:
        top = {**recommendations[0], "tipo": "RECOMENDAR"}
    else:
        for severity in SEVERITIES:
            if failures[severity]:
                top = {**failures[severity][0], "tipo": "FALLA"}
                break

    return {"top": top, "recomendaciones": recommendations, "fallas": failures}
