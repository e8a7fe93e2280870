"""
Estimate Session API — thin adapter over the rules engine and cost rollup.

POST /api/estimate/start           — New session for a product family
GET  /api/estimate/{id}            — Current state + cost breakdown
POST /api/estimate/{id}/edit       — One field edit on one line item
POST /api/estimate/{id}/parameters — Replace rollup parameters
POST /api/estimate/{id}/lines      — Add another valve row
POST /api/estimate/{id}/compare    — Diff a candidate price against the stored snapshot
POST /api/estimate/{id}/use-price  — Capture the snapshot and hand the price over
POST /api/estimate/{id}/generate   — Capture the snapshot and hand the whole estimate to the quote
"""

import logging
import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import models
from ..catalog import PricingCatalog, get_catalog
from ..database import get_db
from ..line_items import EngineState, EstimateParameters
from ..rollup import CostBreakdown, CostRollupCalculator
from ..rules_engine import SelectionRulesEngine
from ..schemas import (
    AddLineRequest,
    EditRequest,
    EstimateResponse,
    GenerateQuoteResponse,
    ParameterUpdate,
    PriceRequest,
    StartEstimateRequest,
    UsePriceResponse,
)
from ..snapshots import SnapshotStore, SqlSnapshotStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/estimate", tags=["estimate"])


# --- Dependencies ---

def get_rules_engine(catalog: PricingCatalog = Depends(get_catalog)) -> SelectionRulesEngine:
    return SelectionRulesEngine(catalog)


def get_calculator(catalog: PricingCatalog = Depends(get_catalog)) -> CostRollupCalculator:
    return CostRollupCalculator(catalog)


# --- Helpers ---

def _get_session(db: Session, session_id: str) -> models.EstimateSession:
    session = db.query(models.EstimateSession).filter(
        models.EstimateSession.id == session_id,
    ).first()
    if not session:
        raise HTTPException(status_code=404, detail="Estimate session not found")
    return session


def _load_state(session: models.EstimateSession) -> EngineState:
    return EngineState.model_validate(session.state_json)


def _save_state(db: Session, session: models.EstimateSession, state: EngineState) -> None:
    session.state_json = state.model_dump(mode="json")
    session.updated_at = datetime.utcnow()
    db.commit()


def _snapshot_key(session: models.EstimateSession) -> str:
    # One snapshot slot per owning project, falling back to the session itself
    return session.project_id or session.id


def _build_response(session: models.EstimateSession, state: EngineState,
                    breakdown: CostBreakdown) -> dict:
    return EstimateResponse(
        session_id=session.id,
        family=state.family,
        project_id=session.project_id,
        status=session.status,
        catalog_version=state.catalog_version,
        state=state.model_dump(mode="json"),
        breakdown=breakdown.model_dump(),
    ).model_dump(mode="json")


def _apply_parameters(rules: SelectionRulesEngine, state: EngineState,
                      update: ParameterUpdate) -> EngineState:
    for name, value in update.model_dump(exclude_unset=True).items():
        if value is None:
            continue
        state = rules.set_parameter(state, name, value)
    return state


# --- Endpoints ---

@router.post("/start")
def start_estimate(
    request: StartEstimateRequest,
    db: Session = Depends(get_db),
    rules: SelectionRulesEngine = Depends(get_rules_engine),
    calculator: CostRollupCalculator = Depends(get_calculator),
):
    """Start a session with catalog defaults for the family."""
    state = rules.start_session(request.family, EstimateParameters())
    if request.parameters:
        state = _apply_parameters(rules, state, request.parameters)

    session = models.EstimateSession(
        id=str(uuid.uuid4()),
        family=state.family.value,
        project_id=request.project_id,
        catalog_version=state.catalog_version,
        state_json=state.model_dump(mode="json"),
        status="active",
    )
    db.add(session)
    db.commit()
    logger.info("Estimate session %s started (%s)", session.id, state.family.value)

    return _build_response(session, state, calculator.compute(state))


@router.get("/{session_id}")
def get_estimate(
    session_id: str,
    db: Session = Depends(get_db),
    calculator: CostRollupCalculator = Depends(get_calculator),
):
    session = _get_session(db, session_id)
    state = _load_state(session)
    return _build_response(session, state, calculator.compute(state))


@router.post("/{session_id}/edit")
def edit_line(
    session_id: str,
    request: EditRequest,
    db: Session = Depends(get_db),
    rules: SelectionRulesEngine = Depends(get_rules_engine),
    calculator: CostRollupCalculator = Depends(get_calculator),
):
    """
    Apply one field edit. Unknown lines or fields are ignored by the engine,
    so the response is always the current estimate.
    """
    session = _get_session(db, session_id)
    state = rules.apply(_load_state(session), request.line_id, request.field, request.value)
    _save_state(db, session, state)
    return _build_response(session, state, calculator.compute(state))


@router.post("/{session_id}/parameters")
def update_parameters(
    session_id: str,
    request: ParameterUpdate,
    db: Session = Depends(get_db),
    rules: SelectionRulesEngine = Depends(get_rules_engine),
    calculator: CostRollupCalculator = Depends(get_calculator),
):
    session = _get_session(db, session_id)
    state = _apply_parameters(rules, _load_state(session), request)
    _save_state(db, session, state)
    return _build_response(session, state, calculator.compute(state))


@router.post("/{session_id}/lines")
def add_line(
    session_id: str,
    request: AddLineRequest,
    db: Session = Depends(get_db),
    rules: SelectionRulesEngine = Depends(get_rules_engine),
    calculator: CostRollupCalculator = Depends(get_calculator),
):
    session = _get_session(db, session_id)
    try:
        state = rules.add_line_item(_load_state(session), request.category)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    _save_state(db, session, state)
    return _build_response(session, state, calculator.compute(state))


@router.post("/{session_id}/compare")
def compare_price(
    session_id: str,
    request: PriceRequest,
    db: Session = Depends(get_db),
    calculator: CostRollupCalculator = Depends(get_calculator),
):
    """What would change against the last captured snapshot. Writes nothing."""
    session = _get_session(db, session_id)
    state = _load_state(session)
    breakdown = calculator.compute(state)
    store = SnapshotStore(SqlSnapshotStorage(db))

    price = _resolve_price(request, breakdown)
    candidate = store.build_snapshot(state, price, request.currency, request.flow_spec)
    result = store.compare(_snapshot_key(session), candidate)

    return {
        "diff": result.model_dump(),
        "changes": [str(change) for change in result.changed_fields],
        "candidate": candidate.model_dump(mode="json"),
    }


@router.post("/{session_id}/use-price")
def use_price(
    session_id: str,
    request: PriceRequest,
    db: Session = Depends(get_db),
    calculator: CostRollupCalculator = Depends(get_calculator),
):
    """
    Capture the snapshot and return the price for the project record.

    The diff against the previous snapshot is computed before the slot is
    overwritten, so the caller still sees what moved.
    """
    session = _get_session(db, session_id)
    state = _load_state(session)
    breakdown = calculator.compute(state)

    price = _resolve_price(request, breakdown)
    snapshot, result = _capture(db, session, state, price, request)
    session.status = "priced"
    session.updated_at = datetime.utcnow()
    db.commit()

    return UsePriceResponse(
        resolved_price=price,
        currency=request.currency,
        total_self_cost_in_currency=breakdown.amount("total_self_cost", request.currency),
        snapshot=snapshot.model_dump(mode="json"),
        diff=result.model_dump(),
    ).model_dump(mode="json")


def _resolve_price(request: PriceRequest, breakdown: CostBreakdown) -> float:
    if request.price is not None:
        return request.price
    return breakdown.amount("sales_price", request.currency)


def _capture(db: Session, session: models.EstimateSession, state: EngineState,
             price: float, request: PriceRequest):
    """Diff against the previous snapshot, then overwrite the slot with this one."""
    store = SnapshotStore(SqlSnapshotStorage(db))
    key = _snapshot_key(session)
    previous = store.last(key)
    snapshot = store.capture(key, state, price, request.currency, request.flow_spec)
    return snapshot, store.diff(previous, snapshot)


@router.post("/{session_id}/generate")
def generate_quote(
    session_id: str,
    request: PriceRequest,
    db: Session = Depends(get_db),
    calculator: CostRollupCalculator = Depends(get_calculator),
):
    """
    Hand the estimate over to quote generation.

    Same snapshot capture as use-price, but the response carries every line
    item with its selection, the full breakdown and the flow data.
    """
    session = _get_session(db, session_id)
    state = _load_state(session)
    breakdown = calculator.compute(state)

    price = _resolve_price(request, breakdown)
    snapshot, result = _capture(db, session, state, price, request)
    session.status = "quoted"
    session.updated_at = datetime.utcnow()
    db.commit()
    logger.info("Estimate session %s handed to quote generation (%s %s)",
                session.id, request.currency, price)

    return GenerateQuoteResponse(
        session_id=session.id,
        family=state.family,
        project_id=session.project_id,
        catalog_version=state.catalog_version,
        state=state.model_dump(mode="json"),
        breakdown=breakdown.model_dump(),
        flow_spec=request.flow_spec,
        resolved_price=price,
        currency=request.currency,
        snapshot=snapshot.model_dump(mode="json"),
        diff=result.model_dump(),
    ).model_dump(mode="json")
