from __future__ import annotations

from fastapi import APIRouter, HTTPException

from fairdeck_backend.api.deps import deal_service
from fairdeck_backend.config import config
from fairdeck_backend.engine.errors import EngineRejectedOperation
from fairdeck_backend.engine.models import (
    AuditRecord,
    AuditVerification,
    CommitmentView,
    CommitRequest,
    DealRequest,
    DealResponse,
    DeckResponse,
    ErrorCode,
    GameView,
    RevealRequest,
    RevealView,
    VerifyRequest,
    VerifyResponse,
)


router = APIRouter(prefix=config.api_prefix)

STATUS_BY_CODE = {
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.GAME_NOT_FOUND: 404,
    ErrorCode.NOT_COMMITTED: 409,
    ErrorCode.ALREADY_COMMITTED: 409,
    ErrorCode.ALREADY_REVEALED: 409,
    ErrorCode.DECK_EXHAUSTED: 409,
    ErrorCode.SEED_MISMATCH: 400,
    ErrorCode.INVALID_CARD_COUNT: 400,
    ErrorCode.INVALID_SEED: 400,
    ErrorCode.INVALID_PLAYERS: 400,
}


def _http_error(exc: EngineRejectedOperation) -> HTTPException:
    return HTTPException(
        status_code=STATUS_BY_CODE.get(exc.code, 400),
        detail=exc.to_error().model_dump(mode="json"),
    )


@router.post("/games/{game_id}/commit", response_model=CommitmentView)
async def commit_server_seed(game_id: str, request: CommitRequest) -> CommitmentView:
    try:
        return await deal_service.commit_server_seed(game_id, bytes.fromhex(request.server_seed_hash))
    except EngineRejectedOperation as exc:
        raise _http_error(exc) from exc


@router.post("/games/{game_id}/reveal", response_model=RevealView)
async def reveal_seeds(game_id: str, request: RevealRequest) -> RevealView:
    try:
        return await deal_service.reveal_seeds(
            game_id,
            bytes.fromhex(request.server_seed),
            bytes.fromhex(request.client_seed),
        )
    except EngineRejectedOperation as exc:
        raise _http_error(exc) from exc


@router.get("/games/{game_id}/deck", response_model=DeckResponse)
async def get_shuffled_deck(game_id: str) -> DeckResponse:
    try:
        deck = await deal_service.generate_shuffled_deck(game_id)
    except EngineRejectedOperation as exc:
        raise _http_error(exc) from exc
    return DeckResponse(game_id=game_id, deck=deck)


@router.post("/games/{game_id}/deal", response_model=DealResponse)
async def shuffle_and_deal(game_id: str, request: DealRequest) -> DealResponse:
    try:
        return await deal_service.shuffle_and_deal(game_id, request.players, request.cards_per_player)
    except EngineRejectedOperation as exc:
        raise _http_error(exc) from exc


@router.post("/games/{game_id}/deal-initial", response_model=DealResponse)
async def deal_initial_cards(game_id: str, request: DealRequest) -> DealResponse:
    try:
        return await deal_service.deal_initial_cards(game_id, request.players, request.cards_per_player)
    except EngineRejectedOperation as exc:
        raise _http_error(exc) from exc


@router.post("/games/{game_id}/verify", response_model=VerifyResponse)
async def verify_shuffle(game_id: str, request: VerifyRequest) -> VerifyResponse:
    try:
        valid = await deal_service.verify_shuffle(game_id, request.claimed_deck)
    except EngineRejectedOperation as exc:
        raise _http_error(exc) from exc
    return VerifyResponse(game_id=game_id, valid=valid)


@router.get("/games/{game_id}", response_model=GameView)
async def get_game(game_id: str) -> GameView:
    try:
        return await deal_service.get_game_view(game_id)
    except EngineRejectedOperation as exc:
        raise _http_error(exc) from exc


@router.get("/games/{game_id}/audit", response_model=AuditRecord)
async def export_audit(game_id: str) -> AuditRecord:
    try:
        return await deal_service.export_audit(game_id)
    except EngineRejectedOperation as exc:
        raise _http_error(exc) from exc


@router.post("/audit/verify", response_model=AuditVerification)
async def verify_audit_record(record: AuditRecord) -> AuditVerification:
    return await deal_service.verify_audit_record(record.model_dump(mode="json"))
