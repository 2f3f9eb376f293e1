import logging
import os
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, field_validator

from lupus_manager.config import load_app_config
from lupus_manager.domain.game import GameSession
from lupus_manager.domain.player import Player
from lupus_manager.domain.roles import ROLES
from lupus_manager.domain.value_objects import Phase, Role, ValidationFailure
from lupus_manager.domain.visibility import HIDDEN_ROLE_LABEL
from lupus_manager.session import (
    ModeratorSession,
    ModeratorSessionStore,
    SessionLimitExceeded,
    handle_add_player,
    handle_advance_phase,
    handle_assign_role,
    handle_eliminate_leader,
    handle_hide_all,
    handle_randomize_roles,
    handle_remove_player,
    handle_reset_game,
    handle_set_role_count,
    handle_start_game,
    handle_toggle_reveal,
    handle_toggle_status,
    handle_vote,
)

load_dotenv()

_log_level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, _log_level_name, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)

try:
    app_config = load_app_config()
except ValueError as e:
    logger.error(str(e))
    sys.exit(1)

app = FastAPI(title="Lupus Manager")


@app.exception_handler(SessionLimitExceeded)
async def session_limit_exceeded_handler(request: Request, exc: SessionLimitExceeded) -> JSONResponse:
    return JSONResponse(
        status_code=429, content={"detail": "セッション数が上限に達しました。しばらくしてから再試行してください。"}
    )


templates = Jinja2Templates(directory=Path(__file__).parent / "templates")

session_store = ModeratorSessionStore(max_sessions=app_config.max_sessions, min_players=app_config.min_players)


class AddPlayerRequest(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if len(v.strip()) > app_config.max_player_name_length:
            raise ValueError(f"player name must be at most {app_config.max_player_name_length} characters")
        return v


class RoleCountRequest(BaseModel):
    count: int


class AssignRoleRequest(BaseModel):
    role_id: str


def _serialize_role(role: Role) -> dict[str, Any]:
    return {"id": role.id, "name": role.name, "description": role.description, "icon": role.icon}


def _serialize_player(player: Player, game: GameSession) -> dict[str, Any]:
    # 非公開の役職は API 応答にも含めない
    revealed = game.is_revealed(player.id)
    return {
        "id": player.id,
        "name": player.name,
        "role": _serialize_role(player.role) if revealed else None,
        "revealed": revealed,
        "status": player.status.value,
        "votes": player.votes,
    }


def _serialize_session(session: ModeratorSession) -> dict[str, Any]:
    game = session.game
    leader = game.leading_player
    return {
        "game_id": session.game_id,
        "started": game.started,
        "turn": game.turn,
        "phase": game.phase.value,
        "players": [_serialize_player(p, game) for p in game.players],
        "can_start": game.can_start,
        "required_players": game.required_players,
        "living_players_count": game.living_players_count,
        "role_counts": dict(game.role_counts),
        "total_requested": game.total_requested,
        "leading_player_id": leader.id if leader is not None else None,
        "log": list(game.log),
    }


def _get_session(game_id: str) -> ModeratorSession:
    session = session_store.get(game_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


def _respond(session: ModeratorSession, failure: ValidationFailure | None = None) -> JSONResponse:
    """コマンド結果を返す。検証失敗は 400 として理由付きで返す。"""
    if failure is not None:
        content: dict[str, Any] = {"detail": failure.message, "reason": failure.reason.value}
        if failure.requested is not None:
            content["requested"] = failure.requested
            content["required"] = failure.required
        return JSONResponse(status_code=400, content=content)
    session_store.save(session)
    return JSONResponse(content=_serialize_session(session))


@app.get("/roles")
async def list_roles() -> JSONResponse:
    """役職レジストリを返す。"""
    return JSONResponse(content={"roles": [_serialize_role(r) for r in ROLES]})


# --- セッション ---


@app.post("/sessions")
async def create_session() -> JSONResponse:
    """空のロスターで新規セッションを作成する。"""
    session = session_store.create()
    return JSONResponse(content=_serialize_session(session), status_code=201)


@app.get("/sessions")
async def list_sessions() -> JSONResponse:
    """全セッション一覧を返す。"""
    sessions = session_store.list_sessions()
    return JSONResponse(
        content={
            "sessions": [
                {
                    "game_id": game_id,
                    "started": s.game.started,
                    "turn": s.game.turn,
                    "phase": s.game.phase.value,
                    "player_count": len(s.game.players),
                    "alive_count": s.game.living_players_count,
                }
                for game_id, s in sessions.items()
            ]
        }
    )


@app.get("/sessions/{game_id}")
async def get_session(game_id: str) -> JSONResponse:
    return _respond(_get_session(game_id))


@app.delete("/sessions/{game_id}", status_code=204)
async def delete_session(game_id: str) -> None:
    _get_session(game_id)
    session_store.delete(game_id)


@app.get("/sessions/{game_id}/board", response_class=HTMLResponse)
async def board(request: Request, game_id: str) -> HTMLResponse:
    """進行役用のボード画面を表示する。"""
    session = _get_session(game_id)
    return templates.TemplateResponse(
        request,
        "board.html",
        {
            "session": session,
            "game": session.game,
            "is_day": session.game.phase == Phase.DAY,
            "leader": session.game.leading_player,
            "roles": ROLES,
            "hidden_label": HIDDEN_ROLE_LABEL,
        },
    )


# --- 参加者 ---


@app.post("/sessions/{game_id}/players")
async def add_player(game_id: str, body: AddPlayerRequest) -> JSONResponse:
    session = _get_session(game_id)
    handle_add_player(session, body.name)
    return _respond(session)


@app.delete("/sessions/{game_id}/players/{player_id}")
async def remove_player(game_id: str, player_id: int) -> JSONResponse:
    session = _get_session(game_id)
    handle_remove_player(session, player_id)
    return _respond(session)


@app.post("/sessions/{game_id}/start")
async def start_game(game_id: str) -> JSONResponse:
    session = _get_session(game_id)
    return _respond(session, handle_start_game(session))


@app.post("/sessions/{game_id}/reset")
async def reset_game(game_id: str) -> JSONResponse:
    session = _get_session(game_id)
    handle_reset_game(session)
    return _respond(session)


# --- 配役 ---


@app.put("/sessions/{game_id}/role-counts/{role_id}")
async def set_role_count(game_id: str, role_id: str, body: RoleCountRequest) -> JSONResponse:
    session = _get_session(game_id)
    return _respond(session, handle_set_role_count(session, role_id, body.count))


@app.post("/sessions/{game_id}/randomize")
async def randomize_roles(game_id: str) -> JSONResponse:
    session = _get_session(game_id)
    return _respond(session, handle_randomize_roles(session))


@app.put("/sessions/{game_id}/players/{player_id}/role")
async def assign_role(game_id: str, player_id: int, body: AssignRoleRequest) -> JSONResponse:
    session = _get_session(game_id)
    return _respond(session, handle_assign_role(session, player_id, body.role_id))


# --- 投票・脱落・フェーズ ---


@app.post("/sessions/{game_id}/players/{player_id}/vote")
async def vote(game_id: str, player_id: int) -> JSONResponse:
    session = _get_session(game_id)
    return _respond(session, handle_vote(session, player_id))


@app.post("/sessions/{game_id}/players/{player_id}/toggle-status")
async def toggle_status(game_id: str, player_id: int) -> JSONResponse:
    session = _get_session(game_id)
    return _respond(session, handle_toggle_status(session, player_id))


@app.post("/sessions/{game_id}/eliminate-leader")
async def eliminate_leader(game_id: str) -> JSONResponse:
    """最多得票者を脱落させる。"""
    session = _get_session(game_id)
    return _respond(session, handle_eliminate_leader(session))


@app.post("/sessions/{game_id}/advance")
async def advance_phase(game_id: str) -> JSONResponse:
    session = _get_session(game_id)
    return _respond(session, handle_advance_phase(session))


# --- 役職の表示 ---


@app.post("/sessions/{game_id}/players/{player_id}/toggle-reveal")
async def toggle_reveal(game_id: str, player_id: int) -> JSONResponse:
    session = _get_session(game_id)
    handle_toggle_reveal(session, player_id)
    return _respond(session)


@app.post("/sessions/{game_id}/hide-all")
async def hide_all(game_id: str) -> JSONResponse:
    session = _get_session(game_id)
    handle_hide_all(session)
    return _respond(session)
