from __future__ import annotations

import logging
import os
import uuid
from typing import Any, Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from rpsnet import Choice, GameSession, NetworkNotReady, OpponentUnavailable, SessionConfig, SessionError
from rpsnet.storage import StateStorage
from rpsnet.utils import configure_logging

logger = logging.getLogger(__name__)


class SessionReq(BaseModel):
    layout: Optional[str] = None
    policy: Optional[str] = None
    seed: Optional[int] = None


class PlayReq(BaseModel):
    choice: Union[int, str]


class RoundRes(BaseModel):
    player_choice: str
    computer_choice: str
    outcome: str


class ProbsRes(BaseModel):
    probs: Optional[List[float]] = None


def create_app(config: Optional[SessionConfig] = None, state_dir: Optional[str] = None) -> FastAPI:
    app = FastAPI(title="rpsnet RPS API")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in os.getenv("ALLOW_ORIGINS", "*").split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    base_config = config or SessionConfig.from_env()
    state_dir = state_dir or os.getenv("STATE_DIR", "./rps_state")
    # Session stays AWAITING_NETWORK until a client calls /session
    current: Dict[str, Any] = {"id": uuid.uuid4().hex[:8], "session": GameSession(base_config)}

    def session_status() -> Dict[str, Any]:
        session: GameSession = current["session"]
        out = session.status()
        out["id"] = current["id"]
        out["rounds"] = len(session.history)
        return out

    @app.get("/")
    def root():
        return {"ok": True, "service": "rpsnet"}

    @app.get("/healthz")
    def healthz():
        return {"status": "healthy"}

    @app.get("/state")
    def state():
        return session_status()

    @app.post("/session")
    def new_session(req: Optional[SessionReq] = None):
        cfg = SessionConfig.from_dict(base_config.to_dict())
        if req is not None:
            if req.layout is not None:
                cfg.layout = req.layout
            if req.policy is not None:
                cfg.policy = req.policy
            if req.seed is not None:
                cfg.seed = req.seed
        try:
            session = GameSession(cfg)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))
        current["id"] = uuid.uuid4().hex[:8]
        current["session"] = session
        logger.info("session %s created (layout=%s policy=%s)", current["id"], session.config.layout, session.config.policy)
        try:
            session.construct()
        except OpponentUnavailable as e:
            raise HTTPException(status_code=503, detail=str(e))
        return session_status()

    @app.post("/play", response_model=RoundRes)
    def play(req: PlayReq):
        try:
            choice = Choice.parse(req.choice)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))
        session: GameSession = current["session"]
        try:
            rnd = session.play(choice)
        except NetworkNotReady as e:
            raise HTTPException(status_code=409, detail=str(e))
        except OpponentUnavailable as e:
            raise HTTPException(status_code=503, detail=str(e))
        return RoundRes(**rnd.to_dict())

    @app.get("/history", response_model=List[RoundRes])
    def history():
        session: GameSession = current["session"]
        return [RoundRes(**r.to_dict()) for r in session.history]

    @app.get("/probs", response_model=ProbsRes)
    def probs():
        session: GameSession = current["session"]
        return ProbsRes(probs=session.probs())

    @app.post("/save")
    def save():
        session: GameSession = current["session"]
        path = StateStorage(state_dir).save_session(current["id"], session.snapshot())
        return {"ok": True, "id": current["id"], "path": path}

    @app.get("/sessions")
    def sessions():
        return {"sessions": StateStorage(state_dir).list_sessions()}

    @app.post("/session/{sid}/load")
    def load_session(sid: str):
        try:
            snap = StateStorage(state_dir).load_session(sid)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))
        if snap is None:
            raise HTTPException(status_code=404, detail="Session not found")
        try:
            session = GameSession.restore(snap)
        except SessionError as e:
            raise HTTPException(status_code=409, detail=str(e))
        current["id"] = sid
        current["session"] = session
        logger.info("session %s loaded (%d rounds, state=%s)", sid, len(session.history), session.state.value)
        return session_status()

    return app


configure_logging(os.getenv("LOG_LEVEL", "INFO"))
app = create_app()
