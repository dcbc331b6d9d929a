from __future__ import annotations

import json
import logging
import os
import re
from typing import Dict, List, Optional

import numpy as np

logger = logging.getLogger(__name__)

_SAFE_ID = re.compile(r"[A-Za-z0-9_-]{1,64}")


class NumpyEncoder(json.JSONEncoder):
    def default(self, obj):
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, np.generic):
            return obj.item()
        return json.JSONEncoder.default(self, obj)


class StateStorage:
    """Session snapshots as JSON files: <state_dir>/session_<id>.json"""

    def __init__(self, state_dir: str):
        self.state_dir = state_dir
        os.makedirs(self.state_dir, exist_ok=True)

    def _session_path(self, sid: str) -> str:
        if not isinstance(sid, str) or not _SAFE_ID.fullmatch(sid):
            raise ValueError(f"invalid session id: {sid!r}")
        return os.path.join(self.state_dir, f"session_{sid}.json")

    def save_session(self, sid: str, snapshot: Dict) -> str:
        p = self._session_path(sid)
        tmp = p + ".tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(snapshot, f, cls=NumpyEncoder)
        os.replace(tmp, p)
        logger.info("saved session %s (%d rounds) to %s", sid, len(snapshot.get("history", [])), p)
        return p

    def load_session(self, sid: str) -> Optional[Dict]:
        p = self._session_path(sid)
        if not os.path.exists(p):
            return None
        with open(p, "r", encoding="utf-8") as f:
            return json.load(f)

    def list_sessions(self) -> List[str]:
        out: List[str] = []
        for name in sorted(os.listdir(self.state_dir)):
            if name.startswith("session_") and name.endswith(".json"):
                out.append(name[len("session_"):-len(".json")])
        return out
