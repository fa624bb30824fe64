from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Literal

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.responses import HTMLResponse
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from cubewalk.config import WalkSettings, configure_logging
from cubewalk.game.errors import CubeWalkError, InputTooLargeError
from cubewalk.game.geometry import DIR_NAMES
from cubewalk.game.sim import WalkResult, walk_text
from cubewalk.protocol import error, msg
from cubewalk.util.ids import new_walk_id

settings = WalkSettings.from_env()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    configure_logging(settings)
    yield


app = FastAPI(title="cubewalk", lifespan=lifespan)


class WalkRequest(BaseModel):
    board: str
    program: str
    mode: Literal["fold", "wrap"] = "fold"


def _run(req: WalkRequest, *, record_trace: bool = False) -> WalkResult:
    return walk_text(req.board, req.program, req.mode, settings=settings, record_trace=record_trace)


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/")
def index() -> HTMLResponse:
    return HTMLResponse(
        """
<!doctype html>
<html>
  <head>
    <meta charset="utf-8" />
    <title>cubewalk</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 24px; }
      textarea, #log { font-family: ui-monospace, Menlo, Consolas, monospace; }
      textarea { width: 100%; }
      #log { white-space: pre-wrap; background: #111; color: #ddd; padding: 12px; border-radius: 8px; min-height: 180px; }
    </style>
  </head>
  <body>
    <h1>cubewalk</h1>
    <p>POST <code>/walk</code> or stream a walk over the WebSocket at <code>/ws</code>.</p>
    <textarea id="board" rows="14" placeholder="board"></textarea>
    <p>
      <input id="program" placeholder="10R5L5R10L4R5L5" size="40" />
      <select id="mode"><option>fold</option><option>wrap</option></select>
      <button id="walk">Walk</button>
    </p>
    <div id="log"></div>
    <script>
      const $ = (id) => document.getElementById(id);
      const log = (line) => { $("log").textContent += line + "\\n"; };

      $("walk").onclick = () => {
        $("log").textContent = "";
        const proto = location.protocol === "https:" ? "wss" : "ws";
        const ws = new WebSocket(`${proto}://${location.host}/ws`);
        ws.onopen = () => ws.send(JSON.stringify({
          v: 1,
          type: "walk",
          payload: { board: $("board").value, program: $("program").value, mode: $("mode").value },
        }));
        ws.onmessage = (ev) => {
          log(ev.data);
          const m = JSON.parse(ev.data);
          if (m.type === "result" || m.type === "error") ws.close();
        };
      };
    </script>
  </body>
</html>
""".strip()
    )


@app.post("/walk")
def post_walk(req: WalkRequest) -> dict[str, Any]:
    walk_id = new_walk_id()
    try:
        result = _run(req)
    except InputTooLargeError as e:
        logger.warning("walk %s rejected: %s", walk_id, e)
        raise HTTPException(status_code=413, detail=str(e)) from e
    except CubeWalkError as e:
        logger.warning("walk %s rejected: %s", walk_id, e)
        raise HTTPException(status_code=422, detail=str(e)) from e
    logger.info("walk %s (%s) password %d", walk_id, req.mode, result.password)
    return {"walkId": walk_id, **result.as_payload()}


@app.websocket("/ws")
async def ws_endpoint(ws: WebSocket) -> None:
    await ws.accept()
    try:
        while True:
            raw = await ws.receive_json()
            if not isinstance(raw, dict):
                continue
            mtype = raw.get("type")
            payload = raw.get("payload") or {}

            if mtype != "walk":
                await ws.send_json(error("bad_type", f"unknown message type {mtype!r}"))
                continue

            try:
                req = WalkRequest.model_validate(payload)
            except ValueError as e:
                await ws.send_json(error("bad_request", str(e)))
                continue

            walk_id = new_walk_id()
            try:
                result = await run_in_threadpool(_run, req, record_trace=True)
            except InputTooLargeError as e:
                logger.warning("walk %s rejected: %s", walk_id, e)
                await ws.send_json(error("too_large", str(e)))
                continue
            except CubeWalkError as e:
                logger.warning("walk %s rejected: %s", walk_id, e)
                await ws.send_json(error("bad_input", str(e)))
                continue

            for entry in result.trace:
                await ws.send_json(
                    msg(
                        "step",
                        {
                            "walkId": walk_id,
                            "index": entry.index,
                            "moved": entry.moved,
                            "face": entry.position.face,
                            "row": entry.position.row,
                            "col": entry.position.col,
                            "heading": DIR_NAMES[entry.heading],
                        },
                    )
                )
            await ws.send_json(msg("result", {"walkId": walk_id, **result.as_payload()}))

    except WebSocketDisconnect:
        pass
    except Exception as e:
        logger.exception("websocket walk failed")
        try:
            await ws.send_json(error("server_error", str(e)))
        except Exception:
            pass
