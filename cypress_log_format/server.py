"""Web UI + JSON API for the formatter.

Routes:
- GET  /                       interactive formatter page
- POST /api/fetch              {url}      -> {text}          (remote fetch proxy, CORS-safe)
- POST /api/format             {text}     -> {html}
- POST /api/permalink          {text}     -> {fragment}
- POST /api/permalink/decode   {fragment} -> {text, html}

Errors are answered as {"error": "..."} with an HTTP status; nothing here is
allowed to take the process down.
"""

from __future__ import annotations

import argparse
import logging
from typing import Any, Optional, Sequence

from fastapi import FastAPI, Response
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel

from . import config
from .exceptions import FetchError
from .fetch import fetch_remote_text
from .permalink import decode_permalink, encode_permalink
from .render import format_text, render_page

logger = logging.getLogger(__name__)


class FetchRequest(BaseModel):
    # Any: a non-string url is a "missing url" (400), not a validation error.
    url: Any = None


class TextRequest(BaseModel):
    text: str = ""


class FragmentRequest(BaseModel):
    fragment: str = ""


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=int(status_code), content={"error": str(message)})


def _too_large(text: str) -> Optional[JSONResponse]:
    limit = config.max_body_bytes()
    if len(text.encode("utf-8")) > limit:
        return _error(413, f"Payload too large (limit {limit} bytes)")
    return None


def create_app() -> FastAPI:
    app = FastAPI(title="cypress-log-format")

    @app.get("/favicon.ico")
    def favicon():
        return Response(status_code=204, media_type="image/x-icon")

    @app.get("/", response_class=HTMLResponse)
    def index():
        return HTMLResponse(render_page(interactive=True))

    @app.post("/api/fetch")
    def api_fetch(req: FetchRequest):
        try:
            text = fetch_remote_text(req.url)
        except FetchError as e:
            logger.warning("fetch proxy: %s", e)
            return _error(e.status_code, str(e))
        return {"text": text}

    @app.post("/api/format")
    def api_format(req: TextRequest):
        too_large = _too_large(req.text)
        if too_large is not None:
            return too_large
        return {"html": format_text(req.text, "html")}

    @app.post("/api/permalink")
    def api_permalink(req: TextRequest):
        too_large = _too_large(req.text)
        if too_large is not None:
            return too_large
        try:
            return {"fragment": encode_permalink(req.text)}
        except ValueError as e:
            return _error(400, str(e))

    @app.post("/api/permalink/decode")
    def api_permalink_decode(req: FragmentRequest):
        text = decode_permalink(req.fragment)
        return {"text": text, "html": format_text(text, "html") if text else ""}

    return app


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    parser = argparse.ArgumentParser(description="Serve the Cypress console formatter web UI.")
    parser.add_argument("--host", default=config.server_host(), help="Bind address (default: %(default)s)")
    parser.add_argument("--port", type=int, default=config.server_port(), help="Port (default: %(default)s)")
    args = parser.parse_args(list(argv) if argv is not None else None)

    import uvicorn

    logger.info(f"UI server running at http://{args.host}:{args.port}")
    uvicorn.run(create_app(), host=str(args.host), port=int(args.port))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
