from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from fastapi import FastAPI, File, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, Response
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from archmap.diagram import ArchitectureDiagram
from archmap.file_tree import filter_tree
from archmap.model import ProjectAnalysis, ProjectFile, Scene, StatusSnapshot, ViewMode, ViewTransform
from archmap.render import render_svg
from archmap.session import AnalysisSession
from archmap.sources import scan_directory

logger = logging.getLogger("archmap.web")

TEMPLATES_DIR = Path(__file__).with_name("templates")


class UploadedFileHandle:
    """Adapts a multipart upload; the filename carries the relative path."""

    def __init__(self, upload: UploadFile):
        self.upload = upload
        self.path = (upload.filename or "").replace("\\", "/").lstrip("/")
        self.size = upload.size or 0
        self.last_modified: Optional[datetime] = None
        # Browsers send folder entries as empty parts without a media type
        self.is_directory = self.size == 0 and not upload.content_type

    async def read_text(self) -> str:
        data = await self.upload.read()
        return data.decode("utf-8", errors="replace")


# In-memory state: one analysis session and one diagram per process
session = AnalysisSession()
diagram = ArchitectureDiagram()


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    diagram.stop()


app = FastAPI(title="Architecture Map", lifespan=lifespan)
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


class AnalyzePathRequest(BaseModel):
    root_path: str


class ViewModeRequest(BaseModel):
    view_mode: ViewMode


class DragRequest(BaseModel):
    node_id: str
    x: float = 0.0
    y: float = 0.0


class ZoomRequest(BaseModel):
    factor: float
    cx: Optional[float] = None
    cy: Optional[float] = None


class PanRequest(BaseModel):
    dx: float
    dy: float


def _publish(analysis: Optional[ProjectAnalysis]) -> StatusSnapshot:
    """Swap the diagram onto a fresh analysis, or report the failure."""
    snap = session.snapshot()
    if analysis is not None:
        logger.info("Showing %d nodes from %s", len(analysis.architecture), analysis.name)
        diagram.set_nodes(analysis.architecture)
        diagram.start()
    return snap


@app.get("/", response_class=HTMLResponse)
async def index(request: Request):
    """Main page with diagram interface."""
    return templates.TemplateResponse(
        request, "index.html", {"width": diagram.width, "height": diagram.height}
    )


@app.post("/upload", response_model=StatusSnapshot)
async def upload(files: List[UploadFile] = File(...)) -> StatusSnapshot:
    handles = [UploadedFileHandle(f) for f in files if f.filename]
    if not handles:
        raise HTTPException(status_code=400, detail="No files uploaded")
    return _publish(await session.run(handles))


@app.post("/analyze", response_model=StatusSnapshot)
async def analyze_path(req: AnalyzePathRequest) -> StatusSnapshot:
    root = os.path.abspath(req.root_path)
    if not os.path.isdir(root):
        raise HTTPException(status_code=400, detail=f"Invalid root_path: {root}")
    return _publish(await session.run(scan_directory(root)))


@app.get("/status", response_model=StatusSnapshot)
async def status() -> StatusSnapshot:
    return session.snapshot()


@app.post("/reset", response_model=StatusSnapshot)
async def reset() -> StatusSnapshot:
    session.reset()
    return session.snapshot()


@app.get("/analysis", response_model=ProjectAnalysis)
async def get_analysis() -> ProjectAnalysis:
    if session.analysis is None:
        raise HTTPException(status_code=404, detail="No analysis yet. Upload a project first.")
    return session.analysis


@app.get("/tree", response_model=List[ProjectFile])
async def get_tree(search: str = "", extension: str = "") -> List[ProjectFile]:
    """File tree of the current analysis, filtered by name and extension."""
    if session.analysis is None:
        raise HTTPException(status_code=404, detail="No analysis yet. Upload a project first.")
    return filter_tree(session.analysis.files, search or None, extension or None)


@app.get("/scene", response_model=Scene)
async def get_scene() -> Scene:
    return diagram.scene()


@app.get("/scene.svg")
async def get_scene_svg() -> Response:
    return Response(content=render_svg(diagram.scene()), media_type="image/svg+xml")


@app.post("/view-mode", response_model=Scene)
async def set_view_mode(req: ViewModeRequest) -> Scene:
    diagram.set_view_mode(req.view_mode)
    diagram.start()
    return diagram.scene()


def _drag(action, req: DragRequest) -> None:
    try:
        action(req)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@app.post("/drag/start")
async def drag_start(req: DragRequest) -> dict:
    _drag(lambda r: diagram.drag_start(r.node_id), req)
    return {"node_id": req.node_id, "state": diagram.state}


@app.post("/drag/move")
async def drag_move(req: DragRequest) -> dict:
    _drag(lambda r: diagram.drag_move(r.node_id, r.x, r.y), req)
    return {"node_id": req.node_id, "state": diagram.state}


@app.post("/drag/end")
async def drag_end(req: DragRequest) -> dict:
    _drag(lambda r: diagram.drag_end(r.node_id), req)
    return {"node_id": req.node_id, "state": diagram.state}


@app.post("/zoom", response_model=ViewTransform)
async def zoom(req: ZoomRequest) -> ViewTransform:
    if req.factor <= 0:
        raise HTTPException(status_code=400, detail="factor must be positive")
    return diagram.zoom(req.factor, req.cx, req.cy)


@app.post("/pan", response_model=ViewTransform)
async def pan(req: PanRequest) -> ViewTransform:
    return diagram.pan(req.dx, req.dy)


def create_app() -> FastAPI:
    return app
