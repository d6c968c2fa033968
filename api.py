from __future__ import annotations

import os

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from archmap.diagram import ArchitectureDiagram
from archmap.errors import ReadFailure
from archmap.model import ProjectAnalysis, Scene, ViewMode
from archmap.pipeline import analyze_project
from archmap.sources import scan_directory


app = FastAPI(title="Architecture Map Analyzer")


class AnalyzeRequest(BaseModel):
	root_path: str


class LayoutRequest(BaseModel):
	root_path: str
	view_mode: ViewMode = ViewMode.BOTH
	width: int = 800
	height: int = 600


async def _analyze(root_path: str) -> ProjectAnalysis:
	root = os.path.abspath(root_path)
	if not os.path.isdir(root):
		raise HTTPException(status_code=400, detail=f"Invalid root_path: {root}")
	try:
		return await analyze_project(scan_directory(root))
	except ReadFailure as e:
		raise HTTPException(status_code=500, detail=str(e)) from e


@app.post("/analyze", response_model=ProjectAnalysis)
async def analyze(req: AnalyzeRequest) -> ProjectAnalysis:
	return await _analyze(req.root_path)


@app.post("/layout", response_model=Scene)
async def layout(req: LayoutRequest) -> Scene:
	if req.width <= 0 or req.height <= 0:
		raise HTTPException(status_code=400, detail="width and height must be positive")
	analysis = await _analyze(req.root_path)
	diagram = ArchitectureDiagram(analysis.architecture, req.width, req.height, req.view_mode)
	diagram.run_until_settled()
	return diagram.scene()


def create_app() -> FastAPI:
	return app
