from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class Role(str, Enum):
	COMPONENT = "component"
	SERVICE = "service"
	UTILITY = "utility"
	PAGE = "page"
	API = "api"
	DATABASE = "database"
	CONFIG = "config"


class FileKind(str, Enum):
	FILE = "file"
	DIRECTORY = "directory"


class ProjectFile(BaseModel):
	path: str
	name: str
	kind: FileKind = FileKind.FILE
	extension: Optional[str] = None
	size: int = 0
	content: Optional[str] = None
	children: List[ProjectFile] = []
	last_modified: Optional[datetime] = None


class DependencyRecord(BaseModel):
	imports: List[str] = []
	exports: List[str] = []
	dependencies: List[str] = []


class ArchitectureNode(BaseModel):
	id: str
	name: str
	role: Role
	path: str
	dependencies: List[str] = []
	dependents: List[str] = []
	size: int = 0
	complexity: int = 0


class ProjectStatistics(BaseModel):
	model_config = ConfigDict(frozen=True)

	total_files: int = 0
	total_lines: int = 0
	total_size: int = 0
	file_types: Dict[str, int] = {}
	languages: Dict[str, int] = {}
	roles: Dict[str, int] = {}
	dependencies: int = 0
	components: int = 0
	services: int = 0
	pages: int = 0


class ProjectAnalysis(BaseModel):
	model_config = ConfigDict(frozen=True)

	name: str
	root_path: str = "/"
	files: List[ProjectFile] = []
	dependencies: Dict[str, DependencyRecord] = {}
	architecture: List[ArchitectureNode] = []
	statistics: ProjectStatistics = ProjectStatistics()


class AnalysisStatus(str, Enum):
	IDLE = "idle"
	UPLOADING = "uploading"
	ANALYZING = "analyzing"
	SUCCESS = "success"
	ERROR = "error"


class StatusSnapshot(BaseModel):
	status: AnalysisStatus = AnalysisStatus.IDLE
	progress: int = 0
	error: Optional[str] = None
	has_result: bool = False


class ViewMode(str, Enum):
	STRUCTURE = "structure"
	DEPENDENCIES = "dependencies"
	BOTH = "both"


class LayoutState(str, Enum):
	IDLE = "idle"
	SIMULATING = "simulating"
	SETTLED = "settled"


class ViewTransform(BaseModel):
	x: float = 0.0
	y: float = 0.0
	k: float = 1.0


class SceneNode(BaseModel):
	id: str
	name: str
	role: Role
	path: str
	x: float
	y: float
	shape: str
	width: float
	height: float
	color: str
	label: str
	role_label: str
	path_label: Optional[str] = None
	pinned: bool = False


class SceneLink(BaseModel):
	source: str
	target: str
	kind: str
	x1: float
	y1: float
	x2: float
	y2: float


class Scene(BaseModel):
	width: int
	height: int
	view_mode: ViewMode
	state: LayoutState
	alpha: float
	transform: ViewTransform = ViewTransform()
	nodes: List[SceneNode] = []
	links: List[SceneLink] = []


ProjectFile.model_rebuild()
