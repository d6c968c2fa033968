"""Static architecture mapping for source-code projects.

Modules:
- classify.py: Extension allow-lists and language lookup.
- deps.py: Lexical import/export extraction.
- architecture.py: Role classification, complexity and dependents.
- stats.py: Project-wide statistics.
- file_tree.py: Directory tree reconstruction from flat paths.
- sources.py: File handles for local directories.
- pipeline.py: Concurrent read and analysis orchestration.
- session.py: Analysis status, progress and current result.
- graph.py, simulation.py, diagram.py: Force-directed diagram layout and interaction.
- render.py: SVG rendering of diagram scenes.
"""

__all__ = [
	"classify",
	"deps",
	"architecture",
	"stats",
	"file_tree",
	"sources",
	"pipeline",
	"session",
	"graph",
	"simulation",
	"diagram",
	"render",
]
