"""Render a diagram ``Scene`` to a standalone SVG document."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from jinja2 import Environment, PackageLoader, select_autoescape

from .model import Scene

LINK_STYLES = {
	"dependency": {"stroke": "#ef4444", "width": 2, "dash": None, "marker": "dependency-arrow"},
	"structure": {"stroke": "#6b7280", "width": 1, "dash": "5,5", "marker": "structure-arrow"},
}

_env: Optional[Environment] = None


def _environment() -> Environment:
	global _env
	if _env is None:
		_env = Environment(
			loader=PackageLoader("archmap", "templates"),
			autoescape=select_autoescape(["svg", "html", "j2"]),
			trim_blocks=True,
			lstrip_blocks=True,
		)
	return _env


def render_svg(scene: Scene) -> str:
	template = _environment().get_template("diagram.svg.j2")
	return template.render(scene=scene, link_styles=LINK_STYLES)


def write_svg(scene: Scene, output_path: Path) -> None:
	"""Write the rendered scene to *output_path*."""
	output_path.parent.mkdir(parents=True, exist_ok=True)
	output_path.write_text(render_svg(scene), encoding="utf-8")
