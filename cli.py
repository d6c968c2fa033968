from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

import uvicorn

from archmap.config import settings
from archmap.diagram import ArchitectureDiagram
from archmap.errors import ReadFailure
from archmap.log import setup_logger
from archmap.model import ProjectAnalysis, ViewMode
from archmap.pipeline import analyze_project
from archmap.render import write_svg
from archmap.sources import scan_directory
from archmap.stats import summarize_statistics

logger = logging.getLogger("archmap.cli")


def _run_analysis(path: str) -> ProjectAnalysis:
	root = os.path.abspath(path)
	if not os.path.isdir(root):
		raise SystemExit(f"Not a directory: {root}")
	try:
		return asyncio.run(analyze_project(scan_directory(root)))
	except ReadFailure as e:
		logger.error("%s", e)
		raise SystemExit(1) from e


def cmd_analyze(args: argparse.Namespace) -> None:
	analysis = _run_analysis(args.path)
	if args.summary:
		print(summarize_statistics(analysis.name, analysis.statistics))
		return
	print(analysis.model_dump_json(indent=2, exclude_none=True))


def cmd_render(args: argparse.Namespace) -> None:
	analysis = _run_analysis(args.path)
	diagram = ArchitectureDiagram(analysis.architecture, args.width, args.height, ViewMode(args.mode))
	diagram.run_until_settled(args.max_ticks)
	write_svg(diagram.scene(), Path(args.output))
	logger.info("Wrote %d nodes and %d links to %s", len(diagram.nodes), len(diagram.links), args.output)


def cmd_serve(args: argparse.Namespace) -> None:
	uvicorn.run("web.app:app", host=args.host, port=args.port, reload=args.reload)


def main() -> None:
	parser = argparse.ArgumentParser(prog="archmap")
	parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
	sub = parser.add_subparsers(dest="cmd", required=True)

	pa = sub.add_parser("analyze", help="Analyze a project directory and print the analysis JSON")
	pa.add_argument("path", help="Path to project root")
	pa.add_argument("--summary", action="store_true", help="Print a short text summary instead of JSON")
	pa.set_defaults(func=cmd_analyze)

	pr = sub.add_parser("render", help="Lay out the architecture diagram and write it as SVG")
	pr.add_argument("path", help="Path to project root")
	pr.add_argument("-o", "--output", default="architecture.svg")
	pr.add_argument("--mode", choices=[m.value for m in ViewMode], default=ViewMode.BOTH.value)
	pr.add_argument("--width", type=int, default=settings.canvas_width)
	pr.add_argument("--height", type=int, default=settings.canvas_height)
	pr.add_argument("--max-ticks", type=int, default=settings.max_ticks)
	pr.set_defaults(func=cmd_render)

	ps = sub.add_parser("serve", help="Run the interactive web app")
	ps.add_argument("--host", default="127.0.0.1")
	ps.add_argument("--port", type=int, default=8000)
	ps.add_argument("--reload", action="store_true")
	ps.set_defaults(func=cmd_serve)

	args = parser.parse_args()
	try:
		settings.validate()
	except ValueError as e:
		print(f"Configuration error: {e}", file=sys.stderr)
		sys.exit(2)
	setup_logger(level=logging.DEBUG if args.verbose else settings.log_level, log_dir=settings.log_dir)
	args.func(args)


if __name__ == "__main__":
	main()
