from __future__ import annotations

import math
import re
from typing import List, Mapping, Sequence

from .classify import base_name_of, directory_name_of, file_name_of, is_code_file
from .model import ArchitectureNode, DependencyRecord, FileKind, ProjectFile, Role


COMPONENT_PATTERNS = ("component", "widget", "ui", "view", "screen")
SERVICE_PATTERNS = ("service", "api", "controller", "handler", "manager")
PAGE_PATTERNS = ("page", "route", "view", "screen")
SERVER_TOKENS = ("express", "fastify", "koa")
DATABASE_TOKENS = ("mongoose", "sequelize", "prisma")

FUNCTION_TOKENS = re.compile(r"function|=>|class")
CONDITION_TOKENS = re.compile(r"if|else|switch|case|while|for")


def _matches_any(patterns: Sequence[str], *names: str) -> bool:
	return any(p in name for p in patterns for name in names)


def classify_role(path: str, content: str) -> Role:
	file_name = file_name_of(path).lower()
	dir_name = directory_name_of(path).lower()

	# Order matters: name heuristics win over content signatures
	if _matches_any(COMPONENT_PATTERNS, file_name, dir_name):
		return Role.COMPONENT
	if _matches_any(SERVICE_PATTERNS, file_name, dir_name):
		return Role.SERVICE
	if _matches_any(PAGE_PATTERNS, file_name, dir_name):
		return Role.PAGE
	if any(token in content for token in SERVER_TOKENS):
		return Role.API
	if any(token in content for token in DATABASE_TOKENS):
		return Role.DATABASE
	if "config" in path or "env" in path or "config" in file_name:
		return Role.CONFIG
	return Role.UTILITY


def _round_half_up(value: float) -> int:
	return int(math.floor(value + 0.5))


def complexity(content: str) -> int:
	lines = len(content.split("\n"))
	functions = len(FUNCTION_TOKENS.findall(content))
	conditions = len(CONDITION_TOKENS.findall(content))
	return _round_half_up(lines * 0.1 + functions * 2 + conditions * 1.5)


def link_dependents(path: str, records: Mapping[str, DependencyRecord]) -> List[str]:
	"""Paths whose dependency strings mention the base name of *path*.

	Matching is by substring, so same-named files in different directories
	are linked to each other as well.
	"""
	key = base_name_of(path)
	if not key:
		return []
	dependents: List[str] = []
	for other, record in records.items():
		if other == path:
			continue
		if any(key in dep for dep in record.dependencies):
			dependents.append(other)
	return dependents


def synthesize_architecture(
	files: Sequence[ProjectFile], records: Mapping[str, DependencyRecord]
) -> List[ArchitectureNode]:
	nodes: List[ArchitectureNode] = []
	for f in files:
		if f.kind != FileKind.FILE or not is_code_file(f.path):
			continue
		content = f.content or ""
		record = records.get(f.path)
		nodes.append(
			ArchitectureNode(
				id=f.path,
				name=file_name_of(f.path),
				role=classify_role(f.path, content),
				path=f.path,
				dependencies=list(record.dependencies) if record else [],
				dependents=link_dependents(f.path, records),
				size=f.size,
				complexity=complexity(content),
			)
		)
	return nodes

