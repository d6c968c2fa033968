from archmap.architecture import classify_role, complexity, link_dependents, synthesize_architecture
from archmap.model import DependencyRecord, FileKind, ProjectFile, Role


def test_complexity_formula():
	content = "function a() {}\nfunction b() {}\nif (x) {}"
	assert complexity(content) == 6


def test_complexity_rounds_half_up():
	assert complexity("\n".join(["a"] * 5)) == 1
	assert complexity("") == 0


def test_name_rules_win_over_content():
	assert classify_role("src/components/Button.tsx", "mongoose.connect()") == Role.COMPONENT
	assert classify_role("src/models/UserComponent.tsx", "mongoose") == Role.COMPONENT


def test_role_rules():
	assert classify_role("src/services/auth.ts", "") == Role.SERVICE
	assert classify_role("src/pages/Home.tsx", "") == Role.PAGE
	assert classify_role("server/index.js", "const app = require('express')()") == Role.API
	assert classify_role("lib/db.js", "mongoose.connect(url)") == Role.DATABASE
	assert classify_role("src/config/settings.js", "") == Role.CONFIG
	assert classify_role("src/env.js", "") == Role.CONFIG
	assert classify_role("src/lib/math.js", "export const add = (a, b) => a + b") == Role.UTILITY


def test_substring_patterns_are_not_word_aware():
	# "build" contains "ui"
	assert classify_role("src/build/tools.js", "") == Role.COMPONENT


def test_classify_role_is_pure():
	args = ("src/lib/query.ts", "import { PrismaClient } from '@prisma/client'")
	assert classify_role(*args) == classify_role(*args) == Role.DATABASE


def test_link_dependents_matches_base_name():
	records = {
		"src/components/Button.tsx": DependencyRecord(dependencies=["react"]),
		"src/pages/Home.tsx": DependencyRecord(dependencies=["react", "./components/Button"]),
	}
	assert link_dependents("src/components/Button.tsx", records) == ["src/pages/Home.tsx"]
	assert link_dependents("src/pages/Home.tsx", records) == []


def test_link_dependents_collides_on_same_name():
	records = {
		"a/helpers.ts": DependencyRecord(),
		"b/helpers.ts": DependencyRecord(),
		"c/main.ts": DependencyRecord(dependencies=["./helpers"]),
	}
	assert link_dependents("a/helpers.ts", records) == ["c/main.ts"]
	assert link_dependents("b/helpers.ts", records) == ["c/main.ts"]


def test_synthesize_only_code_files():
	files = [
		ProjectFile(path="src", name="src", kind=FileKind.DIRECTORY),
		ProjectFile(path="src/README.md", name="README.md", extension=".md", size=10, content="# hi"),
		ProjectFile(path="src/a.ts", name="a.ts", extension=".ts", size=20, content="import b from './b'"),
		ProjectFile(path="src/b.ts", name="b.ts", extension=".ts", size=30, content="export const b = 1"),
	]
	records = {
		"src/a.ts": DependencyRecord(imports=["./b"], dependencies=["./b"]),
		"src/b.ts": DependencyRecord(exports=["b"]),
	}
	nodes = synthesize_architecture(files, records)
	assert [n.id for n in nodes] == ["src/a.ts", "src/b.ts"]
	a, b = nodes
	assert a.name == "a.ts"
	assert a.dependencies == ["./b"]
	assert b.dependents == ["src/a.ts"]
	assert b.size == 30
	assert all(n.complexity >= 0 for n in nodes)
