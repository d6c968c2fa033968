import asyncio
from datetime import datetime

import pytest


BUTTON_SOURCE = "\n".join(
	[
		"import React from 'react'",
		"export const Button = () => null",
	]
)

HOME_SOURCE = "\n".join(
	[
		"import React from 'react'",
		"import { Button } from './components/Button'",
		"export const Home = () => null",
	]
)


class FakeHandle:
	"""In-memory file handle; ``error`` makes the read fail, ``delay`` slows it down."""

	def __init__(self, path, content="", size=None, is_directory=False, error=None, delay=0.0):
		self.path = path
		self.content = content
		self.size = len(content.encode()) if size is None else size
		self.is_directory = is_directory
		self.last_modified = datetime(2024, 1, 1)
		self.error = error
		self.delay = delay

	async def read_text(self):
		if self.delay:
			await asyncio.sleep(self.delay)
		if self.error is not None:
			raise self.error
		return self.content


@pytest.fixture
def fake_handle():
	return FakeHandle


@pytest.fixture
def sample_project(tmp_path):
	root = tmp_path / "proj"
	(root / "src" / "components").mkdir(parents=True)
	(root / "src" / "pages").mkdir(parents=True)
	(root / "node_modules" / "left-pad").mkdir(parents=True)
	(root / "src" / "components" / "Button.tsx").write_text(BUTTON_SOURCE)
	(root / "src" / "pages" / "Home.tsx").write_text(HOME_SOURCE)
	(root / "README.md").write_text("# Demo\n")
	(root / "logo.png").write_bytes(b"\x89PNG")
	(root / "node_modules" / "left-pad" / "index.js").write_text("module.exports = 1")
	return root
