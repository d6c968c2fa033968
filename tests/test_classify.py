import pytest

from archmap.classify import (
	CODE_EXTENSIONS,
	SUPPORTED_EXTENSIONS,
	base_name_of,
	extension_of,
	is_analyzable,
	is_code_file,
	language_of,
)


def test_code_extensions_are_analyzable():
	assert CODE_EXTENSIONS <= SUPPORTED_EXTENSIONS
	for ext in CODE_EXTENSIONS:
		path = f"src/module{ext}"
		assert is_code_file(path)
		assert is_analyzable(path)


@pytest.mark.parametrize(
	"path, analyzable, code",
	[
		("src/App.tsx", True, True),
		("styles/main.scss", True, False),
		("include/util.h", True, False),
		("docs/README.md", True, False),
		("Makefile", True, False),
		("src", True, False),
		("assets/logo.png", False, False),
		("bin/tool.exe", False, False),
	],
)
def test_classification(path, analyzable, code):
	assert is_analyzable(path) is analyzable
	assert is_code_file(path) is code


def test_extension_comes_from_last_segment():
	assert extension_of("pkg.v2/Makefile") == ""
	assert extension_of("a/b.test.ts") == ".ts"
	assert base_name_of("src/utils/helpers.ts") == "helpers"
	assert base_name_of("Dockerfile") == "Dockerfile"


def test_language_lookup():
	assert language_of(".tsx") == "TypeScript"
	assert language_of(".yml") == "YAML"
	assert language_of(".cs") == "C#"
	assert language_of("") == "Unknown"
	assert language_of(".png") == "Unknown"
