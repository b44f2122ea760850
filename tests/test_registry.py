import asyncio

import pytest

from conftest import GRAMMARS, FakeLoader
from contractlens.errors import GrammarLoadError
from contractlens.registry import ParserRegistry


def test_parser_is_cached_per_language(fake_registry, fake_loader):
	first = asyncio.run(fake_registry.get("python"))
	second = asyncio.run(fake_registry.get("python"))
	assert first is second
	assert first.language == "lang:grammar_python"
	assert fake_loader.loaded == ["grammar_python"]
	assert fake_registry.cached_languages() == ["python"]


def test_runtime_initialised_once(fake_registry, fake_loader):
	async def load_all():
		for language in ("python", "haskell", "aiken"):
			await fake_registry.ensure_loaded(language)

	asyncio.run(load_all())
	assert fake_loader.runtime_calls == 1
	assert fake_registry.cached_languages() == ["aiken", "haskell", "python"]


def test_concurrent_first_callers_share_one_parser(fake_registry):
	async def race():
		return await asyncio.gather(*(fake_registry.get("haskell") for _ in range(5)))

	parsers = asyncio.run(race())
	assert all(p is parsers[0] for p in parsers)


def test_grammar_failure_is_not_cached_and_retries():
	loader = FakeLoader(fail_locators={"grammar_aiken"})
	registry = ParserRegistry(loader=loader, grammars=GRAMMARS)

	with pytest.raises(GrammarLoadError) as excinfo:
		asyncio.run(registry.get("aiken"))
	assert excinfo.value.language == "aiken"
	assert isinstance(excinfo.value.cause, ImportError)
	assert registry.cached_languages() == []

	loader.fail_locators.clear()
	parser = asyncio.run(registry.get("aiken"))
	assert parser.language == "lang:grammar_aiken"


def test_runtime_failure_raises_and_retries():
	loader = FakeLoader(fail_runtime=True)
	registry = ParserRegistry(loader=loader, grammars=GRAMMARS)

	with pytest.raises(GrammarLoadError):
		asyncio.run(registry.get("python"))
	loader.fail_runtime = False
	asyncio.run(registry.get("python"))
	assert loader.runtime_calls == 2


def test_unknown_language(fake_registry):
	with pytest.raises(GrammarLoadError) as excinfo:
		asyncio.run(fake_registry.get("rust"))
	assert excinfo.value.language == "rust"


def test_clear_forces_reload(fake_registry, fake_loader):
	asyncio.run(fake_registry.get("python"))
	fake_registry.clear()
	asyncio.run(fake_registry.get("python"))
	assert fake_loader.loaded == ["grammar_python", "grammar_python"]


def test_real_python_grammar_loads():
	pytest.importorskip("tree_sitter")
	pytest.importorskip("tree_sitter_python")
	registry = ParserRegistry()
	parser = asyncio.run(registry.get("python"))
	assert parser.parse(b"x = 1").root_node.type == "module"
