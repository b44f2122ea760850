"""Fake syntax nodes and grammar loaders shared by the tests."""

import pytest

from contractlens.registry import ParserRegistry


class FakeNode:
	"""Mimics the parts of tree_sitter.Node the engine reads."""

	def __init__(self, type, children=(), text=None, row=0, named=True, fields=None):
		self.type = type
		self.children = list(children)
		self.is_named = named
		if text is None:
			text = " ".join(c.text.decode() for c in self.children)
		self.text = text.encode("utf-8")
		self.start_point = (row, 0)
		self._fields = fields or {}

	@property
	def named_children(self):
		return [c for c in self.children if c.is_named]

	def child_by_field_name(self, name):
		return self._fields.get(name)


def leaf(type, text, row=0, named=True):
	return FakeNode(type, text=text, row=row, named=named)


def token(text, row=0):
	return FakeNode(text, text=text, row=row, named=False)


class FakeTree:
	def __init__(self, root_node):
		self.root_node = root_node


class FakeParser:
	def __init__(self, language, root=None):
		self.language = language
		self.root = root
		self.sources = []

	def parse(self, source):
		self.sources.append(source)
		return FakeTree(self.root or leaf("module", source.decode("utf-8")))


class FakeLoader:
	def __init__(self, fail_runtime=False, fail_locators=(), root=None):
		self.fail_runtime = fail_runtime
		self.fail_locators = set(fail_locators)
		self.root = root
		self.runtime_calls = 0
		self.loaded = []

	def init_runtime(self):
		self.runtime_calls += 1
		if self.fail_runtime:
			raise RuntimeError("runtime unavailable")

	def load_language(self, locator):
		if locator in self.fail_locators:
			raise ImportError(f"No module named '{locator}'")
		self.loaded.append(locator)
		return f"lang:{locator}"

	def create_parser(self, language):
		return FakeParser(language, self.root)


GRAMMARS = {
	"python": "grammar_python",
	"haskell": "grammar_haskell",
	"aiken": "grammar_aiken",
}


@pytest.fixture
def fake_loader():
	return FakeLoader()


@pytest.fixture
def fake_registry(fake_loader):
	return ParserRegistry(loader=fake_loader, grammars=GRAMMARS)
