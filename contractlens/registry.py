"""Process-wide cache of tree-sitter parsers, one per language.

The registry initialises the parsing runtime once, loads each grammar the
first time its language is requested and keeps the resulting parser for the
lifetime of the process. Loading is delegated to a :class:`GrammarLoader`
so tests can substitute grammars without the native packages.
"""

from __future__ import annotations

import asyncio
import importlib
import logging
from typing import Any, Dict, List, Mapping, Optional, Protocol

from . import config
from .errors import GrammarLoadError

logger = logging.getLogger(__name__)


class GrammarLoader(Protocol):
    def init_runtime(self) -> None: ...

    def load_language(self, locator: str) -> Any: ...

    def create_parser(self, language: Any) -> Any: ...


class TreeSitterLoader:
    """Loads grammars from per-language ``tree_sitter_<lang>`` packages."""

    def __init__(self) -> None:
        self._runtime: Any = None

    def init_runtime(self) -> None:
        if self._runtime is None:
            self._runtime = importlib.import_module("tree_sitter")

    def load_language(self, locator: str) -> Any:
        module = importlib.import_module(locator)
        # tree-sitter >=0.22 grammar packages expose language() returning
        # the Language capsule.
        return self._runtime.Language(module.language())

    def create_parser(self, language: Any) -> Any:
        return self._runtime.Parser(language)


class ParserRegistry:
    def __init__(
        self,
        loader: Optional[GrammarLoader] = None,
        grammars: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._loader = loader or TreeSitterLoader()
        self._grammars: Dict[str, str] = dict(
            config.GRAMMAR_MODULES if grammars is None else grammars
        )
        self._runtime_ready = False
        self._parsers: Dict[str, Any] = {}

    @property
    def languages(self) -> List[str]:
        return sorted(self._grammars)

    def cached_languages(self) -> List[str]:
        return sorted(self._parsers)

    def clear(self) -> None:
        self._parsers.clear()

    async def ensure_runtime(self, language: str) -> None:
        """Initialise the parsing runtime once for the whole registry."""
        if self._runtime_ready:
            return
        try:
            await asyncio.to_thread(self._loader.init_runtime)
        except Exception as exc:
            logger.warning("Could not initialise tree-sitter runtime: %s", exc)
            raise GrammarLoadError(language, exc) from exc
        self._runtime_ready = True

    async def ensure_loaded(self, language: str) -> Any:
        cached = self._parsers.get(language)
        if cached is not None:
            return cached

        locator = self._grammars.get(language)
        if locator is None:
            raise GrammarLoadError(language, KeyError(f"no grammar mapped for '{language}'"))

        await self.ensure_runtime(language)
        try:
            ts_lang = await asyncio.to_thread(self._loader.load_language, locator)
            parser = self._loader.create_parser(ts_lang)
        except Exception as exc:
            logger.warning("Could not load tree-sitter grammar for %s: %s", language, exc)
            raise GrammarLoadError(language, exc) from exc

        # a concurrent first caller may have stored a parser meanwhile
        parser = self._parsers.setdefault(language, parser)
        logger.debug("Loaded tree-sitter parser for %s from %s", language, locator)
        return parser

    async def get(self, language: str) -> Any:
        return await self.ensure_loaded(language)


_default_registry: Optional[ParserRegistry] = None


def get_registry() -> ParserRegistry:
    global _default_registry
    if _default_registry is None:
        _default_registry = ParserRegistry()
    return _default_registry


async def get_parser(language: str) -> Any:
    return await get_registry().get(language)
