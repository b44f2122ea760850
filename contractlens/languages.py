from __future__ import annotations

import os
from typing import Dict, List

from . import config


EXTENSION_LANGUAGE: Dict[str, str] = {
	".py": "python",
	".hs": "haskell",
	".ak": "aiken",
}

UNKNOWN = "unknown"


def detect_language(filename: str) -> str:
	_, ext = os.path.splitext(filename)
	return EXTENSION_LANGUAGE.get(ext.lower(), UNKNOWN)


def supported_languages() -> List[str]:
	return sorted(set(EXTENSION_LANGUAGE.values()))


def grammar_locator(language: str) -> str:
	"""Return the grammar module name for *language*, or raise KeyError."""
	return config.GRAMMAR_MODULES[language]
