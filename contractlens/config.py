"""Runtime configuration for the analysis engine and its server."""

from __future__ import annotations

import os
from typing import Dict

LOG_LEVEL = os.environ.get("CONTRACTLENS_LOG_LEVEL", "WARNING").upper()

HOST = os.environ.get("CONTRACTLENS_HOST", "127.0.0.1")
PORT = int(os.environ.get("CONTRACTLENS_PORT", "8000"))

# Uniform node footprint and spacing used by the layered layout
NODE_WIDTH = float(os.environ.get("CONTRACTLENS_NODE_WIDTH", "140"))
NODE_HEIGHT = float(os.environ.get("CONTRACTLENS_NODE_HEIGHT", "40"))
NODE_SEP = float(os.environ.get("CONTRACTLENS_NODE_SEP", "50"))
RANK_SEP = float(os.environ.get("CONTRACTLENS_RANK_SEP", "50"))

# Language -> importable grammar module exposing ``language()``
GRAMMAR_MODULES: Dict[str, str] = {
    lang: os.environ.get(f"CONTRACTLENS_GRAMMAR_{lang.upper()}", default)
    for lang, default in (
        ("python", "tree_sitter_python"),
        ("haskell", "tree_sitter_haskell"),
        ("aiken", "tree_sitter_aiken"),
    )
}
