"""Static analysis and flow layout engine behind the code explainer UI.

Modules:
- registry.py: Lazily loaded, cached tree-sitter parsers per language.
- facts.py: Dependencies, conditions and call graph from a syntax tree.
- serialize.py: Syntax tree to labelled tree for the tree view.
- layout.py: Layered layout of execution-flow DAGs.
- flow.py: Parsing of execution-flow payloads.
- engine.py: analyze() and layout_flow() entry points.
"""

from .engine import analyze, layout_flow
from .errors import ContractLensError, FlowPayloadError, GrammarLoadError, LayoutInputError
from .model import ContractAnalysis, FlowEdge, FlowNode, LayoutResult, TreeNode

__all__ = [
	"analyze",
	"layout_flow",
	"ContractAnalysis",
	"TreeNode",
	"FlowNode",
	"FlowEdge",
	"LayoutResult",
	"ContractLensError",
	"GrammarLoadError",
	"LayoutInputError",
	"FlowPayloadError",
]
