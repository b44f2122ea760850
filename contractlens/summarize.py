from __future__ import annotations

from typing import List

from .model import ContractAnalysis, TreeNode


def count_tree_nodes(tree: TreeNode) -> int:
	count = 0
	stack = [tree]
	while stack:
		current = stack.pop()
		count += 1
		stack.extend(current.children or [])
	return count


def summarize_analysis(analysis: ContractAnalysis, file_name: str) -> str:
	parts: List[str] = []
	parts.append(f"File {file_name}: {count_tree_nodes(analysis.tree_data)} syntax nodes")
	if analysis.dependencies:
		parts.append("  Dependencies:")
		parts.extend(f"    - {dep}" for dep in analysis.dependencies)
	else:
		parts.append("  No dependencies found")
	if analysis.conditions:
		parts.append("  Conditions:")
		parts.extend(f"    - {cond}" for cond in analysis.conditions)
	else:
		parts.append("  No conditions found")
	return "\n".join(parts)
