from contractlens.model import ContractAnalysis, TreeAttributes, TreeNode
from contractlens.summarize import count_tree_nodes, summarize_analysis


def _tree():
	leaf = TreeNode(name="identifier", attributes=TreeAttributes(text="Line 1: x", node_id="n1"))
	return TreeNode(name="module", attributes=TreeAttributes(text="Line 1: x", node_id="n0"), children=[leaf])


def test_count_tree_nodes():
	assert count_tree_nodes(_tree()) == 2


def test_summarize_analysis():
	analysis = ContractAnalysis(dependencies=["import os"], conditions=["x > 0"], tree_data=_tree())
	text = summarize_analysis(analysis, "a.py")
	assert text.splitlines() == [
		"File a.py: 2 syntax nodes",
		"  Dependencies:",
		"    - import os",
		"  Conditions:",
		"    - x > 0",
	]


def test_summarize_empty_analysis():
	analysis = ContractAnalysis(tree_data=_tree())
	text = summarize_analysis(analysis, "a.py")
	assert "No dependencies found" in text
	assert "No conditions found" in text
