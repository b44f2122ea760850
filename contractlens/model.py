from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TreeAttributes(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	text: str
	node_id: str = Field(alias="nodeId")


class TreeNode(BaseModel):
	name: str
	attributes: TreeAttributes
	children: Optional[List[TreeNode]] = None


class ContractAnalysis(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	dependencies: List[str] = []
	conditions: List[str] = []
	tree_data: TreeNode = Field(alias="treeData")


class Position(BaseModel):
	x: float
	y: float


class FlowNode(BaseModel):
	id: str
	label: str = ""
	position: Optional[Position] = None


class FlowEdge(BaseModel):
	source: str
	target: str
	id: Optional[str] = None


class FlowGraph(BaseModel):
	nodes: List[FlowNode] = []
	edges: List[FlowEdge] = []


class LayoutResult(BaseModel):
	nodes: List[FlowNode] = []
	edges: List[FlowEdge] = []
	ranks: Dict[str, int] = {}
