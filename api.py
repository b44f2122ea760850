from __future__ import annotations

from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from contractlens.engine import analyze as analyze_source, layout_flow
from contractlens.errors import FlowPayloadError, GrammarLoadError, LayoutInputError
from contractlens.flow import parse_flow
from contractlens.layout import Direction
from contractlens.model import ContractAnalysis, FlowEdge, FlowNode, LayoutResult


app = FastAPI(title="Contract Lens Analyzer")


class AnalyzeRequest(BaseModel):
	code: str
	file_name: str


class LayoutRequest(BaseModel):
	nodes: List[FlowNode] = []
	links: Optional[List[FlowEdge]] = None
	edges: Optional[List[FlowEdge]] = None
	direction: Direction = Direction.TB


@app.post("/analyze", response_model=ContractAnalysis, response_model_exclude_none=True)
async def analyze(req: AnalyzeRequest) -> ContractAnalysis:
	try:
		return await analyze_source(req.code, req.file_name)
	except GrammarLoadError as e:
		raise HTTPException(status_code=503, detail=str(e))


@app.post("/flow/layout", response_model=LayoutResult, response_model_exclude_none=True)
def layout(req: LayoutRequest) -> LayoutResult:
	payload = req.model_dump(include={"nodes", "links", "edges"}, exclude_none=True)
	try:
		graph = parse_flow(payload)
		return layout_flow(graph.nodes, graph.edges, req.direction)
	except (FlowPayloadError, LayoutInputError) as e:
		raise HTTPException(status_code=400, detail=str(e))


def create_app() -> FastAPI:
	return app
