import pytest

from contractlens.errors import FlowPayloadError
from contractlens.flow import parse_flow, strip_code_fence


FENCED = """```json
{
  "nodes": [{"id": "start", "label": "Start"}, {"id": "check", "label": "Check input"}],
  "links": [{"source": "start", "target": "check"}]
}
```"""


def test_strip_code_fence():
	assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'
	assert strip_code_fence('```\n{"a": 1}\n```') == '{"a": 1}'
	assert strip_code_fence('{"a": 1}') == '{"a": 1}'


def test_parse_fenced_payload_with_links():
	graph = parse_flow(FENCED)
	assert [n.id for n in graph.nodes] == ["start", "check"]
	assert graph.nodes[1].label == "Check input"
	assert [(e.source, e.target, e.id) for e in graph.edges] == [("start", "check", "e-start-check-0")]


def test_parse_mapping_with_edges_keeps_ids():
	graph = parse_flow(
		{
			"nodes": [{"id": "a"}, {"id": "b"}],
			"edges": [{"source": "a", "target": "b", "id": "first"}, {"source": "b", "target": "a"}],
		}
	)
	assert [e.id for e in graph.edges] == ["first", "e-b-a-1"]


def test_empty_payload():
	graph = parse_flow("{}")
	assert graph.nodes == []
	assert graph.edges == []


@pytest.mark.parametrize(
	"payload",
	[
		"not json",
		"[1, 2]",
		{"nodes": [{"label": "missing id"}]},
		{"nodes": [], "links": [{"source": "a"}]},
	],
)
def test_invalid_payloads(payload):
	with pytest.raises(FlowPayloadError):
		parse_flow(payload)
