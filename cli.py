from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

import uvicorn

from contractlens import config
from contractlens.engine import analyze, layout_flow
from contractlens.errors import ContractLensError
from contractlens.flow import parse_flow
from contractlens.summarize import summarize_analysis


def cmd_analyze(args: argparse.Namespace) -> None:
	with open(args.path, "r", encoding="utf-8") as fh:
		code = fh.read()
	result = asyncio.run(analyze(code, args.path))
	if args.text:
		print(summarize_analysis(result, args.path))
	else:
		print(json.dumps(result.model_dump(by_alias=True, exclude_none=True), indent=2))


def cmd_layout(args: argparse.Namespace) -> None:
	with open(args.path, "r", encoding="utf-8") as fh:
		graph = parse_flow(fh.read())
	result = layout_flow(graph.nodes, graph.edges, args.direction)
	print(json.dumps(result.model_dump(exclude_none=True), indent=2))


def cmd_serve(args: argparse.Namespace) -> None:
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)


def main() -> None:
	parser = argparse.ArgumentParser(prog="contractlens")
	parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
	sub = parser.add_subparsers(dest="cmd", required=True)

	pa = sub.add_parser("analyze", help="Analyze a source file and print facts JSON")
	pa.add_argument("path", help="Path to a .py, .hs or .ak file")
	pa.add_argument("--text", action="store_true", help="Print a plain-text summary")
	pa.set_defaults(func=cmd_analyze)

	pl = sub.add_parser("layout", help="Lay out an execution-flow JSON file")
	pl.add_argument("path", help="Path to a {nodes, links} JSON file")
	pl.add_argument("--direction", choices=["TB", "LR"], default="TB")
	pl.set_defaults(func=cmd_layout)

	ps = sub.add_parser("serve", help="Run FastAPI server")
	ps.add_argument("--host", default=config.HOST)
	ps.add_argument("--port", type=int, default=config.PORT)
	ps.add_argument("--reload", action="store_true")
	ps.set_defaults(func=cmd_serve)

	args = parser.parse_args()
	logging.basicConfig(
		level=logging.DEBUG if args.verbose else config.LOG_LEVEL,
		format="%(asctime)s %(levelname)s %(name)s: %(message)s",
	)
	try:
		args.func(args)
	except ContractLensError as e:
		print(f"error: {e}", file=sys.stderr)
		sys.exit(1)


if __name__ == "__main__":
	main()
