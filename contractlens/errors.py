from __future__ import annotations

from typing import Optional


class ContractLensError(Exception):
	"""Base class for errors raised by the analysis engine."""


class GrammarLoadError(ContractLensError):
	"""The parsing runtime or a language grammar could not be loaded."""

	def __init__(self, language: str, cause: Optional[BaseException] = None):
		self.language = language
		self.cause = cause
		detail = f": {cause}" if cause is not None else ""
		super().__init__(f"Could not load grammar for '{language}'{detail}")


class LayoutInputError(ContractLensError):
	"""A flow graph handed to the layout refers to nodes it does not define."""


class FlowPayloadError(ContractLensError):
	"""An execution-flow payload is not valid ``{nodes, links}`` JSON."""
