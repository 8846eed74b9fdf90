from __future__ import annotations
import os
import sys
from typing import Callable


def make_debug_logger(name: str) -> Callable[[str], None]:
	"""Return a simple debug logging function gated by DEBUG.

	When DEBUG=1 the returned function prints messages to stderr prefixed
	with the component name, keeping stdout free for the gist URL.
	Otherwise it is a noop.
	"""
	enabled = os.environ.get('DEBUG') == '1'
	if not enabled:
		def _noop(msg: str) -> None:
			return
		return _noop

	def _dbg(msg: str) -> None:
		print(f"[debug::{name}] {msg}", file=sys.stderr)

	return _dbg
