"""Command line SHA-1 digests in ``sha1sum`` format.

Hashes each named file (``-`` or no path reads standard input) or a literal
string passed with ``--text``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from .constants import DEFAULT_CHUNK_SIZE
from .hasher import SHA1Hasher

logger = logging.getLogger("sha1stream")


def positive_int(value: str) -> int:
	number = int(value)
	if number <= 0:
		raise argparse.ArgumentTypeError("chunk size must be a positive integer")
	return number


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="sha1stream", description="Streaming SHA-1 message digest")
	parser.add_argument(
		"paths",
		nargs="*",
		help="Files to hash ('-' reads standard input)",
	)
	parser.add_argument(
		"--text",
		help="Hash the UTF-8 encoding of this string instead of files",
	)
	parser.add_argument(
		"--chunk-size",
		type=positive_int,
		default=DEFAULT_CHUNK_SIZE,
		help=f"Read size used when streaming files (default: {DEFAULT_CHUNK_SIZE})",
	)
	parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
	return parser


def digest_path(hasher: SHA1Hasher, path: str, chunk_size: int) -> str:
	if path == "-":
		return hasher.compute_stream(sys.stdin.buffer, chunk_size).hex()
	with open(path, "rb") as src:
		return hasher.compute_stream(src, chunk_size).hex()


def main(argv: Optional[Sequence[str]] = None) -> int:
	parser = build_parser()
	args = parser.parse_args(argv)

	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.WARNING,
		format="%(levelname)s %(name)s: %(message)s",
	)

	if args.text is not None:
		with SHA1Hasher() as hasher:
			print(f"{hasher.compute(args.text.encode('utf-8')).hex()}  -")
		return 0

	status = 0
	with SHA1Hasher() as hasher:
		for path in args.paths or ["-"]:
			try:
				digest = digest_path(hasher, path, args.chunk_size)
			except OSError as exc:
				logger.error("cannot read %s: %s", path, exc)
				status = 1
				continue
			print(f"{digest}  {path}")
	return status


if __name__ == "__main__":
	sys.exit(main())
