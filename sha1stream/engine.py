"""Streaming SHA-1 digest engine.

The engine keeps the five chaining words, a count of bytes already
compressed and a fixed 64-byte carry buffer for input that does not yet fill
a block.  :func:`compress_block` is the pure block transform the engine runs
for every complete block.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple, Union

import numpy as np

from .constants import (
	BLOCK_SIZE,
	DIGEST_SIZE,
	INITIAL_STATE,
	LENGTH_MASK,
	ROUND_CONSTANTS,
	WORD_MASK,
)
from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)

State = Tuple[int, int, int, int, int]
BufferLike = Union[bytes, bytearray, memoryview]


def _as_view(data: BufferLike) -> memoryview:
	"""Return a flat unsigned-byte view over ``data``."""

	if data is None:
		raise InvalidArgumentError("buffer is required")

	if isinstance(data, (bytes, bytearray)):
		return memoryview(data)

	if isinstance(data, memoryview):
		if data.format not in ("B", "b"):
			raise InvalidArgumentError("memoryview must be of a byte-oriented format")
		if not data.c_contiguous:
			raise InvalidArgumentError("memoryview must be contiguous")
		return data.cast("B")

	raise InvalidArgumentError("data must be bytes-like")


def _check_range(view: memoryview, offset: int, count: Optional[int]) -> Tuple[int, int]:
	if count is None:
		count = len(view) - offset
	if offset < 0:
		raise InvalidArgumentError("offset must be non-negative")
	if count < 0 or count > len(view):
		raise InvalidArgumentError("count is out of range")
	if len(view) - count < offset:
		raise InvalidArgumentError("offset and count exceed the buffer length")
	return offset, count


def _rotl(value: int, count: int) -> int:
	return ((value << count) | (value >> (32 - count))) & WORD_MASK


def compress_block(state: State, block: BufferLike) -> State:
	"""Run the 80-round SHA-1 compression of one 64-byte block over ``state``."""

	if len(block) != BLOCK_SIZE:
		raise InvalidArgumentError("Block size must be exactly 64 bytes")

	w = np.frombuffer(block, dtype=">u4").tolist()
	for i in range(16, 80):
		w.append(_rotl(w[i - 3] ^ w[i - 8] ^ w[i - 14] ^ w[i - 16], 1))

	a, b, c, d, e = state

	for i in range(80):
		if i < 20:
			f = (b & c) | (~b & d)
			k = ROUND_CONSTANTS[0]
		elif i < 40:
			f = b ^ c ^ d
			k = ROUND_CONSTANTS[1]
		elif i < 60:
			f = (b & c) | (b & d) | (c & d)
			k = ROUND_CONSTANTS[2]
		else:
			f = b ^ c ^ d
			k = ROUND_CONSTANTS[3]

		e = (e + _rotl(a, 5) + f + k + w[i]) & WORD_MASK
		a, b, c, d, e = e, a, _rotl(b, 30), c, d

	return (
		(state[0] + a) & WORD_MASK,
		(state[1] + b) & WORD_MASK,
		(state[2] + c) & WORD_MASK,
		(state[3] + d) & WORD_MASK,
		(state[4] + e) & WORD_MASK,
	)


class SHA1Engine:
	block_size: int = BLOCK_SIZE
	digest_size: int = DIGEST_SIZE

	def __init__(self) -> None:
		self._carry = np.zeros(BLOCK_SIZE, dtype=np.uint8)
		self.initialize()

	@property
	def byte_count(self) -> int:
		"""Bytes already run through the compressor."""
		return self._count

	@property
	def pending(self) -> int:
		"""Bytes held in the carry buffer."""
		return self._fill

	@property
	def state(self) -> State:
		return self._state

	def initialize(self) -> None:
		self._state: State = INITIAL_STATE
		self._count = 0
		self._fill = 0

	def update(self, data: BufferLike, offset: int = 0, count: Optional[int] = None) -> None:
		view = _as_view(data)
		offset, count = _check_range(view, offset, count)
		if count == 0:
			return

		if self._fill:
			room = BLOCK_SIZE - self._fill
			if count < room:
				self._carry[self._fill : self._fill + count] = np.frombuffer(
					view[offset : offset + count], dtype=np.uint8
				)
				self._fill += count
				return

			self._carry[self._fill :] = np.frombuffer(view[offset : offset + room], dtype=np.uint8)
			self._compress(self._carry)
			self._fill = 0
			offset += room
			count -= room

		tail = count % BLOCK_SIZE
		end = offset + count - tail
		for start in range(offset, end, BLOCK_SIZE):
			self._compress(view[start : start + BLOCK_SIZE])

		if tail:
			self._carry[:tail] = np.frombuffer(view[end : end + tail], dtype=np.uint8)
			self._fill = tail

	def finalize(self) -> bytes:
		fill = self._fill
		total = self._count + fill

		padding = 56 - total % BLOCK_SIZE
		if padding < 1:
			padding += BLOCK_SIZE

		final = np.zeros(fill + padding + 8, dtype=np.uint8)
		final[:fill] = self._carry[:fill]
		final[fill] = 0x80
		# length field counts bits, modulo 2**64
		bit_length = (total * 8) & LENGTH_MASK
		final[-8:] = np.frombuffer(bit_length.to_bytes(8, "big"), dtype=np.uint8)

		for start in range(0, len(final), BLOCK_SIZE):
			self._compress(final[start : start + BLOCK_SIZE])

		digest = np.array(self._state, dtype=">u4").tobytes()
		logger.debug("finalized %d byte message in %d final block(s)", total, len(final) // BLOCK_SIZE)

		final.fill(0)
		self.initialize()
		return digest

	def copy(self) -> "SHA1Engine":
		clone = SHA1Engine()
		clone._state = self._state
		clone._count = self._count
		clone._fill = self._fill
		clone._carry[:] = self._carry
		return clone

	def wipe(self) -> None:
		"""Zero the carry buffer and reset the chaining words."""
		self._carry.fill(0)
		self.initialize()

	def _compress(self, block: BufferLike) -> None:
		self._state = compress_block(self._state, block)
		self._count += BLOCK_SIZE
