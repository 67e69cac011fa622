from __future__ import annotations

import logging
from typing import BinaryIO, Optional

from .constants import DEFAULT_CHUNK_SIZE, HASH_SIZE_BITS
from .engine import BufferLike, SHA1Engine, _as_view, _check_range
from .errors import DisposedError, IllegalStateError, InvalidArgumentError

logger = logging.getLogger(__name__)


class SHA1Hasher:
	"""SHA-1 over whole buffers, slices, streams or block-by-block transforms.

	Each instance owns one :class:`SHA1Engine`.  ``clear()`` (or leaving a
	``with`` block) zeroes the stored digest and the engine buffers; the
	instance is unusable afterwards.
	"""

	hash_size: int = HASH_SIZE_BITS
	input_block_size: int = 1
	output_block_size: int = 1
	can_transform_multiple_blocks: bool = True
	can_reuse_transform: bool = True

	def __init__(self) -> None:
		self._engine: Optional[SHA1Engine] = SHA1Engine()
		self._hash_value: Optional[bytearray] = None
		self._streaming = False

	def __enter__(self) -> "SHA1Hasher":
		self._check_disposed()
		return self

	def __exit__(self, exc_type, exc, tb) -> None:
		self.clear()

	@property
	def disposed(self) -> bool:
		return self._engine is None

	@property
	def hash(self) -> bytes:
		self._check_disposed()
		if self._streaming:
			raise IllegalStateError("hash is not available until the final block is transformed")
		if self._hash_value is None:
			raise IllegalStateError("no digest has been computed yet")
		return bytes(self._hash_value)

	def hexdigest(self) -> str:
		return self.hash.hex()

	def initialize(self) -> None:
		engine = self._check_disposed()
		engine.initialize()
		self._streaming = False

	def compute(self, buffer: BufferLike, offset: int = 0, count: Optional[int] = None) -> bytes:
		engine = self._check_disposed()
		view = _as_view(buffer)
		offset, count = _check_range(view, offset, count)

		engine.initialize()
		engine.update(view, offset, count)
		return self._finish(engine)

	def compute_stream(self, stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> bytes:
		engine = self._check_disposed()
		if chunk_size <= 0:
			raise InvalidArgumentError("chunk_size must be positive")

		engine.initialize()
		while True:
			chunk = stream.read(chunk_size)
			if not chunk:
				break
			engine.update(chunk)

		return self._finish(engine)

	def transform_block(
		self,
		input_buffer: BufferLike,
		input_offset: int,
		input_count: int,
		output_buffer: Optional[BufferLike] = None,
		output_offset: int = 0,
	) -> int:
		view = _as_view(input_buffer)
		input_offset, input_count = _check_range(view, input_offset, input_count)
		if output_buffer is not None:
			_check_output(output_buffer, output_offset, input_count)
		engine = self._check_disposed()

		self._streaming = True
		engine.update(view, input_offset, input_count)
		if output_buffer is not None and (output_buffer is not input_buffer or input_offset != output_offset):
			output_buffer[output_offset : output_offset + input_count] = view[input_offset : input_offset + input_count]
		return input_count

	def transform_final_block(self, input_buffer: BufferLike, input_offset: int, input_count: int) -> bytes:
		view = _as_view(input_buffer)
		input_offset, input_count = _check_range(view, input_offset, input_count)
		engine = self._check_disposed()

		engine.update(view, input_offset, input_count)
		self._finish(engine)
		return bytes(view[input_offset : input_offset + input_count])

	def clear(self) -> None:
		if self._engine is None:
			return
		if self._hash_value is not None:
			self._hash_value[:] = bytes(len(self._hash_value))
		self._hash_value = None
		self._engine.wipe()
		self._engine = None
		self._streaming = False
		logger.debug("hasher disposed")

	dispose = clear

	def _finish(self, engine: SHA1Engine) -> bytes:
		self._hash_value = bytearray(engine.finalize())
		self._streaming = False
		return bytes(self._hash_value)

	def _check_disposed(self) -> SHA1Engine:
		if self._engine is None:
			raise DisposedError()
		return self._engine


def _check_output(output_buffer: BufferLike, output_offset: int, count: int) -> None:
	if isinstance(output_buffer, memoryview):
		if output_buffer.readonly or output_buffer.format != "B" or output_buffer.ndim != 1:
			raise InvalidArgumentError("output memoryview must be a writable byte view")
	elif not isinstance(output_buffer, bytearray):
		raise InvalidArgumentError("output buffer must be a bytearray or writable memoryview")
	if output_offset < 0:
		raise InvalidArgumentError("output offset must be non-negative")
	if len(output_buffer) - count < output_offset:
		raise InvalidArgumentError("output buffer is too small")


def sha1(data: BufferLike) -> bytes:
	return SHA1Hasher().compute(data)


def sha1_hex(data: BufferLike) -> str:
	return sha1(data).hex()


def hash_file(input_path: str, chunk_size: int = 8192) -> str:
	with SHA1Hasher() as hasher, open(input_path, "rb") as src:
		return hasher.compute_stream(src, chunk_size).hex()
