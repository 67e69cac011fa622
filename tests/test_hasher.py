import hashlib
import io

import pytest

from sha1stream import (
	DisposedError,
	IllegalStateError,
	InvalidArgumentError,
	SHA1Hasher,
	hash_file,
	sha1,
	sha1_hex,
)
from sha1stream.constants import INITIAL_STATE

ABC = "a9993e364706816aba3e25717850c26c9cd0d89d"
EMPTY = "da39a3ee5e6b4b0d3255bfef95601890afd80709"


def test_compute_known_answers():
	hasher = SHA1Hasher()
	assert hasher.compute(b"").hex() == EMPTY
	assert hasher.compute(b"abc").hex() == ABC
	assert hasher.hash.hex() == ABC
	assert hasher.hexdigest() == ABC


def test_compute_slice():
	assert SHA1Hasher().compute(b"--abc--", 2, 3).hex() == ABC


def test_compute_after_partial_transform_starts_fresh():
	hasher = SHA1Hasher()
	hasher.transform_block(b"garbage", 0, 7)
	assert hasher.compute(b"abc").hex() == ABC


def test_compute_stream_reads_in_chunks():
	data = bytes(range(256)) * 40
	hasher = SHA1Hasher()
	assert hasher.compute_stream(io.BytesIO(data), chunk_size=100) == hashlib.sha1(data).digest()
	assert hasher.compute_stream(io.BytesIO(data)) == hashlib.sha1(data).digest()


def test_compute_stream_rejects_bad_chunk_size():
	with pytest.raises(InvalidArgumentError):
		SHA1Hasher().compute_stream(io.BytesIO(b"abc"), chunk_size=0)


def test_transform_blocks_then_final_block():
	data = bytes(range(200))
	hasher = SHA1Hasher()
	output = bytearray(len(data))
	assert hasher.transform_block(data, 0, 70, output, 0) == 70
	assert hasher.transform_block(data, 70, 100, output, 70) == 100
	tail = hasher.transform_final_block(data, 170, 30)

	assert tail == data[170:]
	assert bytes(output[:170]) == data[:170]
	assert hasher.hash == hashlib.sha1(data).digest()


def test_transform_block_same_buffer_is_not_copied():
	data = bytearray(b"abcdef")
	hasher = SHA1Hasher()
	hasher.transform_block(data, 0, 6, data, 0)
	assert data == bytearray(b"abcdef")


def test_transform_block_rejects_small_output():
	with pytest.raises(InvalidArgumentError):
		SHA1Hasher().transform_block(b"abcdef", 0, 6, bytearray(4), 0)


@pytest.mark.parametrize(
	"output, output_offset",
	[
		(bytearray(6), -1),
		(b"zzzzzz", 0),
		(memoryview(b"zzzzzz"), 0),
		(memoryview(bytearray(24)).cast("I"), 0),
	],
)
def test_transform_block_rejects_bad_output_without_feeding(output, output_offset):
	hasher = SHA1Hasher()
	hasher.transform_block(bytes(range(1, 11)), 0, 10)
	engine = hasher._engine
	size = len(output)

	with pytest.raises(InvalidArgumentError):
		hasher.transform_block(b"abc", 0, 3, output, output_offset)

	assert (engine.pending, engine.byte_count) == (10, 0)
	assert len(output) == size
	hasher.transform_final_block(b"", 0, 0)
	assert hasher.hash == hashlib.sha1(bytes(range(1, 11))).digest()


def test_transform_block_writes_into_memoryview():
	output = bytearray(8)
	SHA1Hasher().transform_block(b"abc", 0, 3, memoryview(output), 2)
	assert output == bytearray(b"\x00\x00abc\x00\x00\x00")


def test_hash_unavailable_mid_stream():
	hasher = SHA1Hasher()
	hasher.compute(b"abc")
	hasher.transform_block(b"abc", 0, 3)
	with pytest.raises(IllegalStateError):
		hasher.hash
	hasher.transform_final_block(b"", 0, 0)
	assert hasher.hash.hex() == ABC


def test_hash_unavailable_before_compute():
	with pytest.raises(IllegalStateError):
		SHA1Hasher().hash


def test_initialize_clears_mid_stream_flag():
	hasher = SHA1Hasher()
	hasher.compute(b"abc")
	hasher.transform_block(b"xyz", 0, 3)
	hasher.initialize()
	assert hasher.hash.hex() == ABC


@pytest.mark.parametrize("offset, count", [(-1, 2), (0, -2), (2, 5), (0, 9)])
def test_compute_rejects_bad_range(offset, count):
	with pytest.raises(InvalidArgumentError):
		SHA1Hasher().compute(b"abcd", offset, count)


def test_compute_rejects_missing_buffer():
	with pytest.raises(InvalidArgumentError):
		SHA1Hasher().compute(None)


def test_clear_disposes_instance():
	hasher = SHA1Hasher()
	hasher.compute(b"abc")
	hasher.clear()
	assert hasher.disposed
	for call in (
		lambda: hasher.hash,
		lambda: hasher.compute(b"abc"),
		lambda: hasher.compute_stream(io.BytesIO(b"abc")),
		lambda: hasher.transform_block(b"abc", 0, 3),
		lambda: hasher.transform_final_block(b"abc", 0, 3),
		hasher.initialize,
	):
		with pytest.raises(DisposedError):
			call()
	hasher.clear()


def test_clear_zeroes_engine_buffers():
	hasher = SHA1Hasher()
	engine = hasher._engine
	hasher.transform_block(b"\xff" * 40, 0, 40)
	assert engine._carry.any()

	hasher.clear()

	assert not engine._carry.any()
	assert engine.state == INITIAL_STATE
	assert (engine.pending, engine.byte_count) == (0, 0)


def test_context_manager_disposes_on_exit():
	with SHA1Hasher() as hasher:
		assert hasher.compute(b"abc").hex() == ABC
	assert hasher.disposed
	with pytest.raises(DisposedError):
		hasher.compute(b"abc")


def test_returned_digest_is_not_aliased():
	hasher = SHA1Hasher()
	digest = hasher.compute(b"abc")
	hasher.clear()
	assert digest.hex() == ABC


def test_module_helpers(tmp_path):
	assert sha1(b"abc").hex() == ABC
	assert sha1_hex(b"") == EMPTY
	path = tmp_path / "data.bin"
	path.write_bytes(b"abc" * 5000)
	assert hash_file(str(path), chunk_size=1000) == hashlib.sha1(b"abc" * 5000).hexdigest()


def test_adapter_properties():
	hasher = SHA1Hasher()
	assert hasher.hash_size == 160
	assert hasher.input_block_size == hasher.output_block_size == 1
	assert hasher.can_transform_multiple_blocks
	assert hasher.can_reuse_transform
