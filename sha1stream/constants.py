BLOCK_SIZE = 64
DIGEST_SIZE = 20
HASH_SIZE_BITS = DIGEST_SIZE * 8
DEFAULT_CHUNK_SIZE = 4096

INITIAL_STATE = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476, 0xC3D2E1F0)
ROUND_CONSTANTS = (0x5A827999, 0x6ED9EBA1, 0x8F1BBCDC, 0xCA62C1D6)

WORD_MASK = 0xFFFFFFFF
LENGTH_MASK = (1 << 64) - 1
