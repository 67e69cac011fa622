"""Exception types raised by the digest engine and its adapter."""


class SHA1Error(Exception):
	pass


class InvalidArgumentError(SHA1Error, ValueError):
	"""A buffer, offset or count violates the call contract."""


class DisposedError(SHA1Error, RuntimeError):
	"""The instance was cleared and its buffers released."""

	def __init__(self, message: str = "hasher has been disposed") -> None:
		super().__init__(message)


class IllegalStateError(SHA1Error, RuntimeError):
	"""The digest was requested while input is still pending."""
