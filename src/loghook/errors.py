# Exceptions raised by the hook and its initializer


class LogHookError(Exception):
	"""Base exception for loghook errors."""
	pass


class CannotCreateIndexError(LogHookError):
	"""Raised when the store accepts an index creation but does not acknowledge it."""
	pass


class OperationCanceledError(LogHookError):
	"""Raised when a store call runs under a cancelled lifecycle context."""
	pass
