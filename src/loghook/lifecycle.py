# Cancellable lifecycle context threaded through every store call

import threading

from .errors import OperationCanceledError


class LifecycleContext:
	"""One-way cancellation flag shared by a hook and its store calls.

	Once cancelled it stays cancelled; cancel() may be called any number
	of times from any thread.
	"""

	def __init__(self):
		self._cancelled = threading.Event()

	def cancel(self):
		self._cancelled.set()

	@property
	def cancelled(self) -> bool:
		return self._cancelled.is_set()

	def raise_if_cancelled(self):
		if self._cancelled.is_set():
			raise OperationCanceledError("operation canceled")

	def __repr__(self):
		state = "cancelled" if self.cancelled else "active"
		return f"<LifecycleContext {state}>"
