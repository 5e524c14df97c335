# Document store protocol and its opensearch-py adapter

from typing import Any, Dict, Optional, Protocol

from opensearchpy import OpenSearch
from opensearchpy.exceptions import AuthenticationException
from opensearchpy.exceptions import ConnectionError as TransportConnectionError

from ..config import load_config
from ..errors import LogHookError
from ..lifecycle import LifecycleContext


class OpenSearchError(LogHookError):
	"""Base exception for OpenSearch errors with user-friendly messages."""
	pass


class ConnectionFailedError(OpenSearchError):
	"""Raised when OpenSearch is not reachable."""
	pass


class AuthenticationError(OpenSearchError):
	"""Raised when authentication fails."""
	pass


class DocumentStore(Protocol):
	"""Operations the hook needs from a document store.

	Implementations must refuse to start work under a cancelled context.
	"""

	def index_exists(self, index: str, context: LifecycleContext) -> bool:
		...

	def create_index(self, index: str, context: LifecycleContext, body: Optional[Dict[str, Any]] = None) -> bool:
		...

	def index_document(self, index: str, doc_type: str, body: Dict[str, Any], context: LifecycleContext) -> Any:
		...


class OpenSearchStore:
	"""DocumentStore over an opensearch-py client.

	The client is owned by the caller and is never closed here.
	"""

	def __init__(self, client, request_timeout: Optional[float] = None):
		self.client = client
		self.request_timeout = request_timeout

	def _params(self) -> Dict[str, Any]:
		if self.request_timeout is None:
			return {}
		return {"request_timeout": self.request_timeout}

	def index_exists(self, index, context):
		context.raise_if_cancelled()
		exists = self.client.indices.exists(index=index, **self._params())
		context.raise_if_cancelled()
		return bool(exists)

	def create_index(self, index, context, body=None):
		context.raise_if_cancelled()
		response = self.client.indices.create(index=index, body=body, **self._params())
		context.raise_if_cancelled()
		return bool((response or {}).get("acknowledged"))

	def index_document(self, index, doc_type, body, context):
		# OpenSearch has no mapping types; the category is carried by the index
		context.raise_if_cancelled()
		response = self.client.index(index=index, body=body, **self._params())
		# A cancel that lands while the request is in flight still fails the call
		context.raise_if_cancelled()
		return response


def get_opensearch_client(cfg=None):
	cfg = cfg or load_config()
	return OpenSearch(
		hosts=[{"host": cfg.opensearch_host, "port": cfg.opensearch_port}],
		http_auth=(cfg.opensearch_user, cfg.opensearch_pass),
		use_ssl=cfg.opensearch_ssl,
		verify_certs=False,
		timeout=cfg.opensearch_timeout,
	)


def get_store(cfg=None, client=None):
	cfg = cfg or load_config()
	return OpenSearchStore(client or get_opensearch_client(cfg), request_timeout=cfg.opensearch_timeout)


def check_connection(client, cfg=None):
	"""Check if OpenSearch is reachable. Raises ConnectionFailedError if not."""
	cfg = cfg or load_config()
	try:
		client.info()
	except TransportConnectionError:
		raise ConnectionFailedError(
			f"Cannot connect to OpenSearch at {cfg.opensearch_host}:{cfg.opensearch_port}\n"
			f"Make sure OpenSearch is running and accessible."
		)
	except AuthenticationException:
		raise AuthenticationError(
			f"Authentication failed for OpenSearch at {cfg.opensearch_host}:{cfg.opensearch_port}\n"
			f"Check LOGHOOK_OPENSEARCH_USER and LOGHOOK_OPENSEARCH_PASS in your .env file."
		)
