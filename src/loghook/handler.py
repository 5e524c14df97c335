# OpenSearchHook implementation

import logging
import socket
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from .caller import DEFAULT_SKIP_PREFIXES, MAX_FRAMES, caller_from_record, resolve_caller, short_file
from .config import load_config
from .document import DOC_TYPE, LogDocument
from .errors import CannotCreateIndexError
from .formatting import format_timestamp
from .levels import Level, LevelLike, accepted_levels, from_levelno, parse_level
from .lifecycle import LifecycleContext
from .opensearch.client import DocumentStore, get_store
from .opensearch.mappings import LOG_INDEX_MAPPING

# Depth 0 would be fire() itself
DEFAULT_START_DEPTH = 1

_DATA_VALUE_TYPES = (str, int, float, bool, type(None))

# Deeper nesting is stringified; also stops self-referencing containers
_MAX_DATA_DEPTH = 16


def _coerce_data_value(value: Any, depth: int = 0) -> Any:
	if isinstance(value, _DATA_VALUE_TYPES):
		return value
	if depth < _MAX_DATA_DEPTH:
		if isinstance(value, Mapping):
			return _normalize_mapping(value, depth + 1)
		if isinstance(value, (list, tuple)):
			return [_coerce_data_value(item, depth + 1) for item in value]
	return str(value)


def _normalize_mapping(value: Mapping, depth: int = 0) -> Dict[str, Any]:
	data: Dict[str, Any] = {}
	for key, val in value.items():
		if key is None:
			continue
		key_text = str(key).strip()
		if not key_text:
			continue
		data[key_text] = _coerce_data_value(val, depth)
	return data


def _normalize_data(value: Any) -> Dict[str, Any]:
	if not isinstance(value, Mapping):
		return {}
	return _normalize_mapping(value)


def _extract_data(record: logging.LogRecord) -> Dict[str, Any]:
	"""Copy the structured fields passed as extra={"data": {...}}."""
	return _normalize_data(getattr(record, "data", None))


def _hostname() -> str:
	try:
		return socket.gethostname()
	except OSError:
		return ""


class OpenSearchHook(logging.Handler):
	"""Logging handler that ships every admitted record to a store index.

	Admission is left to logging: the handler level is the least severe
	accepted level. Each emit makes exactly one synchronous index call.
	"""

	def __init__(
		self,
		store: DocumentStore,
		index_name: str,
		service: str,
		version: str,
		host: str = "",
		level: LevelLike = Level.DEBUG,
		context: Optional[LifecycleContext] = None,
		start_depth: int = DEFAULT_START_DEPTH,
		max_frames: int = MAX_FRAMES,
		skip_prefixes: Sequence[str] = DEFAULT_SKIP_PREFIXES,
	):
		minimum = parse_level(level)
		super().__init__(int(minimum))
		self.store = store
		self._index_name = index_name
		self._service = service
		self._version = version
		self._host = host
		self._levels = accepted_levels(minimum)
		self.context = context or LifecycleContext()
		self.start_depth = start_depth
		self.max_frames = max_frames
		self.skip_prefixes = tuple(skip_prefixes)

	@property
	def index_name(self) -> str:
		return self._index_name

	@property
	def service(self) -> str:
		return self._service

	@property
	def version(self) -> str:
		return self._version

	@property
	def host(self) -> str:
		return self._host

	@property
	def levels(self) -> Tuple[Level, ...]:
		return self._levels

	def setLevel(self, level):
		# The accepted levels are fixed at construction
		if int(parse_level(level)) != self.level:
			raise ValueError(
				f"{type(self).__name__} accepts {', '.join(item.label for item in self._levels)}; "
				f"build a new hook to change the minimum level"
			)

	def build_document(self, record: logging.LogRecord, caller) -> LogDocument:
		file_name = short_file(caller.file)
		# New mapping; the record's own fields are left untouched
		data = _extract_data(record)
		data["file"] = file_name
		data["func"] = caller.func_name
		data["line"] = caller.line
		return LogDocument(
			service=self._service,
			version=self._version,
			host=self._host,
			file=file_name,
			func_name=caller.func_name,
			line=caller.line,
			timestamp=format_timestamp(record.created),
			message=self.format(record),
			level=from_levelno(record.levelno),
			data=data,
		)

	def fire(self, record: logging.LogRecord):
		"""Ship one record; raises whatever the store raises."""
		self.context.raise_if_cancelled()
		caller = caller_from_record(record)
		if caller is None:
			caller = resolve_caller(self.start_depth, self.max_frames, self.skip_prefixes)
		doc = self.build_document(record, caller)
		return self.store.index_document(self._index_name, DOC_TYPE, doc.to_document(), self.context)

	def emit(self, record):
		try:
			self.fire(record)
		except RecursionError:
			raise
		except Exception:
			self.handleError(record)

	def cancel(self):
		"""Stop all further deliveries. Cannot be undone."""
		self.context.cancel()

	def close(self):
		self.cancel()
		super().close()


def ensure_index(
	store: DocumentStore,
	index: str,
	context: LifecycleContext,
	mapping: Optional[Dict[str, Any]] = None,
) -> bool:
	"""Create index unless it exists. Returns True when it was created."""
	if store.index_exists(index, context):
		return False
	acknowledged = store.create_index(index, context, body=mapping or LOG_INDEX_MAPPING)
	if not acknowledged:
		raise CannotCreateIndexError(f"Cannot create index '{index}'")
	return True


def create_hook(
	store: DocumentStore,
	service: str,
	version: str,
	level: LevelLike,
	index: str,
	mapping: Optional[Dict[str, Any]] = None,
	**options,
) -> OpenSearchHook:
	"""Make sure index exists in store and return a hook writing to it.

	Errors from the existence check or the creation request propagate;
	an unacknowledged creation raises CannotCreateIndexError.
	"""
	minimum = parse_level(level)
	context = LifecycleContext()
	ensure_index(store, index, context, mapping)
	return OpenSearchHook(
		store,
		index,
		service,
		version,
		host=_hostname(),
		level=minimum,
		context=context,
		**options,
	)


def hook_from_config(cfg=None, store=None, **options) -> OpenSearchHook:
	"""Build a hook from LOGHOOK_* settings."""
	cfg = cfg or load_config()
	store = store or get_store(cfg)
	return create_hook(store, cfg.service, cfg.version, cfg.level, cfg.index, **options)
