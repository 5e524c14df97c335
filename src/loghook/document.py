# Normalized log document shipped to the store

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping

from .levels import Level

DOC_TYPE = "log"


@dataclass(frozen=True)
class LogDocument:
	"""Immutable snapshot of one log event.

	service, version and host come from the hook; the rest is derived from
	the event. data is copied into a read-only mapping on construction.
	"""
	service: str
	version: str
	host: str
	file: str
	func_name: str
	line: int
	timestamp: str
	message: str
	level: Level
	data: Mapping[str, Any] = field(default_factory=dict)

	def __post_init__(self):
		object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

	def to_document(self) -> Dict[str, Any]:
		"""JSON body as stored in the index."""
		return {
			"Service": self.service,
			"Version": self.version,
			"Host": self.host,
			"File": self.file,
			"FuncName": self.func_name,
			"Line": self.line,
			"Timestamp": self.timestamp,
			"Message": self.message,
			"Level": self.level.label,
			"Data": dict(self.data),
		}
