# Resolve the application call site underneath logging's own frames

import os
import sys
from typing import NamedTuple, Optional, Sequence

MAX_FRAMES = 10

# Packages whose frames never count as callers: logging itself and this adapter
DEFAULT_SKIP_PREFIXES = ("logging", "loghook")

# What logging.Logger.findCaller reports when it finds nothing
_UNKNOWN_FILE = "(unknown file)"


class Caller(NamedTuple):
	file: str
	func_name: str
	line: int


UNKNOWN_CALLER = Caller("", "", 0)


def qualified_name(frame) -> str:
	"""Return "module.qualname" for the function running in frame."""
	code = frame.f_code
	module = frame.f_globals.get("__name__") or ""
	name = getattr(code, "co_qualname", code.co_name)
	if module:
		return f"{module}.{name}"
	return name


def base_name(name: str) -> str:
	return name.rstrip("/").rsplit("/", 1)[-1]


def in_packages(name: str, packages: Sequence[str]) -> bool:
	"""True when name is one of packages or lives inside one of them."""
	return any(name == package or name.startswith(package + ".") for package in packages)


def resolve_caller(
	depth: int = 0,
	max_frames: int = MAX_FRAMES,
	skip_prefixes: Sequence[str] = DEFAULT_SKIP_PREFIXES,
) -> Caller:
	"""Find the nearest frame that is not part of the logging machinery.

	depth counts from the function calling resolve_caller (0 is that
	function itself). At most max_frames frames are inspected; if none
	qualifies, or the stack runs out, UNKNOWN_CALLER is returned.
	"""
	prefixes = tuple(skip_prefixes)
	for offset in range(max_frames):
		try:
			# +1 skips resolve_caller's own frame
			frame = sys._getframe(depth + offset + 1)
		except ValueError:
			break
		func_name = base_name(qualified_name(frame))
		if in_packages(func_name, prefixes):
			continue
		return Caller(frame.f_code.co_filename, func_name, frame.f_lineno)
	return UNKNOWN_CALLER


def caller_from_record(record) -> Optional[Caller]:
	"""Call site logging recorded on the emitting thread, if it found one.

	Honors stacklevel= and survives hand-offs such as QueueListener.
	Records built without a logger (makeLogRecord) carry no site.
	"""
	path = getattr(record, "pathname", None)
	line = getattr(record, "lineno", 0) or 0
	if not path or path == _UNKNOWN_FILE or line <= 0:
		return None
	func = getattr(record, "funcName", None) or ""
	module = getattr(record, "module", None) or ""
	func_name = f"{module}.{func}" if module and func else func or module
	return Caller(path, func_name, line)


def short_file(path: str) -> str:
	if not path:
		return ""
	return os.path.basename(path)
