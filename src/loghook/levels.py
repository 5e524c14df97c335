# Severity scale shared by the hook, the CLI and configuration

import enum
import logging
from typing import Optional, Tuple, Union


class Level(enum.IntEnum):
	"""Six-level severity scale, valued on the stdlib logging numbers."""
	DEBUG = logging.DEBUG
	INFO = logging.INFO
	WARN = logging.WARNING
	ERROR = logging.ERROR
	FATAL = logging.CRITICAL
	PANIC = logging.CRITICAL + 10

	@property
	def label(self) -> str:
		return self.name.lower()


# Most severe first
SCALE: Tuple[Level, ...] = (
	Level.PANIC,
	Level.FATAL,
	Level.ERROR,
	Level.WARN,
	Level.INFO,
	Level.DEBUG,
)

logging.addLevelName(Level.PANIC, "PANIC")

_ALIASES = {
	"panic": Level.PANIC,
	"fatal": Level.FATAL,
	"critical": Level.FATAL,
	"error": Level.ERROR,
	"err": Level.ERROR,
	"warn": Level.WARN,
	"warning": Level.WARN,
	"info": Level.INFO,
	"debug": Level.DEBUG,
}

LevelLike = Union[Level, int, str]


def normalize_level(value) -> Optional[Level]:
	"""Map level text, logging numbers or Level members onto the scale.

	Returns None for empty or unrecognized input.
	"""
	if value is None:
		return None
	if isinstance(value, Level):
		return value
	if isinstance(value, bool):
		return None
	if isinstance(value, int):
		return from_levelno(value)
	if isinstance(value, str):
		text = value.strip().lower()
		if not text:
			return None
		if text.isdigit():
			return from_levelno(int(text))
		return _ALIASES.get(text)
	return None


def parse_level(value: LevelLike) -> Level:
	level = normalize_level(value)
	if level is None:
		raise ValueError(f"Unknown log level: {value!r}")
	return level


def from_levelno(levelno: int) -> Level:
	"""Return the most severe scale level not above a logging level number.

	Numbers below DEBUG (NOTSET, custom TRACE levels) map to DEBUG.
	"""
	for level in SCALE:
		if levelno >= level:
			return level
	return Level.DEBUG


def accepted_levels(minimum: LevelLike) -> Tuple[Level, ...]:
	"""Levels at or more severe than minimum, most severe first."""
	floor = parse_level(minimum)
	return tuple(level for level in SCALE if level >= floor)
