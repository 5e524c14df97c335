# Timestamp rendering for shipped documents

import math
from datetime import datetime, timezone
from typing import Union

_NANOS_PER_SECOND = 1_000_000_000


def _split_nanos(value: Union[int, float, datetime]):
	if isinstance(value, datetime):
		if value.tzinfo is None:
			value = value.replace(tzinfo=timezone.utc)
		whole = value.replace(microsecond=0)
		return int(whole.timestamp()), value.microsecond * 1000
	if isinstance(value, int):
		# Integers are nanoseconds since the epoch (time.time_ns())
		return divmod(value, _NANOS_PER_SECOND)
	seconds = math.floor(value)
	nanos = round((value - seconds) * _NANOS_PER_SECOND)
	if nanos >= _NANOS_PER_SECOND:
		return seconds + 1, nanos - _NANOS_PER_SECOND
	return seconds, nanos


def format_timestamp(value: Union[int, float, datetime]) -> str:
	"""Render a point in time as UTC RFC 3339 with nine fractional digits.

	Accepts epoch seconds as a float (LogRecord.created), epoch
	nanoseconds as an int, or a datetime (naive values are taken as UTC).
	"""
	seconds, nanos = _split_nanos(value)
	moment = datetime.fromtimestamp(seconds, tz=timezone.utc)
	return f"{moment.strftime('%Y-%m-%dT%H:%M:%S')}.{nanos:09d}Z"
