# Configuration loading for loghook

import os

from .levels import parse_level

# Lazy load dotenv - only when config is first accessed
_dotenv_loaded = False
_custom_dotenv_path = None

_TRUE_VALUES = ("1", "true", "yes", "on")


def _getenv(name, default):
	value = os.getenv(name)
	return value if value else default


class LogHookConfig:
	"""Loads configuration from environment variables and provides defaults."""
	def __init__(self):
		self.opensearch_host = _getenv("LOGHOOK_OPENSEARCH_HOST", "localhost")
		self.opensearch_port = int(_getenv("LOGHOOK_OPENSEARCH_PORT", "9200"))
		self.opensearch_user = _getenv("LOGHOOK_OPENSEARCH_USER", "admin")
		self.opensearch_pass = _getenv("LOGHOOK_OPENSEARCH_PASS", "admin")
		self.opensearch_ssl = _getenv("LOGHOOK_OPENSEARCH_SSL", "false").strip().lower() in _TRUE_VALUES
		self.opensearch_timeout = int(_getenv("LOGHOOK_OPENSEARCH_TIMEOUT", "30"))
		self.index = _getenv("LOGHOOK_INDEX", "loghook-logs")
		# Identity stamped on every shipped document
		self.service = _getenv("LOGHOOK_SERVICE", "app")
		self.version = _getenv("LOGHOOK_VERSION", "0.0.0")
		self.level = parse_level(_getenv("LOGHOOK_LEVEL", "info"))

def set_dotenv_path(path: str):
	"""Set a custom .env file path to load. Must be called before load_config()."""
	global _custom_dotenv_path, _dotenv_loaded
	_custom_dotenv_path = path
	_dotenv_loaded = False  # Reset to force reload with new path

def load_config() -> LogHookConfig:
	"""Return a config object with all settings loaded."""
	global _dotenv_loaded
	if not _dotenv_loaded:
		from dotenv import load_dotenv, find_dotenv
		dotenv_path = os.getenv("DOTENV_PATH") or _custom_dotenv_path
		if dotenv_path:
			# Explicit files win over values already in the environment
			load_dotenv(dotenv_path, override=True)
		else:
			dotenv_path = find_dotenv(usecwd=True)
			if dotenv_path:
				load_dotenv(dotenv_path)
		_dotenv_loaded = True
	return LogHookConfig()
