# OpenSearch index mappings for shipped log documents

LOG_PROPERTIES = {
	"Service": {"type": "keyword"},
	"Version": {"type": "keyword"},
	"Host": {"type": "keyword"},
	"File": {"type": "keyword"},
	"FuncName": {"type": "keyword"},
	"Line": {"type": "integer"},
	"Timestamp": {"type": "date_nanos"},
	"Message": {"type": "text"},
	"Level": {"type": "keyword"},
	"Data": {"type": "object", "dynamic": True},
}

# Body for creating a single log index
LOG_INDEX_MAPPING = {
	"settings": {"number_of_shards": 1},
	"mappings": {"properties": LOG_PROPERTIES},
}


def log_index_template(pattern):
	"""Index template applying the log mapping to every index matching pattern."""
	return {
		"index_patterns": [pattern],
		"template": LOG_INDEX_MAPPING,
	}
