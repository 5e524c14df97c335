import os
import sys
import uuid

import pytest

PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))
SRC_DIR = os.path.join(PROJECT_ROOT, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)


class FakeStore:
    """In-memory DocumentStore that honors the lifecycle context."""

    def __init__(self, exists=True, acknowledged=True, exists_error=None, create_error=None, index_error=None):
        self.exists = exists
        self.acknowledged = acknowledged
        self.exists_error = exists_error
        self.create_error = create_error
        self.index_error = index_error
        self.exists_calls = []
        self.created = []
        self.indexed = []

    def index_exists(self, index, context):
        context.raise_if_cancelled()
        self.exists_calls.append(index)
        if self.exists_error:
            raise self.exists_error
        return self.exists

    def create_index(self, index, context, body=None):
        context.raise_if_cancelled()
        if self.create_error:
            raise self.create_error
        self.created.append({"index": index, "body": body})
        return self.acknowledged

    def index_document(self, index, doc_type, body, context):
        context.raise_if_cancelled()
        if self.index_error:
            raise self.index_error
        self.indexed.append({"index": index, "doc_type": doc_type, "body": body})
        return {"result": "created"}


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def fake_store_class():
    return FakeStore


@pytest.fixture
def opensearch_client():
    """Real opensearch-py client; skips when no cluster is reachable."""
    from opensearchpy.exceptions import OpenSearchException
    from loghook.config import load_config
    from loghook.opensearch.client import get_opensearch_client

    client = get_opensearch_client(load_config())
    try:
        client.info()
    except OpenSearchException as e:
        pytest.skip(f"OpenSearch not reachable: {e}")
    return client


@pytest.fixture
def test_index(opensearch_client):
    index_name = f"loghook-test-{uuid.uuid4().hex}"
    yield index_name
    if opensearch_client.indices.exists(index=index_name):
        opensearch_client.indices.delete(index=index_name)
