"""Pytest configuration and global fixtures for DocChat tests."""

from pathlib import Path

import pytest

from docchat.batch import BatchConfig, EmbeddingGenerator
from docchat.config.models import RetrievalConfig, SegmenterConfig
from docchat.datasource.store.in_memory import InMemoryDocumentStore
from docchat.pipeline.processor import DocumentProcessor
from docchat.retrieval.assembler import ContextAssembler
from tests.utils.fakes import FakeEmbedder, FakeLLM, WordTokenizer

TOPIC_VECTORS = {
    "alpha": [1.0, 0.0, 0.0],
    "beta": [0.0, 1.0, 0.0],
    "gamma": [0.0, 0.0, 1.0],
}


@pytest.fixture
def sample_text():
    return (
        "Retrieval-Augmented Generation combines search with language models. "
        "It grounds answers in documents.\n\n"
        "Chunks are embedded once at upload time. Queries are embedded per request."
    )


# ==================== Component Fixtures ====================

@pytest.fixture
def fake_embedder():
    """Embedder mapping the keywords alpha/beta/gamma to orthogonal vectors."""
    return FakeEmbedder(vectors=TOPIC_VECTORS)


@pytest.fixture
def batch_config():
    return BatchConfig(batch_size=20, batch_delay=0.0)


@pytest.fixture
def generator(fake_embedder, batch_config):
    return EmbeddingGenerator(fake_embedder, batch_config)


@pytest.fixture
def word_tokenizer():
    return WordTokenizer()


@pytest.fixture
def assembler(generator, word_tokenizer):
    return ContextAssembler(generator, word_tokenizer, RetrievalConfig())


@pytest.fixture
def processor(generator):
    return DocumentProcessor(generator, segmenter_config=SegmenterConfig(max_chunk_size=1000))


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def fake_llm():
    return FakeLLM()


# ==================== Pytest Configuration ====================

def pytest_configure(config):
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests")


def pytest_collection_modifyitems(config, items):
    for item in items:
        rel_path = Path(item.fspath).relative_to(Path(__file__).parent)
        if "unit" in rel_path.parts:
            item.add_marker(pytest.mark.unit)
        elif "e2e" in rel_path.parts:
            item.add_marker(pytest.mark.e2e)
