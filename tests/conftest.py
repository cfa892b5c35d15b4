"""
Shared fixtures: the ASGI test client and the sample XML documents.
"""

from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from pacs_gateway.iso20022 import validation
from pacs_gateway.iso20022.templates import TEMPLATES
from pacs_gateway.main import app

FIXTURES = Path(__file__).parent / "fixtures"


@pytest_asyncio.fixture
async def async_client():
    """HTTP client bound to the FastAPI app (no network, no lifespan)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def load_fixture():
    def _load(name: str) -> str:
        return (FIXTURES / name).read_text(encoding="utf-8")
    return _load


@pytest.fixture
def pacs008_xml() -> str:
    return TEMPLATES["pacs.008"]["sampleXml"]


@pytest.fixture
def pacs008_multi_xml(load_fixture) -> str:
    return load_fixture("pacs008_multi.xml")


@pytest.fixture
def pacs002_acsp_xml() -> str:
    return TEMPLATES["pacs.002.ACSP"]["sampleXml"]


@pytest.fixture
def pacs002_acsc_xml() -> str:
    return TEMPLATES["pacs.002.ACSC"]["sampleXml"]


@pytest.fixture
def pacs002_rjct_xml() -> str:
    return TEMPLATES["pacs.002.RJCT"]["sampleXml"]


@pytest.fixture
def pacs002_payment_level_xml(load_fixture) -> str:
    return load_fixture("pacs002_payment_level.xml")


@pytest.fixture
def schema_registry():
    """Global schema registry backed by the minimal pacs.008 test schema."""
    registry = validation.SchemaRegistry(
        FIXTURES, schema_files={"pacs.008": "pacs.008.minimal.xsd"}
    )
    validation.reset_registry(registry)
    yield registry
    validation.reset_registry()
