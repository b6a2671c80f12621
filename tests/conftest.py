"""Root pytest configuration for fedora3-connector tests."""
import pytest

from fedora3_connector.repository.fakes import FakeRepositoryClient
from fedora3_connector.settings import Settings

EMPTY_SHA1_HEX = "da39a3ee5e6b4b0d3255bfef95601890afd80709"


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires a running Fedora 3)"
    )


@pytest.fixture(autouse=True)
def test_env(monkeypatch):
    """Automatically set up test environment variables."""
    monkeypatch.setenv("FEDORA3_URL", "http://localhost:8080/fedora")
    for var in ("FEDORA3_USERNAME", "FEDORA3_PASSWORD", "FEDORA3_INSECURE",
                "FEDORA3_HTTP_TIMEOUT", "FEDORA3_CHUNK_SIZE"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def settings():
    """Standard test settings."""
    return Settings(
        fedora_url="http://localhost:8080/fedora",
        fedora_user="fedoraAdmin",
        fedora_pass="fedoraAdmin",
    )


@pytest.fixture
def repository():
    """Standard fake repository for testing."""
    return FakeRepositoryClient()


@pytest.fixture
def profile_xml():
    """Factory for datastreamProfile documents as served by Fedora 3.4+."""
    def _build(
        pid="demo:1",
        dsid="DC",
        mime="text/xml",
        size="341",
        created="2013-01-28T19:02:09.623Z",
        checksum_type="SHA-1",
        checksum=EMPTY_SHA1_HEX,
        namespaced=True,
    ) -> bytes:
        xmlns = ' xmlns="http://www.fedora.info/definitions/1/0/management/"' if namespaced else ""
        return (
            f'<?xml version="1.0" encoding="UTF-8"?>\n'
            f'<datastreamProfile{xmlns} pid="{pid}" dsID="{dsid}">\n'
            f'  <dsLabel>Dublin Core Record for this object</dsLabel>\n'
            f'  <dsVersionID>{dsid}1.0</dsVersionID>\n'
            f'  <dsCreateDate>{created}</dsCreateDate>\n'
            f'  <dsState>A</dsState>\n'
            f'  <dsMIME>{mime}</dsMIME>\n'
            f'  <dsFormatURI>http://www.openarchives.org/OAI/2.0/oai_dc/</dsFormatURI>\n'
            f'  <dsControlGroup>M</dsControlGroup>\n'
            f'  <dsSize>{size}</dsSize>\n'
            f'  <dsVersionable>true</dsVersionable>\n'
            f'  <dsInfoType></dsInfoType>\n'
            f'  <dsLocation>{pid}+{dsid}+{dsid}1.0</dsLocation>\n'
            f'  <dsLocationType>INTERNAL_ID</dsLocationType>\n'
            f'  <dsChecksumType>{checksum_type}</dsChecksumType>\n'
            f'  <dsChecksum>{checksum}</dsChecksum>\n'
            f'</datastreamProfile>\n'
        ).encode("utf-8")
    return _build
