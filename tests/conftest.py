import pytest

from tinify_sdk import Client, Configuration, Source, Transport

API_KEY = "test-key-12345"
LOCATION = "https://api.tinify.com/output/abc"
SHRINK_URL = "https://api.tinify.com/shrink"

PROXY_VARIABLES = (
    "http_proxy",
    "https_proxy",
    "all_proxy",
    "no_proxy",
    "HTTP_PROXY",
    "HTTPS_PROXY",
    "ALL_PROXY",
    "NO_PROXY",
)


@pytest.fixture
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in PROXY_VARIABLES + (
        "TINIFY_API_KEY",
        "TINIFY_PROXY",
        "TINIFY_API_ENDPOINT",
    ):
        # set first so that monkeypatch restores the original state afterwards
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def configuration() -> Configuration:
    return Configuration(api_key=API_KEY)


@pytest.fixture
def client(configuration: Configuration, clean_environment: pytest.MonkeyPatch) -> Client:
    with Transport() as transport:
        yield Client(configuration, transport=transport)


@pytest.fixture
def source(client: Client) -> Source:
    return Source(client, LOCATION, compression_count=1)
