"""Infrastructure fixtures - RSA key material generated once per session."""

import pytest

from keydrop.infrastructure.payload_crypto import generate_key_pair


@pytest.fixture(scope="session")
def secrets_dir(tmp_path_factory):
    directory = tmp_path_factory.mktemp("secrets")
    generate_key_pair(directory)
    return directory
