from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest
from release_images.clients.registry_session import RegistrySession
from release_images.errors import CredentialExpiredError, RegistryAuthError
from release_images.models import RegistryCredential

ISSUED_AT = datetime(2026, 10, 17, 9, 30, 0)


def make_session(elapsed_seconds):
    credential = RegistryCredential(
        token="tok", registry="registry.digitalocean.com/team", issued_at=ISSUED_AT, expiry_seconds=600
    )
    doctl = MagicMock()
    doctl.digest_list.return_value = [("buildcache", "sha256:bbb"), ("latest", "sha256:aaa")]
    registry = MagicMock()
    registry.missing.return_value = False
    clock = lambda: ISSUED_AT + timedelta(seconds=elapsed_seconds)
    return RegistrySession(credential, doctl, registry, clock)


def test_operations_within_ttl():
    session = make_session(599)
    assert session.cache_missing("api", "buildcache") is False
    assert session.digest("api", "latest") == "sha256:aaa"
    assert session.digest("api", "v1") is None


@pytest.mark.parametrize("elapsed", [600, 3600])
def test_operations_after_ttl_fail_authentication(elapsed):
    session = make_session(elapsed)
    with pytest.raises(RegistryAuthError):
        session.cache_missing("api", "buildcache")
    with pytest.raises(CredentialExpiredError):
        session.digest("api", "latest")
    session.registry.missing.assert_not_called()
    session.doctl.digest_list.assert_not_called()


def test_reference():
    assert make_session(0).reference("api", "latest") == "registry.digitalocean.com/team/api:latest"


def test_authenticate_logs_in_once():
    doctl = MagicMock()
    doctl.registry_login.return_value = RegistryCredential(
        token="tok", registry="registry.digitalocean.com/team", issued_at=datetime.now()
    )
    session = RegistrySession.authenticate(doctl, ttl=600)
    doctl.registry_login.assert_called_once_with(expiry_seconds=600)
    assert session.registry.auth == ("tok", "tok")
    session.check()
