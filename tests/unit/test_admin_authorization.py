"""
Tests for administrator authorization and identity resolution.

The predicates are pure; AdminAuthorizer and resolve_identity are exercised
against small in-memory stores so every failure branch can be forced.
"""

import pytest

from app.core.auth import resolve_identity
from app.core.permissions import (
    AdminAuthorizer,
    email_in_allow_list,
    has_admin_role,
    parse_admin_emails,
)
from app.schemas.auth import AuthSession, IdentityRecord


class FakeIdentityStore:
    """Identity lookup backed by a dict; counts calls."""

    def __init__(self, records: dict[str, IdentityRecord] | None = None) -> None:
        self.records = records or {}
        self.calls = 0

    async def get_identity_by_id(self, identity_id: str) -> IdentityRecord | None:
        self.calls += 1
        return self.records.get(identity_id)


class FailingIdentityStore:
    async def get_identity_by_id(self, identity_id: str) -> IdentityRecord | None:
        raise ConnectionError("identity service unavailable")


class FakeSessionStore:
    def __init__(self, sessions: dict[str, AuthSession]) -> None:
        self.sessions = sessions

    async def authenticate_session(self, credential: str | None) -> AuthSession | None:
        if credential is None:
            return None
        return self.sessions.get(credential)


class FailingSessionStore:
    async def authenticate_session(self, credential: str | None) -> AuthSession | None:
        raise TimeoutError("session exchange timed out")


@pytest.mark.unit
class TestParseAdminEmails:
    def test_comma_separated_string(self) -> None:
        assert parse_admin_emails("a@x.com,b@x.com") == {"a@x.com", "b@x.com"}

    def test_trims_lowercases_and_drops_empty(self) -> None:
        assert parse_admin_emails("  Ops@Example.com , ,,b@x.com ") == {"ops@example.com", "b@x.com"}

    def test_iterable_input(self) -> None:
        assert parse_admin_emails([" A@x.com", "", "  "]) == {"a@x.com"}

    @pytest.mark.parametrize("raw", [None, "", " , ,", []])
    def test_empty_configuration(self, raw) -> None:
        assert parse_admin_emails(raw) == frozenset()


@pytest.mark.unit
class TestEmailInAllowList:
    def test_case_insensitive_match(self) -> None:
        allow_list = parse_admin_emails("ops@example.com")
        assert email_in_allow_list("OPS@example.COM", allow_list) is True

    def test_surrounding_whitespace_ignored(self) -> None:
        assert email_in_allow_list(" ops@example.com ", {"ops@example.com"}) is True

    def test_not_listed(self) -> None:
        assert email_in_allow_list("someone@example.com", {"ops@example.com"}) is False

    @pytest.mark.parametrize("email", [None, ""])
    def test_missing_address(self, email) -> None:
        assert email_in_allow_list(email, {"ops@example.com"}) is False

    def test_empty_allow_list(self) -> None:
        assert email_in_allow_list("ops@example.com", frozenset()) is False


@pytest.mark.unit
class TestHasAdminRole:
    @pytest.mark.parametrize("roles", [["admin"], ["super_admin"], ["user", "admin"]])
    def test_admin_roles(self, roles) -> None:
        assert has_admin_role(roles) is True

    @pytest.mark.parametrize("roles", [None, [], ["user"], ["Admin"], ["moderator"]])
    def test_non_admin_roles(self, roles) -> None:
        assert has_admin_role(roles) is False


@pytest.mark.unit
class TestAdminAuthorizer:
    async def test_allow_listed_address_is_admin(self) -> None:
        store = FakeIdentityStore({"a1": IdentityRecord(id="a1", email="Ops@Example.com")})
        authorizer = AdminAuthorizer("ops@example.com")

        assert await authorizer.is_admin(store, "a1") is True

    async def test_admin_role_is_admin(self) -> None:
        store = FakeIdentityStore({"a2": IdentityRecord(id="a2", email="x@y.com", roles=["super_admin"])})
        authorizer = AdminAuthorizer("")

        assert await authorizer.is_admin(store, "a2") is True

    async def test_no_signal_is_not_admin(self) -> None:
        store = FakeIdentityStore({"u": IdentityRecord(id="u", email="x@y.com", roles=["user"])})
        authorizer = AdminAuthorizer("ops@example.com")

        assert await authorizer.is_admin(store, "u") is False

    async def test_missing_identity_fails_closed(self) -> None:
        authorizer = AdminAuthorizer("ops@example.com")

        assert await authorizer.is_admin(FakeIdentityStore(), "ghost") is False

    async def test_lookup_error_fails_closed(self) -> None:
        authorizer = AdminAuthorizer("ops@example.com")

        assert await authorizer.is_admin(FailingIdentityStore(), "a1") is False

    @pytest.mark.parametrize("identity_id", [None, ""])
    async def test_empty_id_skips_lookup(self, identity_id) -> None:
        store = FakeIdentityStore()
        authorizer = AdminAuthorizer("ops@example.com")

        assert await authorizer.is_admin(store, identity_id) is False
        assert store.calls == 0

    async def test_allow_list_reread_on_each_check(self) -> None:
        """Changing the configured list takes effect without rebuilding the authorizer."""
        store = FakeIdentityStore({"a1": IdentityRecord(id="a1", email="ops@example.com")})
        admin_emails = ["ops@example.com"]
        authorizer = AdminAuthorizer(admin_emails)

        assert await authorizer.is_admin(store, "a1") is True

        admin_emails.clear()
        assert await authorizer.is_admin(store, "a1") is False
        assert store.calls == 2


@pytest.mark.unit
class TestResolveIdentity:
    async def test_valid_session(self) -> None:
        store = FakeSessionStore({"tok": AuthSession(user_id="a1", email="ops@example.com")})

        identity = await resolve_identity(store, "tok")

        assert identity is not None
        assert identity.id == "a1"
        assert identity.address == "ops@example.com"
        assert identity.is_admin is False

    @pytest.mark.parametrize("credential", [None, "", "unknown-token"])
    async def test_no_session(self, credential) -> None:
        store = FakeSessionStore({"tok": AuthSession(user_id="a1")})

        assert await resolve_identity(store, credential) is None

    async def test_exchange_error_returns_none(self) -> None:
        assert await resolve_identity(FailingSessionStore(), "tok") is None
