from datetime import timedelta

import pytest

from motofinance.core.database.base import utc_now
from motofinance.core.errors import AuthenticationError, ConflictError, NotFoundError
from motofinance.core.models.io.auth import SignUpRequest
from motofinance.server.services import auth


def _sign_up(email: str) -> SignUpRequest:
    return SignUpRequest(full_name="Jane Njeri", email=email, password="s3cret-pass", confirm_password="s3cret-pass")


class TestPasswordHashing:
    def test_hash_format(self):
        stored = auth.hash_password("s3cret-pass", iterations=1000)
        algorithm, iterations, salt, digest = stored.split("$")
        assert algorithm == "pbkdf2_sha256"
        assert iterations == "1000"
        assert salt and digest

    def test_verify_round_trip(self):
        stored = auth.hash_password("s3cret-pass", iterations=1000)
        assert auth.verify_password("s3cret-pass", stored)
        assert not auth.verify_password("wrong-pass", stored)

    def test_salt_differs_per_hash(self):
        assert auth.hash_password("s3cret-pass", iterations=1000) != auth.hash_password("s3cret-pass", iterations=1000)

    @pytest.mark.parametrize(
        "stored",
        [
            "",
            "plain-text",
            "md5$1000$c2FsdA==$aGFzaA==",
            "pbkdf2_sha256$abc$c2FsdA==$aGFzaA==",
            "pbkdf2_sha256$10$%%$%%",
        ],
    )
    def test_malformed_hashes_never_match(self, stored):
        assert not auth.verify_password("anything", stored)


class TestSessions:
    async def test_sign_up_roles(self, repos):
        first = await auth.sign_up(repos, _sign_up("first@motofinance.co.ke"))
        second = await auth.sign_up(repos, _sign_up("second@motofinance.co.ke"), default_role="accountant")
        assert first.role == "admin"
        assert second.role == "accountant"

    async def test_duplicate_email(self, repos):
        await auth.sign_up(repos, _sign_up("jane@motofinance.co.ke"))
        with pytest.raises(ConflictError):
            await auth.sign_up(repos, _sign_up("JANE@motofinance.co.ke"))

    async def test_expired_session_is_rejected(self, repos):
        await auth.sign_up(repos, _sign_up("jane@motofinance.co.ke"))
        issued = utc_now() - timedelta(days=10)
        session, profile = await auth.sign_in(
            repos, "jane@motofinance.co.ke", "s3cret-pass", expire_days=7, now=issued
        )

        resolved = await auth.resolve_session(repos, session.token, now=issued + timedelta(days=6))
        assert resolved.id == profile.id
        with pytest.raises(AuthenticationError):
            await auth.resolve_session(repos, session.token)

    async def test_sign_out_twice_is_harmless(self, repos):
        await auth.sign_up(repos, _sign_up("jane@motofinance.co.ke"))
        session, _ = await auth.sign_in(repos, "jane@motofinance.co.ke", "s3cret-pass")
        await auth.sign_out(repos, session.token)
        await auth.sign_out(repos, session.token)
        with pytest.raises(AuthenticationError):
            await auth.resolve_session(repos, session.token)

    async def test_sign_out_unknown_token(self, repos):
        with pytest.raises(AuthenticationError):
            await auth.sign_out(repos, "unknown")

    async def test_change_role_of_missing_profile(self, repos):
        with pytest.raises(NotFoundError):
            await auth.change_role(repos, "missing", "accountant")
