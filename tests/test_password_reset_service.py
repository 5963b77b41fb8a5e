import asyncio
from datetime import timedelta

import pytest

from hospital_api.core.exceptions import AuthError, DependencyError, NotFoundError, OtpError, ValidationError
from hospital_api.modules.auth.utility import create_token, verify_password
from hospital_api.modules.password_reset.service import PasswordResetService


@pytest.fixture
def codes():
    return iter(["482913", "735102", "609448"])


@pytest.fixture
def service(auth_repo, otp_store, mailer, codes):
    return PasswordResetService(
        auth_repo=auth_repo,
        otp_store=otp_store,
        email_service=mailer,
        expiry_minutes=10,
        otp_generator=lambda: next(codes),
    )


def run(coro):
    return asyncio.run(coro)


def test_request_stores_record_and_emails_code(service, otp_store, mailer, alice, alice_token, clock):
    result = run(service.request_otp(alice_token, alice.email))

    assert "482913" not in result.message
    record = otp_store.get(alice.email)
    assert record.otp == "482913"
    assert record.expires_at == clock() + timedelta(minutes=10)
    assert mailer.sent == [(alice.email, "482913", 10)]


def test_request_without_token_is_unauthorized(service, alice):
    with pytest.raises(AuthError):
        run(service.request_otp(None, alice.email))


def test_request_without_email_is_bad_request(service, alice_token):
    with pytest.raises(ValidationError):
        run(service.request_otp(alice_token, ""))


def test_request_with_garbage_token_is_unauthorized(service, alice):
    with pytest.raises(AuthError):
        run(service.request_otp("not-a-jwt", alice.email))


def test_request_with_expired_token_is_unauthorized(service, alice):
    token = create_token(alice.id, expires_delta=timedelta(seconds=-5))
    with pytest.raises(AuthError) as exc:
        run(service.request_otp(token, alice.email))
    assert exc.value.message == "Token expired"


def test_request_for_unknown_email_is_not_found(service, alice_token, otp_store):
    with pytest.raises(NotFoundError):
        run(service.request_otp(alice_token, "ghost@example.com"))
    assert len(otp_store) == 0


def test_request_for_someone_elses_email_is_not_found(service, alice_token, bob, otp_store, mailer):
    with pytest.raises(NotFoundError):
        run(service.request_otp(alice_token, bob.email))
    assert bob.email not in otp_store
    assert mailer.sent == []


def test_failed_delivery_keeps_stored_record(service, otp_store, mailer, alice, alice_token):
    mailer.fail = True
    with pytest.raises(DependencyError):
        run(service.request_otp(alice_token, alice.email))

    assert otp_store.get(alice.email).otp == "482913"


def test_verify_without_pending_request(service, alice, alice_token):
    with pytest.raises(OtpError) as exc:
        run(service.verify_otp(alice_token, alice.email, "123456"))
    assert exc.value.message == "no pending request"


def test_verify_is_repeatable_until_expiry(service, alice, alice_token, clock):
    run(service.request_otp(alice_token, alice.email))

    for _ in range(3):
        result = run(service.verify_otp(alice_token, alice.email, "482913"))
        assert result.email == alice.email
        clock.advance(minutes=3)

    clock.advance(minutes=2)
    with pytest.raises(OtpError) as exc:
        run(service.verify_otp(alice_token, alice.email, "482913"))
    assert exc.value.message == "expired"


def test_wrong_code_is_invalid_regardless_of_timing(service, alice, alice_token, clock):
    run(service.request_otp(alice_token, alice.email))

    with pytest.raises(OtpError) as exc:
        run(service.verify_otp(alice_token, alice.email, "000000"))
    assert exc.value.message == "invalid code"

    clock.advance(minutes=30)
    with pytest.raises(OtpError) as exc:
        run(service.verify_otp(alice_token, alice.email, "000000"))
    assert exc.value.message == "invalid code"


def test_verify_requires_otp(service, alice, alice_token):
    with pytest.raises(ValidationError):
        run(service.verify_otp(alice_token, alice.email, None))


def test_second_request_invalidates_first_code(service, alice, alice_token):
    run(service.request_otp(alice_token, alice.email))
    run(service.request_otp(alice_token, alice.email))

    with pytest.raises(OtpError) as exc:
        run(service.verify_otp(alice_token, alice.email, "482913"))
    assert exc.value.message == "invalid code"
    assert run(service.verify_otp(alice_token, alice.email, "735102")).email == alice.email


def test_reset_succeeds_exactly_once(service, auth_repo, otp_store, alice, alice_token):
    run(service.request_otp(alice_token, alice.email))

    run(service.reset_password(alice_token, alice.email, "n3w-passw0rd"))

    assert verify_password("n3w-passw0rd", auth_repo.users[alice.email]["hashed_password"])
    assert alice.email not in otp_store

    with pytest.raises(OtpError) as exc:
        run(service.reset_password(alice_token, alice.email, "another-one"))
    assert exc.value.message == "no pending request"


def test_reset_without_prior_verify_still_checks_expiry(service, auth_repo, otp_store, alice, alice_token, clock):
    run(service.request_otp(alice_token, alice.email))
    old_hash = auth_repo.users[alice.email]["hashed_password"]

    clock.advance(minutes=11)
    with pytest.raises(OtpError) as exc:
        run(service.reset_password(alice_token, alice.email, "n3w-passw0rd"))

    assert exc.value.message == "expired"
    assert auth_repo.users[alice.email]["hashed_password"] == old_hash
    assert alice.email in otp_store


def test_reset_requires_new_password(service, alice, alice_token):
    run(service.request_otp(alice_token, alice.email))
    with pytest.raises(ValidationError):
        run(service.reset_password(alice_token, alice.email, ""))


def test_concurrent_resets_consume_record_once(service, alice, alice_token):
    run(service.request_otp(alice_token, alice.email))

    async def race():
        return await asyncio.gather(
            service.reset_password(alice_token, alice.email, "first-pass"),
            service.reset_password(alice_token, alice.email, "second-pass"),
            return_exceptions=True,
        )

    results = run(race())
    failures = [r for r in results if isinstance(r, OtpError)]
    assert len(failures) == 1
    assert failures[0].message == "no pending request"
    assert results[0].message == "Password reset successfully"
    assert results[1] is failures[0]


def test_concurrent_resets_leave_first_password(service, auth_repo, alice, alice_token):
    run(service.request_otp(alice_token, alice.email))

    async def race():
        return await asyncio.gather(
            service.reset_password(alice_token, alice.email, "first-pass"),
            service.reset_password(alice_token, alice.email, "second-pass"),
            return_exceptions=True,
        )

    run(race())
    stored = auth_repo.users[alice.email]["hashed_password"]
    assert verify_password("first-pass", stored)
    assert not verify_password("second-pass", stored)


def test_request_during_reset_is_not_clobbered(service, otp_store, alice, alice_token):
    run(service.request_otp(alice_token, alice.email))

    async def interleave():
        return await asyncio.gather(
            service.reset_password(alice_token, alice.email, "n3w-passw0rd"),
            service.request_otp(alice_token, alice.email),
        )

    run(interleave())

    record = otp_store.get(alice.email)
    assert record is not None
    assert record.otp == "735102"
