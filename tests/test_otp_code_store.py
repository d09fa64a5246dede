from datetime import timedelta

from app.constants.constants import OtpVerifyResult
from app.services.OtpCodeStore import OtpCodeStore


def make_store(clock):
    return OtpCodeStore(ttl=timedelta(minutes=5), clock=clock)


def test_issue_returns_six_digit_code(clock):
    store = make_store(clock)
    code = store.issue("u@x.com")
    assert len(code) == 6
    assert code.isdigit()
    assert 100000 <= int(code) <= 999999


def test_issue_records_issue_and_expiry_times(clock):
    store = make_store(clock)
    store.issue("u@x.com")
    record = store.get("u@x.com")
    assert record.issued_at == clock.now
    assert record.expires_at == clock.now + timedelta(minutes=5)


def test_keys_are_case_insensitive(clock):
    store = make_store(clock)
    code = store.issue("User@X.com ")
    assert store.verify("user@x.com", code) is OtpVerifyResult.success


def test_wrong_then_right_then_reused(clock):
    store = make_store(clock)
    code = store.issue("u@x.com")
    wrong = "000000" if code != "000000" else "111111"

    assert store.verify("u@x.com", wrong) is OtpVerifyResult.mismatch
    assert store.verify("u@x.com", code) is OtpVerifyResult.success
    assert store.verify("u@x.com", code) is OtpVerifyResult.not_found


def test_verify_without_issue_is_not_found(clock):
    store = make_store(clock)
    assert store.verify("nobody@x.com", "123456") is OtpVerifyResult.not_found


def test_expired_code_is_removed_on_verify(clock):
    store = make_store(clock)
    code = store.issue("u@x.com")
    clock.advance(minutes=5, seconds=1)

    assert store.verify("u@x.com", code) is OtpVerifyResult.expired
    assert store.get("u@x.com") is None

    fresh = store.issue("u@x.com")
    assert store.verify("u@x.com", fresh) is OtpVerifyResult.success


def test_code_is_still_valid_at_exact_expiry(clock):
    store = make_store(clock)
    code = store.issue("u@x.com")
    clock.advance(minutes=5)
    assert store.verify("u@x.com", code) is OtpVerifyResult.success


def test_reissue_replaces_previous_code(clock):
    store = make_store(clock)
    first = store.issue("u@x.com")
    second = store.issue("u@x.com")
    while second == first:
        second = store.issue("u@x.com")

    assert len(store) == 1
    assert store.verify("u@x.com", first) is OtpVerifyResult.mismatch
    assert store.verify("u@x.com", second) is OtpVerifyResult.success


def test_sweep_removes_only_expired_records(clock):
    store = make_store(clock)
    store.issue("old@x.com")
    clock.advance(minutes=3)
    store.issue("new@x.com")
    clock.advance(minutes=2, seconds=30)

    assert store.sweep_expired() == 1
    assert store.get("old@x.com") is None
    assert store.get("new@x.com") is not None


def test_generated_codes_are_not_constant():
    codes = {OtpCodeStore.generate_code() for _ in range(50)}
    assert len(codes) > 1
