import pytest

from rfcotp import (
    HashAlgorithm,
    InvalidParameter,
    InvalidWindow,
    check_hotp,
    check_totp,
    codes_equal,
    hotp,
    skew_window,
    totp,
)

SECRET = b"12345678901234567890"
SECRET_SHA512 = b"1234567890123456789012345678901234567890123456789012345678901234"


@pytest.mark.parametrize("time, step, skew, expected", [
    (10000, 2, (2, 4), [9996, 9998, 10000, 10002, 10004, 10006, 10008]),
    (100, 1, (0, 5), [100, 101, 102, 103, 104, 105]),
    (100, 30, (0, 0), [100]),
    (30, 30, (1, 0), [0, 30]),
])
def test_skew_window(time, step, skew, expected):
    assert list(skew_window(time, step, skew)) == expected


def test_skew_window_is_restartable():
    window = skew_window(10000, 2, (2, 4))
    assert list(window) == list(window)
    assert len(window) == 7


def test_skew_window_underflow_fails():
    with pytest.raises(InvalidWindow):
        skew_window(29, 30, (1, 0))
    with pytest.raises(InvalidWindow):
        check_totp(10, 30, SECRET, 6, (1, 1), 0)


def test_skew_window_overflow_fails():
    with pytest.raises(InvalidWindow):
        skew_window(2 ** 64 - 1, 1, (0, 1))
    assert list(skew_window(2 ** 64 - 2, 1, (0, 1))) == [2 ** 64 - 2, 2 ** 64 - 1]


def test_invalid_window_is_invalid_parameter():
    assert issubclass(InvalidWindow, InvalidParameter)


@pytest.mark.parametrize("step, skew", [
    (0, (1, 1)),
    (-2, (1, 1)),
    (30, (-1, 0)),
    (30, (0, -1)),
])
def test_skew_window_bad_parameters(step, skew):
    with pytest.raises(InvalidParameter):
        skew_window(1000, step, skew)


def test_check_totp_exact():
    assert check_totp(59, 30, SECRET, 8, (0, 0), 94287082)
    assert check_totp(1111111109, 30, SECRET, 8, (0, 0), 7081804)


def test_check_totp_accepts_previous_step_with_back_skew():
    # 94287082 is the code at time=59 (counter 1); now=89 is counter 2
    assert check_totp(89, 30, SECRET, 8, (1, 0), 94287082)
    assert not check_totp(89, 30, SECRET, 8, (0, 0), 94287082)


def test_check_totp_accepts_next_step_with_forward_skew():
    code = totp(59 + 30, 30, 8, SECRET)
    assert check_totp(59, 30, SECRET, 8, (0, 1), code)
    assert not check_totp(59, 30, SECRET, 8, (1, 0), code)


def test_check_totp_sha512():
    assert check_totp(20000000000 - 60, 30, SECRET_SHA512, 8, (0, 2), 47863826,
                      HashAlgorithm.SHA512)


def test_check_totp_rejects_wrong_code():
    assert not check_totp(59, 30, SECRET, 8, (2, 2), 12345678)


def test_check_hotp_looks_ahead_only():
    # RFC 4226 codes: counter 0 -> 755224, 3 -> 969429
    assert check_hotp(0, SECRET, 6, 0, 755224)
    assert check_hotp(0, SECRET, 6, 3, 969429)
    assert not check_hotp(0, SECRET, 6, 2, 969429)
    assert not check_hotp(1, SECRET, 6, 5, 755224)


def test_check_hotp_matches_hotp():
    for counter in range(20):
        assert check_hotp(counter, b"k", 6, 0, hotp(counter, 6, b"k"))


def test_check_hotp_negative_skew():
    with pytest.raises(InvalidParameter):
        check_hotp(0, SECRET, 6, -1, 755224)


def test_check_digits_validated():
    with pytest.raises(InvalidParameter):
        check_hotp(0, SECRET, 10, 1, 755224)
    with pytest.raises(InvalidParameter):
        check_totp(59, 30, SECRET, 0, (0, 0), 0)


@pytest.mark.parametrize("expected", ["755224", None, -755224, 755224.0, True])
def test_non_int_expected_never_matches(expected):
    assert not check_hotp(0, SECRET, 6, 0, expected)


def test_codes_equal():
    assert codes_equal(755224, 755224)
    assert codes_equal(0, 0)
    assert not codes_equal(755224, 755225)
    assert not codes_equal(1, 2 ** 40 + 1)
    assert not codes_equal(1, -1)


@pytest.mark.parametrize("skew", [5, (1,), (1, 2, 3), None])
def test_skew_must_be_a_pair(skew):
    with pytest.raises(InvalidParameter, match="pair"):
        skew_window(100, 1, skew)
    with pytest.raises(InvalidParameter):
        check_totp(100, 30, SECRET, 6, skew, 0)
