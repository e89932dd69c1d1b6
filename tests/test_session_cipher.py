# tests/test_session_cipher.py
"""
Tests for the additive feedback session cipher.
Focus: known vectors, encrypt/decrypt round trips and carrying state across calls.
"""

import pytest
from wowsrp.session_cipher import (
        encrypt,
        decrypt,
        encrypt_stream,
        decrypt_stream,
        CipherState
)
from wowsrp.errors import DegenerateInputError, MalformedInputError


SESSION_KEY = bytes.fromhex("2EFEE7B0C177EBBDFF6676C56EFC2339BE9CAD14BF8B54BB5A86FBF81F6D424AA23CC9A3149FB175")
DATA        = bytes.fromhex("3d9ae196ef4f5be4df9ea8b9f4dd95fe68fe58b653cf1c2dbeaa0be167db9b27df32fd230f2eab9bd7e9b2f3fbf335d381ca")


def test_encrypt_vector():
    expected = bytes.fromhex("13777da3d109b912322a08841e3ff5bc92f4e98b77bb03997da999b22ae0b926a3b1e56580314b3932499ee11b9f7deb6915")

    assert encrypt(DATA, SESSION_KEY) == expected, "Ciphertext does not match known vector"


def test_decrypt_vector():
    expected = bytes.fromhex("13a3a0059817e73404d97cd455159b50d40af74a22f719aacb6a9a2e991982c61a6f0285f880cc8512ec2ef1c98fa923512f")

    assert decrypt(DATA, SESSION_KEY) == expected, "Plaintext does not match known vector"


@pytest.mark.parametrize("length", [0, 1, 39, 40, 41, 200])
def test_encrypt_decrypt_round_trip(length):
    data = bytes((i * 7 + 3) & 0xFF for i in range(length))

    ciphertext = encrypt(data, SESSION_KEY)
    assert len(ciphertext) == length
    assert decrypt(ciphertext, SESSION_KEY) == data, "Decrypted data does not match original"


def test_decrypt_feeds_back_ciphertext_not_plaintext():
    ciphertext = encrypt(b"\x00\x00", SESSION_KEY)

    # second byte only decrypts if the first *ciphertext* byte is the accumulator
    assert ciphertext[1] == (SESSION_KEY[1] + ciphertext[0]) & 0xFF
    assert decrypt(ciphertext, SESSION_KEY) == b"\x00\x00"


def test_calls_do_not_share_state():
    first = encrypt(DATA[:10], SESSION_KEY)
    second = encrypt(DATA[10:], SESSION_KEY)

    assert first + second != encrypt(DATA, SESSION_KEY), "Each call should start from a fresh state"
    assert encrypt(DATA[10:], SESSION_KEY) == second, "Stateless calls must be repeatable"


def test_stream_state_matches_single_call():
    head, state = encrypt_stream(DATA[:17], SESSION_KEY)
    tail, state = encrypt_stream(DATA[17:], SESSION_KEY, state)

    assert head + tail == encrypt(DATA, SESSION_KEY)
    assert state == CipherState(len(DATA) % len(SESSION_KEY), (head + tail)[-1])

    plain_head, state = decrypt_stream(head, SESSION_KEY)
    plain_tail, _ = decrypt_stream(tail, SESSION_KEY, state)

    assert plain_head + plain_tail == DATA


def test_empty_data_keeps_state():
    state = CipherState(5, 0x42)

    ciphertext, new_state = encrypt_stream(b"", SESSION_KEY, state)

    assert ciphertext == b""
    assert new_state == state


def test_empty_session_key_rejected():
    with pytest.raises(DegenerateInputError):
        encrypt(DATA, b"")

    with pytest.raises(DegenerateInputError):
        decrypt(DATA, b"")


def test_non_bytes_rejected():
    with pytest.raises(MalformedInputError):
        encrypt("hello", SESSION_KEY)


@pytest.mark.parametrize("state", [CipherState(40, 0), CipherState(-1, 0), CipherState(0, 256), CipherState(0, -1)])
def test_invalid_state_rejected(state):
    with pytest.raises(MalformedInputError):
        encrypt_stream(b"ab", SESSION_KEY, state)

    with pytest.raises(MalformedInputError):
        decrypt_stream(b"ab", SESSION_KEY, state)


def test_last_valid_state_accepted():
    ciphertext, state = encrypt_stream(b"\x00", SESSION_KEY, CipherState(39, 0xFF))

    assert ciphertext == bytes([(SESSION_KEY[39] + 0xFF) & 0xFF])
    assert state.index == 0, "Key index must wrap around"
