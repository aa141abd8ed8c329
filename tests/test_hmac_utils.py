"""Tests for webhook signature validation."""

import hashlib
import hmac

import pytest

from statuswatch.common import compute_hmac_sha256, get_signature_header, verify_hmac_signature

SECRET = "It's a Secret to Everybody"
BODY = b'{"webhookEvent": "jira:issue_updated", "timestamp": 1756389284246}'


def test_compute_matches_reference_hmac():
    expected = hmac.new(SECRET.encode("utf-8"), BODY, hashlib.sha256).hexdigest()
    assert compute_hmac_sha256(BODY, SECRET) == expected


def test_known_vector():
    # GitHub's documented webhook signature example
    signature = compute_hmac_sha256(b"Hello, World!", SECRET)
    assert signature == "757107ea0eb2509fc211221cce984b8a37570b6d7586c22c46f4379c8b043e17"


def test_valid_signature_with_prefix():
    assert verify_hmac_signature(BODY, f"sha256={compute_hmac_sha256(BODY, SECRET)}", SECRET)


def test_valid_signature_without_prefix():
    assert verify_hmac_signature(BODY, compute_hmac_sha256(BODY, SECRET), SECRET)


@pytest.mark.parametrize("signature_header", [None, ""])
def test_missing_signature(signature_header):
    assert not verify_hmac_signature(BODY, signature_header, SECRET)


def test_missing_secret():
    signature = f"sha256={compute_hmac_sha256(BODY, '')}"
    assert not verify_hmac_signature(BODY, signature, "")


def test_wrong_secret():
    signature = f"sha256={compute_hmac_sha256(BODY, 'another secret')}"
    assert not verify_hmac_signature(BODY, signature, SECRET)


def test_every_single_byte_body_mutation_fails():
    signature = f"sha256={compute_hmac_sha256(BODY, SECRET)}"
    for i in range(len(BODY)):
        mutated = bytearray(BODY)
        mutated[i] ^= 0x01
        assert not verify_hmac_signature(bytes(mutated), signature, SECRET)


def test_every_single_char_signature_mutation_fails():
    digest = compute_hmac_sha256(BODY, SECRET)
    for i, char in enumerate(digest):
        replacement = "0" if char != "0" else "1"
        mutated = digest[:i] + replacement + digest[i + 1:]
        assert not verify_hmac_signature(BODY, f"sha256={mutated}", SECRET)


def test_length_mismatch_returns_false():
    digest = compute_hmac_sha256(BODY, SECRET)
    assert not verify_hmac_signature(BODY, f"sha256={digest[:-2]}", SECRET)
    assert not verify_hmac_signature(BODY, f"sha256={digest}ff", SECRET)


@pytest.mark.parametrize(
    "signature_header",
    [
        "sha1=2fd4e1c67a2d28fced849ee1bb76e7391b93eb12",
        "sha256=żółw",
        "not a signature at all",
    ],
)
def test_unparseable_header_returns_false(signature_header):
    assert not verify_hmac_signature(BODY, signature_header, SECRET)


def test_signature_header_lookup_prefers_hub_signature():
    headers = {
        "X-Hub-Signature": "sha256=abc",
        "X-Atlassian-Webhook-Identifier": "sha256=def",
    }
    assert get_signature_header(headers) == "sha256=abc"


def test_signature_header_lookup_falls_back():
    assert get_signature_header({"x-atlassian-webhook-identifier": "sha256=def"}) == "sha256=def"
    assert get_signature_header({}) is None
