import json

import pytest

from stream_attendance.core.identity import UnverifiedIdentity
from stream_attendance.core.local_identity import create_local_profile, parse_local_profile


def test_create_local_profile_requires_both_fields():
    with pytest.raises(ValueError, match="Please fill in all fields"):
        create_local_profile("", "Grace Member")
    with pytest.raises(ValueError, match="Please fill in all fields"):
        create_local_profile("grace@example.com", "   ")


def test_create_local_profile_serialises_like_browser_storage():
    profile = create_local_profile(" grace@example.com ", "Grace Member")
    blob = profile.model_dump(by_alias=True, mode="json")

    assert set(blob) == {"email", "fullName", "joinedAt"}
    assert blob["email"] == "grace@example.com"


def test_parse_round_trips_the_stored_blob():
    raw = json.dumps({"email": "grace@example.com", "fullName": "Grace Member", "joinedAt": "2024-01-05T09:00:00.000Z"})

    identity = parse_local_profile(raw)

    assert isinstance(identity, UnverifiedIdentity)
    assert identity.kind == "unverified"
    assert identity.display_name == "Grace Member"
    assert identity.member_id is None


@pytest.mark.parametrize("raw", [
    None,
    "",
    "not json",
    "[]",
    json.dumps({"email": "grace@example.com"}),
    json.dumps({"email": " ", "fullName": "Grace", "joinedAt": "2024-01-05T09:00:00Z"}),
])
def test_unusable_blobs_resolve_to_nothing(raw):
    assert parse_local_profile(raw) is None


def test_emails_are_lowercased():
    created = create_local_profile(" Grace@Example.com ", "Grace Member")
    parsed = parse_local_profile(
        json.dumps({"email": "GRACE@example.com", "fullName": "Grace Member", "joinedAt": "2024-01-05T09:00:00Z"})
    )

    assert created.email == "grace@example.com"
    assert parsed.email == "grace@example.com"
