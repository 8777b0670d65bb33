from datetime import datetime, timezone

import pytest

from twitchkit.helix.errors import HelixDecodeError, HelixRequestError
from twitchkit.helix.types import HelixRequestAuth, HelixResponse
from twitchkit.helix.users import (
    GetUsersRequest,
    HelixBroadcasterType,
    HelixUser,
    HelixUserType,
    UnknownValue,
    UsersApi,
)
from twitchkit.ids import UserId
from twitchkit.pagination import Cursor, PageInfo


def _user_record(**overrides):
    record = {
        "id": "1",
        "login": "foo",
        "display_name": "Foo",
        "type": "",
        "broadcaster_type": "affiliate",
        "description": "desc",
        "profile_image_url": "https://example.com/profile.png",
        "offline_image_url": "https://example.com/offline.png",
        "email": "foo@example.com",
        "created_at": "2024-01-02T03:04:05Z",
    }
    record.update(overrides)
    return record


class _RecordingClient:
    def __init__(self, response):
        self.response = response
        self.calls = []

    async def execute_get(self, path, auth, query):
        self.calls.append((path, auth, list(query)))
        return self.response


def test_request_preserves_query_order_by_field_type():
    request = (
        GetUsersRequest()
        .with_user_id(UserId("1"))
        .with_user_id(UserId("2"))
        .with_login("foo")
        .with_login("bar")
    )
    assert request.query_pairs() == [
        ("id", "1"),
        ("id", "2"),
        ("login", "foo"),
        ("login", "bar"),
    ]


def test_request_rejects_empty_login_values():
    with pytest.raises(HelixRequestError):
        GetUsersRequest().with_login("   ")


def test_request_rejects_app_auth_without_filters():
    with pytest.raises(HelixRequestError):
        GetUsersRequest().validate_for_auth(HelixRequestAuth.app())


def test_login_is_trimmed():
    request = GetUsersRequest().with_login("  foo ")
    assert request.logins == ("foo",)


def test_with_methods_leave_original_untouched():
    base = GetUsersRequest()
    extended = base.with_user_id(UserId("1"))
    assert base.is_empty()
    assert extended.user_ids == (UserId("1"),)
    assert not extended.is_empty()


def test_request_rejects_more_than_one_hundred_filters():
    request = GetUsersRequest()
    for index in range(100):
        request.push_user_id(UserId(str(index)))
    with pytest.raises(HelixRequestError):
        request.push_login("overflow")
    assert len(request.user_ids) == 100
    assert request.logins == ()


def test_requests_compare_by_content():
    left = GetUsersRequest().with_login("foo")
    right = GetUsersRequest().with_login("foo")
    assert left == right
    assert left != GetUsersRequest().with_login("bar")


def test_user_type_parsing():
    assert HelixUserType.parse("") is HelixUserType.NORMAL
    assert HelixUserType.parse("admin") is HelixUserType.ADMIN
    assert HelixUserType.parse("global_mod") is HelixUserType.GLOBAL_MOD
    assert HelixUserType.parse("staff") is HelixUserType.STAFF
    assert HelixUserType.parse("future_type") == UnknownValue("future_type")


def test_broadcaster_type_parsing():
    assert HelixBroadcasterType.parse("") is HelixBroadcasterType.NORMAL
    assert HelixBroadcasterType.parse("affiliate") is HelixBroadcasterType.AFFILIATE
    assert HelixBroadcasterType.parse("partner") is HelixBroadcasterType.PARTNER
    assert HelixBroadcasterType.parse("future_broadcaster") == UnknownValue("future_broadcaster")


def test_user_decodes_full_record():
    user = HelixUser.from_dict(_user_record())
    assert user.id == UserId("1")
    assert user.login == "foo"
    assert user.display_name == "Foo"
    assert user.user_type is HelixUserType.NORMAL
    assert user.broadcaster_type is HelixBroadcasterType.AFFILIATE
    assert user.email == "foo@example.com"
    assert user.created_at == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


@pytest.mark.parametrize("email", ["", "   ", None])
def test_blank_or_null_email_decodes_to_none(email):
    assert HelixUser.from_dict(_user_record(email=email)).email is None


def test_missing_email_decodes_to_none():
    record = _user_record()
    del record["email"]
    assert HelixUser.from_dict(record).email is None


def test_email_is_trimmed():
    assert HelixUser.from_dict(_user_record(email=" foo@example.com ")).email == "foo@example.com"


def test_bad_timestamp_is_decode_error():
    with pytest.raises(HelixDecodeError):
        HelixUser.from_dict(_user_record(created_at="not-a-timestamp"))


def test_missing_field_is_decode_error():
    record = _user_record()
    del record["login"]
    with pytest.raises(HelixDecodeError):
        HelixUser.from_dict(record)


@pytest.mark.asyncio
async def test_get_users_sends_query_and_decodes_users():
    page = PageInfo(next=Cursor("next"))
    client = _RecordingClient(HelixResponse(data=[_user_record()], pagination=page))
    api = UsersApi(client)
    request = GetUsersRequest().with_user_id(UserId("1")).with_login("foo")

    response = await api.get_users(request, HelixRequestAuth.app())

    assert client.calls == [("users", HelixRequestAuth.app(), [("id", "1"), ("login", "foo")])]
    assert response.data[0].login == "foo"
    assert response.pagination == page
    assert api.client is client


@pytest.mark.asyncio
async def test_get_users_allows_empty_request_for_user_auth():
    record = _user_record(id="user-1", email="", broadcaster_type="")
    client = _RecordingClient(HelixResponse(data=[record]))
    auth = HelixRequestAuth.user(UserId("user-1"))

    response = await UsersApi(client).get_users(GetUsersRequest(), auth)

    assert client.calls == [("users", auth, [])]
    assert response.data[0].email is None


@pytest.mark.asyncio
async def test_get_users_rejects_empty_app_request_without_calling_client():
    client = _RecordingClient(HelixResponse(data=[]))
    with pytest.raises(HelixRequestError):
        await UsersApi(client).get_users(GetUsersRequest(), HelixRequestAuth.app())
    assert client.calls == []


@pytest.mark.asyncio
async def test_get_users_rejects_non_list_data():
    client = _RecordingClient(HelixResponse(data={"id": "1"}))
    request = GetUsersRequest().with_user_id(UserId("1"))
    with pytest.raises(HelixDecodeError):
        await UsersApi(client).get_users(request, HelixRequestAuth.app())