import pytest

from boxkit.domain.enums import TermsOfServiceStatus, TermsOfServiceType
from boxkit.errors import BoxError, UnexpectedResponseError
from boxkit.models import TermsOfServiceUpdate

TOS = "/2.0/terms_of_services"
STATUSES = "/2.0/terms_of_service_user_statuses"


@pytest.mark.asyncio
async def test_create(client, recorder):
    await client.terms_of_service.create(TermsOfServiceType.managed, TermsOfServiceStatus.enabled, "Be nice")

    assert recorder.last.method == "POST"
    assert recorder.last.url.path == TOS
    assert recorder.body(recorder.last) == {"status": "enabled", "tos_type": "managed", "text": "Be nice"}


@pytest.mark.asyncio
async def test_update(client, recorder):
    await client.terms_of_service.update("5", {"status": "disabled"})

    assert recorder.last.method == "PUT"
    assert recorder.last.url.path == f"{TOS}/5"
    assert recorder.body(recorder.last) == {"status": "disabled"}


@pytest.mark.asyncio
async def test_update_with_model(client, recorder):
    await client.terms_of_service.update("5", TermsOfServiceUpdate(text="New text"))
    assert recorder.body(recorder.last) == {"text": "New text"}


@pytest.mark.asyncio
async def test_get(client, recorder):
    await client.terms_of_service.get("5", {"fields": "text"})

    assert recorder.last.method == "GET"
    assert recorder.last.url.path == f"{TOS}/5"
    assert recorder.query(recorder.last) == {"fields": "text"}


@pytest.mark.asyncio
async def test_get_all(client, recorder):
    await client.terms_of_service.get_all({"tos_type": TermsOfServiceType.external})

    assert recorder.last.url.path == TOS
    assert recorder.query(recorder.last) == {"tos_type": "external"}


@pytest.mark.asyncio
async def test_create_user_status_for_current_user(client, recorder):
    await client.terms_of_service.create_user_status("5", True)

    assert recorder.last.method == "POST"
    assert recorder.last.url.path == STATUSES
    assert recorder.body(recorder.last) == {
        "tos": {"type": "terms_of_service", "id": "5"},
        "is_accepted": True,
    }


@pytest.mark.asyncio
async def test_create_user_status_for_other_user(client, recorder):
    await client.terms_of_service.create_user_status("5", False, {"user_id": "77"})

    assert recorder.body(recorder.last) == {
        "tos": {"type": "terms_of_service", "id": "5"},
        "is_accepted": False,
        "user": {"type": "user", "id": "77"},
    }


@pytest.mark.asyncio
async def test_get_user_status_returns_first_entry(client, recorder):
    recorder.queue(200, {"total_count": 1, "entries": [{"id": "900", "is_accepted": True}]})

    out = await client.terms_of_service.get_user_status("5", {"user_id": "77"})

    assert out == {"id": "900", "is_accepted": True}
    assert recorder.last.method == "GET"
    assert recorder.last.url.path == STATUSES
    assert recorder.query(recorder.last) == {"tos_id": "5", "user_id": "77"}


@pytest.mark.asyncio
async def test_get_user_status_empty_collection(client, recorder):
    recorder.queue(200, {"total_count": 0, "entries": []})
    assert await client.terms_of_service.get_user_status("5") is None


@pytest.mark.asyncio
async def test_get_user_status_requires_200(client, recorder):
    recorder.queue(202, {"entries": []})

    with pytest.raises(UnexpectedResponseError):
        await client.terms_of_service.get_user_status("5")


@pytest.mark.asyncio
async def test_update_user_status(client, recorder):
    await client.terms_of_service.update_user_status("900", False)

    assert recorder.last.method == "PUT"
    assert recorder.last.url.path == f"{STATUSES}/900"
    assert recorder.body(recorder.last) == {"is_accepted": False}


@pytest.mark.asyncio
async def test_set_user_status_creates(client, recorder):
    recorder.queue(200, {"id": "900", "is_accepted": True})

    out = await client.terms_of_service.set_user_status("5", True)

    assert out == {"id": "900", "is_accepted": True}
    assert len(recorder.requests) == 1


@pytest.mark.asyncio
async def test_set_user_status_accepts_created(client, recorder):
    recorder.queue(201, {"id": "901", "is_accepted": True})

    assert await client.terms_of_service.set_user_status("5", True) == {"id": "901", "is_accepted": True}
    assert len(recorder.requests) == 1


@pytest.mark.asyncio
async def test_set_user_status_updates_existing_on_conflict(client, recorder):
    recorder.queue(409, {"code": "conflict"})
    recorder.queue(200, {"entries": [{"id": "900", "type": "terms_of_service_user_status"}]})
    recorder.queue(200, {"id": "900", "is_accepted": False})

    out = await client.terms_of_service.set_user_status("5", False, {"user_id": "77"})

    assert out == {"id": "900", "is_accepted": False}
    post, lookup, update = recorder.requests
    assert post.method == "POST"
    assert recorder.body(post)["user"] == {"type": "user", "id": "77"}
    assert lookup.method == "GET"
    assert recorder.query(lookup) == {"tos_id": "5", "fields": "id", "user_id": "77"}
    assert update.method == "PUT"
    assert update.url.path == f"{STATUSES}/900"
    assert recorder.body(update) == {"is_accepted": False}


@pytest.mark.asyncio
async def test_set_user_status_conflict_without_existing_status(client, recorder):
    recorder.queue(409, {"code": "conflict"})
    recorder.queue(200, {"entries": []})

    with pytest.raises(BoxError):
        await client.terms_of_service.set_user_status("5", True)


@pytest.mark.asyncio
async def test_set_user_status_other_errors(client, recorder):
    recorder.queue(400, {"code": "bad_request", "message": "invalid tos"})

    with pytest.raises(UnexpectedResponseError) as info:
        await client.terms_of_service.set_user_status("5", True)

    assert info.value.status_code == 400
    assert len(recorder.requests) == 1


@pytest.mark.asyncio
async def test_manager_exposes_enums(client):
    assert client.terms_of_service.type.managed == "managed"
    assert client.terms_of_service.status.disabled == "disabled"
