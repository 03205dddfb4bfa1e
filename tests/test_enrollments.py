import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from gym_api.api.routes.classes import _insert_if_not_full
from gym_api.models import class_clients
from tests.conftest import create_class, create_client, create_trainer


async def count_enrollments(session_maker, class_id: int) -> int:
    async with session_maker() as session:
        result = await session.execute(
            select(func.count())
            .select_from(class_clients)
            .where(class_clients.c.class_id == class_id)
        )
        return result.scalar_one()


@pytest.mark.anyio
async def test_enroll_client(client: AsyncClient, session_maker):
    trainer = await create_trainer(client)
    clazz = await create_class(client, trainer["id"], capacity=2)
    member = await create_client(client)

    res = await client.post(f"/classes/{clazz['id']}", json={"clientId": member["id"]})
    assert res.status_code == 200
    assert res.json() == {"message": "Client added"}

    assert await count_enrollments(session_maker, clazz["id"]) == 1
    classes = (await client.get("/classes")).json()
    assert member["id"] in [c["id"] for c in classes[0]["clients"]]


@pytest.mark.anyio
async def test_duplicate_enroll_blocked(client: AsyncClient, session_maker):
    trainer = await create_trainer(client)
    clazz = await create_class(client, trainer["id"], capacity=5)
    member = await create_client(client)

    res = await client.post(f"/classes/{clazz['id']}", json={"clientId": member["id"]})
    assert res.status_code == 200

    res_dup = await client.post(f"/classes/{clazz['id']}", json={"clientId": member["id"]})
    assert res_dup.status_code == 400
    assert res_dup.json() == {"detail": "Client already enrolled"}

    assert await count_enrollments(session_maker, clazz["id"]) == 1


@pytest.mark.anyio
async def test_full_class_rejects_next_client(client: AsyncClient, session_maker):
    trainer = await create_trainer(client)
    clazz = await create_class(client, trainer["id"], capacity=1)
    first = await create_client(client, "Alice")
    second = await create_client(client, "Bob")

    res = await client.post(f"/classes/{clazz['id']}", json={"clientId": first["id"]})
    assert res.status_code == 200

    res = await client.post(f"/classes/{clazz['id']}", json={"clientId": second["id"]})
    assert res.status_code == 400
    assert res.json() == {"detail": "Class is full"}

    classes = (await client.get("/classes")).json()
    assert [c["id"] for c in classes[0]["clients"]] == [first["id"]]


@pytest.mark.anyio
async def test_duplicate_reported_before_full(client: AsyncClient):
    trainer = await create_trainer(client)
    clazz = await create_class(client, trainer["id"], capacity=1)
    member = await create_client(client)

    await client.post(f"/classes/{clazz['id']}", json={"clientId": member["id"]})
    res = await client.post(f"/classes/{clazz['id']}", json={"clientId": member["id"]})

    assert res.status_code == 400
    assert res.json()["detail"] == "Client already enrolled"


@pytest.mark.anyio
async def test_zero_capacity_class_is_full(client: AsyncClient):
    trainer = await create_trainer(client)
    clazz = await create_class(client, trainer["id"], capacity=0)
    member = await create_client(client)

    res = await client.post(f"/classes/{clazz['id']}", json={"clientId": member["id"]})
    assert res.status_code == 400
    assert res.json()["detail"] == "Class is full"


@pytest.mark.anyio
async def test_enroll_unknown_class(client: AsyncClient):
    member = await create_client(client)

    res = await client.post("/classes/999", json={"clientId": member["id"]})
    assert res.status_code == 404
    assert res.json() == {"detail": "Class not found"}


@pytest.mark.anyio
async def test_enroll_unknown_client(client: AsyncClient, session_maker):
    trainer = await create_trainer(client)
    clazz = await create_class(client, trainer["id"])

    res = await client.post(f"/classes/{clazz['id']}", json={"clientId": 999})
    assert res.status_code == 404
    assert res.json() == {"detail": "Client not found"}
    assert await count_enrollments(session_maker, clazz["id"]) == 0


@pytest.mark.anyio
async def test_enroll_requires_client_id(client: AsyncClient):
    trainer = await create_trainer(client)
    clazz = await create_class(client, trainer["id"])

    res = await client.post(f"/classes/{clazz['id']}", json={})
    assert res.status_code == 400
    assert res.json() == {"detail": "Invalid request"}


@pytest.mark.anyio
async def test_conditional_insert_respects_capacity(client: AsyncClient, session_maker):
    trainer = await create_trainer(client)
    clazz = await create_class(client, trainer["id"], capacity=1)
    first = await create_client(client, "Alice")
    second = await create_client(client, "Bob")

    async with session_maker() as session:
        assert await _insert_if_not_full(session, clazz["id"], first["id"]) is True
        # A concurrent request that passed the capacity check inserts nothing
        assert await _insert_if_not_full(session, clazz["id"], second["id"]) is False
        await session.commit()

    assert await count_enrollments(session_maker, clazz["id"]) == 1


@pytest.mark.anyio
async def test_join_table_rejects_duplicate_pair(client: AsyncClient, session_maker):
    trainer = await create_trainer(client)
    clazz = await create_class(client, trainer["id"], capacity=5)
    member = await create_client(client)

    async with session_maker() as session:
        assert await _insert_if_not_full(session, clazz["id"], member["id"]) is True
        with pytest.raises(IntegrityError):
            await _insert_if_not_full(session, clazz["id"], member["id"])
        await session.rollback()


@pytest.mark.anyio
async def test_enroll_class_id_out_of_range(client: AsyncClient):
    member = await create_client(client)

    res = await client.post(f"/classes/{2**70}", json={"clientId": member["id"]})
    assert res.status_code == 400
    assert res.json() == {"detail": "Invalid request"}


@pytest.mark.anyio
async def test_enroll_client_id_out_of_range(client: AsyncClient, session_maker):
    trainer = await create_trainer(client)
    clazz = await create_class(client, trainer["id"])

    res = await client.post(f"/classes/{clazz['id']}", json={"clientId": -(2**70)})
    assert res.status_code == 400
    assert await count_enrollments(session_maker, clazz["id"]) == 0


@pytest.mark.anyio
async def test_enroll_malformed_class_id(client: AsyncClient):
    member = await create_client(client)

    res = await client.post("/classes/abc", json={"clientId": member["id"]})
    assert res.status_code == 400
    assert res.json() == {"detail": "Invalid request"}
