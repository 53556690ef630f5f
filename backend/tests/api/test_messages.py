"""Message Routes - send and fetch over HTTP.

Tests:
    - POST /message/send persists before responding and returns the entity
    - GET /message/{username} returns exactly the messages addressed to username
    - missing fields → 400
"""

import json

from tests.factories import message_payload


async def test_send_persists_message(client, data_dir):
    res = await client.post("/message/send", json=message_payload())
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Message sent successfully"
    data = body["data"]
    assert data["to"] == "bob"
    assert data["from"] == "alice"
    assert data["encryptedKey"] == "Y"

    on_disk = json.loads((data_dir / "messages.json").read_text())
    assert on_disk[data["id"]]["encrypted"] == "X"


async def test_get_messages_for_recipient(client):
    await client.post("/message/send", json=message_payload(to="bob", encrypted="1"))
    await client.post("/message/send", json=message_payload(to="carol"))
    await client.post("/message/send", json=message_payload(to="bob", encrypted="2"))

    res = await client.get("/message/bob")
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Messages retrieved successfully"
    assert [m["encrypted"] for m in body["data"]] == ["1", "2"]
    assert all(m["to"] == "bob" for m in body["data"])


async def test_get_messages_for_unknown_recipient_is_empty(client):
    res = await client.get("/message/nobody")
    assert res.status_code == 200
    assert res.json()["data"] == []


async def test_send_requires_encrypted_key(client):
    payload = message_payload()
    del payload["encryptedKey"]
    res = await client.post("/message/send", json=payload)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
