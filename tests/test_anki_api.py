"""POST /api/anki against a mocked AnkiConnect."""

import httpx

from conftest import ANKI_HOST

CARD = {"germanPhrase": "Das Haus ist groß.", "russianTranslation": "Дом большой."}


def test_export_scenario_succeeds(client, upstream):
    upstream.reply(ANKI_HOST, json={})

    resp = client.post("/api/anki", json=CARD)

    assert resp.status_code == 200
    assert resp.json() == {"success": True}


def test_add_note_payload(client, upstream):
    upstream.reply(ANKI_HOST, json={"result": 1496198395707, "error": None})

    client.post("/api/anki", json=CARD)

    sent = upstream.requests_to(ANKI_HOST)
    assert len(sent) == 1
    assert sent[0].method == "POST"
    assert sent[0].url.port == 8765
    assert upstream.sent_json(ANKI_HOST) == {
        "action": "addNote",
        "version": 6,
        "params": {
            "note": {
                "deckName": "German::Reader",
                "modelName": "Basic",
                "fields": {"Front": "Das Haus ist groß.", "Back": "Дом большой."},
                "options": {"allowDuplicate": False},
                "tags": ["german-learning-app"],
            }
        },
    }


def test_error_field_is_500(client, upstream):
    upstream.reply(ANKI_HOST, json={"result": None, "error": "cannot create note because it is a duplicate"})

    resp = client.post("/api/anki", json=CARD)

    assert resp.status_code == 500
    assert resp.json() == {"error": "Anki operation failed"}


def test_http_error_is_500(client, upstream):
    upstream.reply(ANKI_HOST, 502, text="Bad Gateway")

    resp = client.post("/api/anki", json=CARD)

    assert resp.status_code == 500
    assert resp.json() == {"error": "Anki operation failed"}


def test_anki_not_running_is_500(client, upstream):
    upstream.fail(ANKI_HOST, httpx.ConnectError("connection refused"))

    resp = client.post("/api/anki", json=CARD)

    assert resp.status_code == 500
    assert resp.json() == {"error": "Anki operation failed"}


def test_missing_fields_never_reach_anki(client, upstream):
    resp = client.post("/api/anki", json={"germanPhrase": "Hallo"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Anki operation failed"}
    assert upstream.requests == []
