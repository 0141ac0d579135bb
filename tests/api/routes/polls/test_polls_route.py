"""Testes dos endpoints de registro de enquetes."""

from __future__ import annotations

import base64

SECRET = bytes(range(32))
REGISTRATION = {
    "question": "Qual cor?",
    "options": ["Vermelho", "Azul"],
    "enc_key": base64.b64encode(SECRET).decode("ascii"),
}


def test_put_stores_record_and_hides_secret(api_client, fake_container) -> None:
    response = api_client.put("/polls/3EB0POLL", json=REGISTRATION)

    assert response.status_code == 200
    assert response.json() == {
        "message_id": "3EB0POLL",
        "question": "Qual cor?",
        "options": ["Vermelho", "Azul"],
    }
    record = fake_container.poll_store.get("3EB0POLL")
    assert record.enc_key == SECRET
    assert record.options == ("Vermelho", "Azul")


def test_put_replaces_existing_record(api_client, fake_container) -> None:
    api_client.put("/polls/3EB0POLL", json=REGISTRATION)
    api_client.put("/polls/3EB0POLL", json={**REGISTRATION, "options": ["Sim", "Não"]})

    assert fake_container.poll_store.get("3EB0POLL").options == ("Sim", "Não")


def test_get_returns_registered_poll(api_client) -> None:
    api_client.put("/polls/3EB0POLL", json=REGISTRATION)

    response = api_client.get("/polls/3EB0POLL")

    assert response.status_code == 200
    assert response.json()["question"] == "Qual cor?"
    assert "enc_key" not in response.json()


def test_get_unknown_poll_is_404(api_client) -> None:
    response = api_client.get("/polls/NAOEXISTE")
    assert response.status_code == 404


def test_duplicate_options_are_rejected(api_client, fake_container) -> None:
    response = api_client.put(
        "/polls/3EB0POLL", json={**REGISTRATION, "options": ["Azul", "Azul"]}
    )
    assert response.status_code == 422
    assert fake_container.poll_store.get("3EB0POLL") is None


def test_invalid_base64_secret_is_rejected(api_client) -> None:
    response = api_client.put("/polls/3EB0POLL", json={**REGISTRATION, "enc_key": "não é base64!"})
    assert response.status_code == 422
