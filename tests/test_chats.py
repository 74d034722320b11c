"""Chats: customer service conversations and staff chats."""
import pytest

from parkhub.models import Customer, StaffRole
from parkhub.services.auth_service import create_access_token


@pytest.fixture
def agent(make_staff):
    return make_staff(StaffRole.CUSTOMER_SERVICE_STAFF, name="Sam Support")


@pytest.fixture
def agent_headers(agent, bearer_for):
    return bearer_for(agent)


@pytest.fixture
def support_chat(client, customer, customer_headers):
    r = client.post(f"/chats/customer-service/{customer.customer_id}", headers=customer_headers)
    assert r.status_code == 200, r.text
    return r.json()


def test_customer_service_chat_is_created_once(client, customer, customer_headers, support_chat):
    assert support_chat["name"] == "Customer Service"
    again = client.post(f"/chats/customer-service/{customer.customer_id}", headers=customer_headers).json()
    assert again["chat_id"] == support_chat["chat_id"]

    mine = client.get(f"/chats/user/{customer.customer_id}", headers=customer_headers).json()
    assert [c["chat_id"] for c in mine] == [support_chat["chat_id"]]


def test_conversation_with_support(client, customer, customer_headers, agent, agent_headers, support_chat):
    """Messages carry sender names and update the chat's last message."""
    chat_id = support_chat["chat_id"]
    listed = client.get("/chats/customer-service", headers=agent_headers).json()
    assert listed == [
        {
            "chat_id": chat_id,
            "customer_id": customer.customer_id,
            "customer_name": "Alice Guest",
            "last_message_text": None,
            "last_message_timestamp": None,
        }
    ]
    # warm the messages cache, the next send must clear it
    assert client.get(f"/chats/{chat_id}/messages", headers=customer_headers).json() == []

    r = client.post(
        f"/chats/{chat_id}/messages",
        json={"sender_id": customer.customer_id, "text": "I lost my hat"},
        headers=customer_headers,
    )
    assert r.status_code == 201, r.text
    assert r.json()["sender_name"] == "Alice Guest"
    r = client.post(
        f"/chats/{chat_id}/messages",
        json={"sender_id": agent.staff_id, "text": "Which ride?"},
        headers=agent_headers,
    )
    assert r.status_code == 201

    messages = client.get(f"/chats/{chat_id}/messages", headers=customer_headers).json()
    assert [(m["sender_name"], m["text"]) for m in messages] == [
        ("Alice Guest", "I lost my hat"),
        ("Sam Support", "Which ride?"),
    ]
    listed = client.get("/chats/customer-service", headers=agent_headers).json()
    assert listed[0]["last_message_text"] == "Which ride?"
    assert listed[0]["last_message_timestamp"]
    assert client.get(f"/chats/{chat_id}", headers=customer_headers).json()["last_message_text"] == "Which ride?"


def test_sender_must_be_caller(client, customer, customer_headers, agent, support_chat):
    r = client.post(
        f"/chats/{support_chat['chat_id']}/messages",
        json={"sender_id": agent.staff_id, "text": "spoofed"},
        headers=customer_headers,
    )
    assert r.status_code == 403


def test_outsiders_cannot_read(client, add_rows, support_chat, headers_for):
    stranger = add_rows(Customer(name="Stranger"))
    token = create_access_token(subject=stranger.customer_id, role="Customer", name=stranger.name)
    headers = {"Authorization": f"Bearer {token}"}
    url = f"/chats/{support_chat['chat_id']}"
    assert client.get(url, headers=headers).status_code == 403
    assert client.get(f"{url}/messages", headers=headers).status_code == 403
    assert client.get(url, headers=headers_for(StaffRole.CHEF)).status_code == 403
    assert client.get("/chats/customer-service", headers=headers).status_code == 403
    assert client.get(f"/chats/user/{support_chat['chat_id']}", headers=headers).status_code == 403


def test_staff_chat_members(client, make_staff, bearer_for):
    chef, waiter, cook = make_staff(StaffRole.CHEF), make_staff(StaffRole.WAITER), make_staff(StaffRole.CHEF)
    chef_headers = bearer_for(chef)
    r = client.post(
        "/chats",
        json={"name": "Kitchen", "member_ids": [chef.staff_id, waiter.staff_id, chef.staff_id]},
        headers=chef_headers,
    )
    assert r.status_code == 201, r.text
    chat = r.json()
    members_url = f"/chats/{chat['chat_id']}/members"
    assert len(client.get(members_url, headers=chef_headers).json()) == 2

    # the cook sees nothing until added
    assert client.get(f"/chats/user/{cook.staff_id}", headers=bearer_for(cook)).json() == []
    r = client.post(members_url, json={"user_id": cook.staff_id}, headers=chef_headers)
    assert r.status_code == 201
    assert client.post(members_url, json={"user_id": cook.staff_id}, headers=chef_headers).status_code == 409
    cook_chats = client.get(f"/chats/user/{cook.staff_id}", headers=bearer_for(cook)).json()
    assert [c["name"] for c in cook_chats] == ["Kitchen"]


def test_unknown_chat(client, agent_headers):
    r = client.get("/chats/nope", headers=agent_headers)
    assert r.status_code == 404
    assert r.json()["detail"] == "Chat not found"
