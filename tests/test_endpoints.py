"""Tests for HTTP endpoints."""

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from biteqube.api.app import create_app
from biteqube.containers import AppContainer
from biteqube.services.vision import MAX_IMAGE_BYTES
from tests.conftest import FakePaymentsClient, auth_headers

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"rest"


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_sign_up_and_sign_in(client: TestClient) -> None:
    created = client.post(
        "/auth/signup",
        json={
            "email": "new@example.com",
            "password": "secret1",
            "confirm_password": "secret1",
            "name": "New",
        },
    )
    rejected = client.post(
        "/auth/signup", json={"email": "new@example.com", "password": "abc"}
    )
    signed_in = client.post(
        "/auth/signin", json={"email": "cook@example.com", "password": "secret1"}
    )
    wrong = client.post(
        "/auth/signin", json={"email": "nobody@example.com", "password": "secret1"}
    )

    assert created.status_code == 201
    assert created.json()["message"].startswith("Account created!")
    assert rejected.status_code == 400
    assert rejected.json() == {
        "detail": "Password must be at least 6 characters long"
    }
    assert signed_in.json()["access_token"] == "valid-token"
    assert wrong.status_code == 401


def test_auth_required(client: TestClient) -> None:
    missing = client.get("/auth/me")
    invalid = client.get("/auth/me", headers=auth_headers("expired"))
    valid = client.get("/auth/me", headers=auth_headers())

    assert missing.status_code == 401
    assert missing.json() == {"detail": "Missing token"}
    assert invalid.status_code == 401
    assert valid.json()["user"]["email"] == "cook@example.com"


def test_google_and_password_flows(client: TestClient) -> None:
    google = client.get("/auth/google")
    reset = client.post("/auth/password-reset", json={"email": "cook@example.com"})
    mismatch = client.post(
        "/auth/password",
        json={"password": "secret1", "confirm_password": "secret2"},
        headers=auth_headers(),
    )

    assert google.json()["url"].endswith("/dashboard")
    assert reset.status_code == 200
    assert mismatch.status_code == 400
    assert mismatch.json()["detail"] == "Passwords do not match"


def test_search(client: TestClient, container: AppContainer) -> None:
    response = client.get("/search", params={"q": "masala"}, headers=auth_headers())
    blank = client.get("/search", params={"q": " "})
    history = client.get("/search/history", headers=auth_headers())

    data = response.json()
    assert data["message"] == 'Found 2 recipes for "masala"!'
    assert [recipe["recipe_id"] for recipe in data["recipes"]] == ["db-1", "db-2"]
    assert data["fallback"] is False
    assert blank.status_code == 400
    assert [entry["query"] for entry in history.json()["searches"]] == ["masala"]

    cleared = client.delete("/search/history", headers=auth_headers())
    assert cleared.status_code == 200
    assert client.get("/search/history", headers=auth_headers()).json() == {
        "searches": []
    }


def test_popular_searches(client: TestClient) -> None:
    assert "curry" in client.get("/search/popular").json()["searches"]


def test_scan(client: TestClient) -> None:
    anonymous = client.post(
        "/scan", content=PNG_BYTES, headers={"Content-Type": "image/png"}
    )
    signed_in = client.post(
        "/scan",
        content=PNG_BYTES,
        headers={"Content-Type": "image/png", **auth_headers()},
    )
    not_image = client.post(
        "/scan", content=b"%PDF-1.7", headers={"Content-Type": "application/pdf"}
    )

    data = anonymous.json()
    assert data["label"] == "chicken curry"
    assert data["confidence"] == 91
    assert data["recipes"][0]["recipe_id"] == "db-3"
    assert data["xp_awarded"] == 0
    assert signed_in.json()["xp_awarded"] == 10
    assert signed_in.json()["stats"]["streak_days"] == 1
    assert not_image.status_code == 400
    assert not_image.json()["detail"] == "Please select a valid image file"


def test_scan_rejects_oversized_upload(client: TestClient) -> None:
    oversized = PNG_BYTES + b"\0" * MAX_IMAGE_BYTES

    response = client.post(
        "/scan", content=oversized, headers={"Content-Type": "image/png"}
    )

    assert response.status_code == 413
    assert response.json()["detail"] == "Image size should be less than 5MB"


def test_scan_stops_reading_chunked_upload_past_limit(client: TestClient) -> None:
    chunk = b"\0" * (1024 * 1024)

    def chunks():
        yield PNG_BYTES
        for _ in range(6):
            yield chunk

    response = client.post(
        "/scan", content=chunks(), headers={"Content-Type": "image/png"}
    )

    assert response.status_code == 413


def test_recipe_details(client: TestClient) -> None:
    meal = client.get("/recipes/52772")
    table = client.get("/recipes/db-1")
    missing = client.get("/recipes/99999")

    assert meal.json()["recipe"]["nutrition"]["calories"] == 375
    assert table.json()["recipe"]["name"] == "Masala Karela"
    assert missing.status_code == 404
    assert missing.json() == {"detail": "Recipe not found"}


def test_recipe_listings(client: TestClient) -> None:
    random_meals = client.get("/recipes/random", params={"count": 3})
    suggestions = client.get("/recipes/suggestions")
    cuisines = client.get("/recipes/cuisines")
    indian = client.get("/recipes/cuisines/Indian")
    seafood = client.get("/recipes/categories/Seafood")

    assert len(random_meals.json()["recipes"]) == 3
    assert suggestions.json()["recipes"][0]["recipe_id"] == "db-3"
    assert cuisines.json() == {"cuisines": ["Indian", "North Indian"]}
    assert len(indian.json()["recipes"]) == 3
    assert seafood.json()["recipes"][0]["recipe_id"] == "52959"


def test_community_recipes(client: TestClient) -> None:
    draft = {
        "title": "Poha",
        "description": "Flattened rice breakfast",
        "ingredients": ["poha", "onion", ""],
        "instructions": ["Rinse poha", "Temper and mix"],
        "prep_time": "10",
        "category": "Breakfast",
    }
    unauthenticated = client.post("/community-recipes", json=draft)
    created = client.post("/community-recipes", json=draft, headers=auth_headers())
    invalid = client.post(
        "/community-recipes", json={**draft, "title": ""}, headers=auth_headers()
    )

    assert unauthenticated.status_code == 401
    assert created.status_code == 201
    recipe = created.json()["recipe"]
    assert recipe["ingredients"] == ["poha", "onion"]
    assert recipe["prep_time"] == 10
    assert invalid.status_code == 400

    listing = client.get("/community-recipes").json()
    assert listing["cards"][0]["is_user_recipe"] is True
    mine = client.get("/community-recipes/mine", headers=auth_headers()).json()
    assert [item["title"] for item in mine["recipes"]] == ["Poha"]

    updated = client.put(
        f"/community-recipes/{recipe['id']}",
        json={**draft, "title": "Kanda Poha"},
        headers=auth_headers(),
    )
    assert updated.json()["recipe"]["title"] == "Kanda Poha"

    deleted = client.delete(
        f"/community-recipes/{recipe['id']}", headers=auth_headers()
    )
    assert deleted.status_code == 200
    assert client.get("/community-recipes").json()["recipes"] == []


def test_cookbook(client: TestClient) -> None:
    saved = client.post("/cookbook/52772", headers=auth_headers())
    is_saved = client.get("/cookbook/52772/saved", headers=auth_headers())
    view = client.get("/cookbook", params={"mode": "saved"}, headers=auth_headers())
    toggled = client.post("/cookbook/52772/toggle", headers=auth_headers())
    bad_mode = client.get(
        "/cookbook", params={"mode": "everything"}, headers=auth_headers()
    )

    assert saved.json()["message"] == "Recipe saved to cookbook!"
    assert is_saved.json() == {"saved": True}
    assert view.json()["recipes"][0]["name"] == "Teriyaki Chicken Casserole"
    assert toggled.json() == {"saved": False}
    assert client.get("/cookbook/saved", headers=auth_headers()).json() == {
        "recipes": []
    }
    assert bad_mode.status_code == 400


def test_shopping_list(client: TestClient) -> None:
    added = client.post(
        "/shopping-list", json={"items": ["milk", "eggs"]}, headers=auth_headers()
    )
    from_recipe = client.post(
        "/shopping-list/from-recipe/52772", headers=auth_headers()
    )
    items = client.get("/shopping-list", headers=auth_headers()).json()["items"]

    assert added.status_code == 201
    assert [item["name"] for item in from_recipe.json()["items"]] == [
        "3/4 cup soy sauce",
        "1/2 cup water",
        "1/4 cup brown sugar",
    ]
    assert len(items) == 5

    milk_id = added.json()["items"][0]["item_id"]
    toggled = client.post(f"/shopping-list/{milk_id}/toggle", headers=auth_headers())
    assert toggled.json()["item"]["is_checked"] is True
    patched = client.patch(
        f"/shopping-list/{milk_id}", json={"is_checked": True}, headers=auth_headers()
    )
    assert patched.json()["item"]["is_checked"] is True

    cleared = client.post("/shopping-list/clear-completed", headers=auth_headers())
    assert cleared.json() == {"removed": 1, "message": "Cleared 1 completed items"}

    eggs_id = added.json()["items"][1]["item_id"]
    assert client.delete(
        f"/shopping-list/{eggs_id}", headers=auth_headers()
    ).json() == {"message": "Item removed"}
    assert client.delete("/shopping-list", headers=auth_headers()).json() == {
        "removed": 3,
        "message": "Shopping list cleared",
    }


def test_shopping_list_rejects_blank_items(client: TestClient) -> None:
    response = client.post(
        "/shopping-list", json={"items": ["  "]}, headers=auth_headers()
    )

    assert response.status_code == 400
    assert response.json() == {"detail": "Please enter an item name"}


def test_shopping_changes_stream(container: AppContainer) -> None:
    with TestClient(create_app(container)) as client:
        with client.websocket_connect(
            "/shopping-list/changes?token=valid-token"
        ) as websocket:
            client.post(
                "/shopping-list", json={"items": ["ghee"]}, headers=auth_headers()
            )
            message = websocket.receive_json()

    assert message["table"] == "shopping_items"
    assert message["eventType"] == "INSERT"
    assert message["new"]["name"] == "ghee"
    assert message["old"] == {}


def test_shopping_changes_requires_valid_token(client: TestClient) -> None:
    with pytest.raises(WebSocketDisconnect) as exc_info:
        with client.websocket_connect("/shopping-list/changes?token=bad"):
            pass

    assert exc_info.value.code == 1008


def test_cookbook_changes_stream(container: AppContainer) -> None:
    with TestClient(create_app(container)) as client:
        with client.websocket_connect(
            "/cookbook/changes?token=valid-token"
        ) as websocket:
            client.post("/cookbook/52772", headers=auth_headers())
            inserted = websocket.receive_json()
            client.delete("/cookbook/52772", headers=auth_headers())
            deleted = websocket.receive_json()

    assert inserted["table"] == "saved_recipes"
    assert inserted["eventType"] == "INSERT"
    assert inserted["new"]["recipe_id"] == "52772"
    assert deleted["eventType"] == "DELETE"
    assert deleted["old"]["recipe_id"] == "52772"


def test_cookbook_changes_requires_valid_token(client: TestClient) -> None:
    with pytest.raises(WebSocketDisconnect) as exc_info:
        with client.websocket_connect("/cookbook/changes?token=bad"):
            pass

    assert exc_info.value.code == 1008


def test_profile(client: TestClient) -> None:
    profile = client.get("/profile", headers=auth_headers()).json()["profile"]
    dark = client.put("/profile/theme", json={"theme": "dark"}, headers=auth_headers())
    invalid = client.put(
        "/profile/theme", json={"theme": "neon"}, headers=auth_headers()
    )
    renamed = client.patch(
        "/profile/name", json={"name": "Chef"}, headers=auth_headers()
    )
    deletion = client.post("/profile/delete-request", headers=auth_headers())

    assert profile["level"]["level"] == 1
    assert profile["streak_emoji"] == "💫"
    assert profile["theme"] == "light"
    assert dark.json() == {"theme": "dark"}
    assert client.get("/profile/theme", headers=auth_headers()).json() == {
        "theme": "dark"
    }
    assert invalid.status_code == 400
    assert renamed.json()["user"]["name"] == "Chef"
    assert "contact support" in deletion.json()["message"]


def test_chat(client: TestClient) -> None:
    reply = client.post("/chat", json={"message": "What can I cook with dal?"})
    empty = client.post("/chat", json={"message": ""})
    prompts = client.get("/chat/prompts")

    assert reply.json() == {
        "text": "Try adding garam masala.",
        "conversationId": "c-1",
        "language": "en",
    }
    assert empty.status_code == 422
    assert len(prompts.json()["prompts"]) == 6


def test_checkout(client: TestClient, container: AppContainer) -> None:
    created = client.post(
        "/api/create-checkout-session",
        json={"plan": "BiteQube Extra"},
        headers={"Origin": "https://biteqube.example.com"},
    )
    missing = client.post("/api/create-checkout-session", json={})
    invalid = client.post("/api/create-checkout-session", json={"plan": "Mega"})

    assert created.json() == {
        "sessionId": "cs_test_123",
        "url": "https://checkout.stripe.com/c/pay/cs_test_123",
    }
    payments = container.billing_service.client
    assert isinstance(payments, FakePaymentsClient)
    assert payments.requests[0]["cancel_url"] == (
        "https://biteqube.example.com/?canceled=true"
    )
    assert missing.status_code == 400
    assert missing.json() == {"error": "Plan is required"}
    assert invalid.json() == {"error": "Invalid plan selected"}


def test_checkout_provider_failure(
    client: TestClient, container: AppContainer
) -> None:
    payments = container.billing_service.client
    assert isinstance(payments, FakePaymentsClient)
    payments.error = "No such price"

    response = client.post(
        "/api/create-checkout-session", json={"plan": "BiteQube Extra"}
    )

    assert response.status_code == 500
    assert response.json() == {
        "error": "No such price",
        "details": "Failed to create checkout session",
    }


def test_visitors(client: TestClient) -> None:
    first = client.post("/visitors/track", json={}).json()
    again = client.post(
        "/visitors/track", json={"session_id": first["session_id"]}
    ).json()
    counts = client.get("/visitors/counts").json()

    assert first["session_id"].startswith("session_")
    assert first["page_views"] == 1
    assert again["page_views"] == 2
    assert counts == {"active": 0, "total": 1}
