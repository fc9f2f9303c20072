from fastapi.testclient import TestClient

from main import create_app
from storage import MENU_KEY, TITLES_KEY

SESSION_COOKIE = "auth_token"


def test_login_check_logout_flow(client, settings):
    response = client.post("/api/auth/login", json={"password": settings.admin_password})
    assert response.status_code == 200
    assert response.json() == {"success": True}

    set_cookie = response.headers["set-cookie"]
    assert f"{SESSION_COOKIE}=" in set_cookie
    assert "HttpOnly" in set_cookie
    assert "Max-Age=28800" in set_cookie
    assert "Path=/" in set_cookie
    assert "samesite=strict" in set_cookie.lower()
    assert "Secure" not in set_cookie

    assert client.get("/api/auth/check").json() == {"isAuthenticated": True}

    response = client.post("/api/auth/logout")
    assert response.json() == {"success": True}

    assert client.get("/api/auth/check").json() == {"isAuthenticated": False}


def test_login_with_wrong_password(client):
    response = client.post("/api/auth/login", json={"password": "nope"})

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Invalid credentials"}
    assert "set-cookie" not in response.headers
    assert client.get("/api/auth/check").json() == {"isAuthenticated": False}


def test_login_without_password(client):
    assert client.post("/api/auth/login", json={}).status_code == 400
    assert client.post("/api/auth/login", content=b"not json").status_code == 400


def test_check_with_forged_cookie(client):
    client.cookies.set(SESSION_COOKIE, "forged.token.value")
    assert client.get("/api/auth/check").json() == {"isAuthenticated": False}


def test_secure_cookie_in_production(settings, content_store):
    settings.environment = "production"
    with TestClient(create_app(settings, content_store=content_store)) as client:
        response = client.post("/api/auth/login", json={"password": settings.admin_password})

    assert "Secure" in response.headers["set-cookie"]


def test_get_menu_serves_bundled_default(client, sample_menu):
    response = client.get("/api/menu")

    assert response.status_code == 200
    assert response.json() == sample_menu
    assert response.headers["cache-control"] == "public, s-maxage=60, stale-while-revalidate=300"


def test_save_menu_requires_session(client, sample_menu, remote):
    response = client.post("/api/menu", json=sample_menu)

    assert response.status_code == 401
    assert response.json()["success"] is False
    assert remote.writes == 0


def test_save_menu(admin_client, remote):
    payload = {
        "specials": [
            {
                "name_en": "<b>Künefe</b>",
                "description_en": "Hot cheese pastry",
                "name_tr": "Künefe",
                "description_tr": "Sıcak peynirli tatlı",
                "price": "25.0.5 TL",
            }
        ]
    }

    response = admin_client.post("/api/menu", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["storageLocation"] == "remote"
    assert "message" in body

    stored = admin_client.get("/api/menu").json()
    assert stored["specials"][0]["name_en"] == "Künefe"
    assert stored["specials"][0]["price"] == "25.05"
    assert remote.documents[MENU_KEY] == stored


def test_save_menu_in_local_only_mode(admin_client, remote, sample_menu):
    remote.available = False

    response = admin_client.post("/api/menu", json=sample_menu)

    assert response.status_code == 200
    assert response.json()["success"] is False
    assert response.json()["storageLocation"] == "local"
    assert admin_client.get("/api/menu").json() == sample_menu


def test_save_menu_rejects_malformed_bodies(admin_client):
    assert admin_client.post("/api/menu", json={}).status_code == 400
    assert admin_client.post("/api/menu", json=[1, 2]).status_code == 400
    assert admin_client.post("/api/menu", json={"tea": [{"name_en": "x"}]}).status_code == 400
    assert admin_client.post("/api/menu", content=b"{broken").status_code == 400


def test_save_menu_is_rate_limited(admin_client, sample_menu):
    headers = {"X-Forwarded-For": "198.51.100.4"}
    for _ in range(10):
        assert admin_client.post("/api/menu", json=sample_menu, headers=headers).status_code == 200

    response = admin_client.post("/api/menu", json=sample_menu, headers=headers)

    assert response.status_code == 429
    assert response.json() == {"success": False, "message": "Too many requests. Please try again later."}

    # Another client is unaffected
    other = admin_client.post("/api/menu", json=sample_menu, headers={"X-Forwarded-For": "198.51.100.5"})
    assert other.status_code == 200


def test_titles_round_trip(admin_client, remote, sample_titles):
    assert admin_client.get("/api/menu/titles").json() == sample_titles

    titles = {"tea": {"en": "Teas", "tr": "Çaylar"}}
    response = admin_client.post("/api/menu/titles", json=titles)

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert remote.documents[TITLES_KEY] == titles
    assert admin_client.get("/api/menu/titles").json() == titles


def test_save_titles_requires_session(client):
    response = client.post("/api/menu/titles", json={"tea": {"en": "Tea", "tr": "Çay"}})
    assert response.status_code == 401


def test_save_titles_rejects_non_object(admin_client):
    assert admin_client.post("/api/menu/titles", json=["tea"]).status_code == 400


def test_menu_view(client):
    response = client.get("/api/menu/view", params={"lang": "tr"})

    assert response.status_code == 200
    body = response.json()
    assert body["language"] == "tr"
    assert body["sections"][0]["title"] == "SABAH"
    assert body["sections"][0]["items"][0]["price"] == "220 TL"
    assert body["sections"][0]["items"][0]["badge"] == "VT"


def test_menu_view_rejects_unknown_language(client):
    assert client.get("/api/menu/view", params={"lang": "de"}).status_code == 400


def test_reads_survive_remote_outage(client, remote, sample_menu):
    remote.failing = True
    assert client.get("/api/menu").json() == sample_menu


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["storage"] == {"remote": "available", "local": "available", "bundled": "available"}
