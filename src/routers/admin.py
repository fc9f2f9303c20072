"""
Admin Pages

Bare HTML shells for the admin login and dashboard. Access to /admin is
enforced by AuthMiddleware before these handlers run; the pages talk to
the JSON API for everything else.
"""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter(prefix="/admin", tags=["admin"], include_in_schema=False)

LOGIN_PAGE = """<!doctype html>
<html lang="en">
<head><meta charset="utf-8"><title>Admin Login</title></head>
<body>
  <form id="login">
    <input type="password" name="password" placeholder="Password" required>
    <button type="submit">Sign in</button>
    <p id="error"></p>
  </form>
  <script>
    document.getElementById("login").addEventListener("submit", async (event) => {
      event.preventDefault();
      const password = event.target.password.value;
      const res = await fetch("/api/auth/login", {
        method: "POST",
        headers: {"Content-Type": "application/json"},
        body: JSON.stringify({password}),
      });
      if (res.ok) { window.location.href = "/admin"; return; }
      const body = await res.json();
      document.getElementById("error").textContent = body.error || body.message;
    });
  </script>
</body>
</html>
"""

DASHBOARD_PAGE = """<!doctype html>
<html lang="en">
<head><meta charset="utf-8"><title>Menu Admin</title></head>
<body>
  <h1>Menu Admin</h1>
  <textarea id="menu" rows="30" cols="100"></textarea>
  <p>
    <button id="save">Save</button>
    <button id="logout">Log out</button>
  </p>
  <p id="status"></p>
  <script>
    const editor = document.getElementById("menu");
    const status = document.getElementById("status");
    fetch("/api/menu").then((res) => res.json()).then((menu) => {
      editor.value = JSON.stringify(menu, null, 2);
    });
    document.getElementById("save").addEventListener("click", async () => {
      const res = await fetch("/api/menu", {
        method: "POST",
        headers: {"Content-Type": "application/json"},
        body: editor.value,
      });
      const body = await res.json();
      status.textContent = body.message;
    });
    document.getElementById("logout").addEventListener("click", async () => {
      await fetch("/api/auth/logout", {method: "POST"});
      window.location.href = "/admin/login";
    });
  </script>
</body>
</html>
"""


@router.get("/login", response_class=HTMLResponse)
async def login_page():
    return LOGIN_PAGE


@router.get("", response_class=HTMLResponse)
async def dashboard_page():
    return DASHBOARD_PAGE
