"""
Tests for the landowner CRM and the permission slip download.

The headless browser is patched out; the generated HTML is checked instead.

Run with: python -m pytest tests/test_landowners.py
"""

from unittest.mock import AsyncMock, patch

from fastapi import HTTPException
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

FAKE_PDF = b"%PDF-1.4 permission slip"


def _add(c, name="John Smith", location="Lot 4, Concession 9", phone="555-123-4567"):
    response = c.post(
        "/api/landowners",
        json={"landowner_name": name, "phone": phone, "property_location": location},
    )
    assert response.status_code == 200, response.text
    return response.json()["landowner"]


def test_add_and_list_landowners(trapper):
    first = _add(trapper, "John Smith")
    second = _add(trapper, "Marie Tremblay", phone=None)

    landowners = trapper.get("/api/landowners").json()["landowners"]
    assert [p["id"] for p in landowners] == [second["id"], first["id"]]
    assert first["status"] == "Active"
    assert second["phone"] is None


def test_add_landowner_requires_name_and_location(trapper):
    response = trapper.post("/api/landowners", json={"landowner_name": "", "property_location": "Lot 1"})
    assert response.status_code == 400
    response = trapper.post("/api/landowners", json={"landowner_name": "John", "property_location": " "})
    assert response.status_code == 400
    assert trapper.get("/api/landowners").json()["landowners"] == []


def test_edit_landowner_keeps_status(trapper):
    permission = _add(trapper)

    response = trapper.put(
        f"/api/landowners/{permission['id']}",
        json={"landowner_name": "John A. Smith", "phone": "", "property_location": "Lot 5, Concession 9"},
    )
    assert response.status_code == 200
    updated = response.json()["landowner"]
    assert updated["landowner_name"] == "John A. Smith"
    assert updated["phone"] is None
    assert updated["property_location"] == "Lot 5, Concession 9"
    assert updated["status"] == "Active"


def test_delete_landowner(trapper, other_trapper):
    permission = _add(trapper)

    assert other_trapper.delete(f"/api/landowners/{permission['id']}").status_code == 404
    assert trapper.delete(f"/api/landowners/{permission['id']}").status_code == 200
    assert trapper.get("/api/landowners").json()["landowners"] == []


def test_landowners_are_private(trapper, other_trapper):
    _add(trapper)
    assert other_trapper.get("/api/landowners").json()["landowners"] == []


def test_download_permission_slip(trapper):
    trapper.put("/api/profile", json={"full_name": "Jane Trapper", "trapping_licenses": ["T-123456", "T-654321"]})
    permission = _add(trapper, "John Smith", "Lot 4, Concession 9")

    with patch("server.export.render_pdf", new_callable=AsyncMock, return_value=FAKE_PDF) as render:
        response = trapper.get(f"/api/landowners/{permission['id']}/contract.pdf")

    assert response.status_code == 200
    assert response.content == FAKE_PDF
    assert response.headers["content-type"] == "application/pdf"
    assert "Permission_John_Smith.pdf" in response.headers["content-disposition"]

    html = render.await_args.args[0]
    assert "TRAPPING PERMISSION AGREEMENT" in html
    assert "I, John Smith, being the owner/occupant" in html
    assert "Lot 4, Concession 9" in html
    assert "Ontario Regulations" in html
    assert "2026 Trapping Season" in html
    assert "Jane Trapper" in html
    assert "T-123456, T-654321" in html


def test_permission_slip_of_other_trapper(trapper, other_trapper):
    permission = _add(trapper)

    with patch("server.export.render_pdf", new_callable=AsyncMock, return_value=FAKE_PDF) as render:
        response = other_trapper.get(f"/api/landowners/{permission['id']}/contract.pdf")

    assert response.status_code == 404
    render.assert_not_awaited()


def test_permission_slip_render_failure(trapper):
    permission = _add(trapper)

    failure = HTTPException(status_code=504, detail="Rendering timeout: page load")
    with patch("server.export.render_pdf", new_callable=AsyncMock, side_effect=failure):
        response = trapper.get(f"/api/landowners/{permission['id']}/contract.pdf")

    assert response.status_code == 504
    assert trapper.get("/api/landowners").json()["landowners"][0]["id"] == permission["id"]


def test_permission_slip_browser_timeout(trapper):
    permission = _add(trapper)

    timeout = PlaywrightTimeoutError("Timeout 10000ms exceeded")
    with patch("server.export.get_browser", new_callable=AsyncMock, side_effect=timeout):
        response = trapper.get(f"/api/landowners/{permission['id']}/contract.pdf")

    assert response.status_code == 504
    assert response.json()["detail"].startswith("Rendering timeout:")


def test_permission_slip_browser_failure(trapper):
    permission = _add(trapper)

    with patch("server.export.get_browser", new_callable=AsyncMock, side_effect=RuntimeError("chromium missing")):
        response = trapper.get(f"/api/landowners/{permission['id']}/contract.pdf")

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to generate document: chromium missing"


def test_permission_slip_page_is_closed_after_timeout(trapper):
    permission = _add(trapper)

    page = AsyncMock()
    page.set_content.side_effect = PlaywrightTimeoutError("Timeout 10000ms exceeded")
    context = AsyncMock()
    context.new_page.return_value = page
    browser = AsyncMock()
    browser.new_context.return_value = context

    with patch("server.export.get_browser", new_callable=AsyncMock, return_value=browser):
        response = trapper.get(f"/api/landowners/{permission['id']}/contract.pdf")

    assert response.status_code == 504
    context.close.assert_awaited_once()
    page.pdf.assert_not_awaited()
