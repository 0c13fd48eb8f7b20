"""FastAPI integration tests."""

import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.testclient import TestClient

from pagekit import PageKit, RequestPush
from pagekit.http import get_pagekit, get_request_push, install


@pytest.fixture
def app(kit, views_dir):
    (views_dir / "gallery.html").write_text(
        '{% extends "layout.html" %}{% block body %}<p>{{ title }}</p>{% endblock %}',
        encoding="utf-8",
    )
    application = FastAPI()
    install(application, kit)
    kit.registry.push_global_data({"uploadsUrl": "/uploads"})

    @application.get("/gallery/{gallery_id}", response_class=HTMLResponse)
    def gallery(gallery_id: int, request: Request, push: RequestPush = Depends(get_request_push)):
        push.call("new @(?)", "Gallery", {"id": gallery_id})
        push.data({"gallery": {"id": gallery_id}})
        page_kit: PageKit = get_pagekit(request)
        return page_kit.render_page(request, "gallery", {"title": f"Gallery {gallery_id}"})

    return application


@pytest.mark.integration
class TestHttpIntegration:
    def test_page_contains_request_calls(self, app):
        client = TestClient(app)
        response = client.get("/gallery/3")
        assert response.status_code == 200
        assert "<p>Gallery 3</p>" in response.text
        assert '  new Gallery({"id":3});' in response.text
        assert '{"gallery":{"id":3}}' in response.text
        assert '{"uploadsUrl":"/uploads"}' in response.text

    def test_requests_do_not_leak(self, app):
        client = TestClient(app)
        client.get("/gallery/1")
        response = client.get("/gallery/2")
        assert '{"id":1}' not in response.text
        assert response.text.count("new Gallery") == 1

    def test_not_installed(self):
        application = FastAPI()

        @application.get("/")
        def home(push: RequestPush = Depends(get_request_push)):
            return {"ok": True}

        client = TestClient(application, raise_server_exceptions=True)
        with pytest.raises(RuntimeError):
            client.get("/")
