"""Tests for PageKit wiring and page assembly."""

from types import SimpleNamespace

from pagekit import PageKit, PageKitConfig
from pagekit.push.data import MERGE_HELPER


class TestPageKit:
    def test_shared_locals_seeded(self, kit):
        assert {"css_name", "get_global_calls_when", "get_global_data"} <= set(kit.renderer.locals)

    def test_partial_uses_partial_paths(self, kit):
        assert kit.partial("page", {"title": "Kit"}) == "<h1>Kit</h1>"

    def test_render_page_with_layout(self, kit, views_dir):
        (views_dir / "home.html").write_text(
            '{% extends "layout.html" %}{% block body %}<main>{{ title }}</main>{% endblock %}',
            encoding="utf-8",
        )
        request = SimpleNamespace()
        push = kit.for_request(request)
        push.call("new @(?)", "Gallery", {"id": 3})
        push.data({"user": {"id": 7}})
        kit.registry.push_global_data({"uploadsUrl": "/uploads"})

        html = kit.render_page(request, "home", {"title": "Home", "page_type": "homePage"}, user_present=True)

        assert "<title>Home</title>" in html
        assert '<body class="home-page">' in html
        assert "<main>Home</main>" in html
        assert '  new Gallery({"id":3});' in html
        assert 'pagekit.merge(pagekit.data, {"user":{"id":7}});' in html
        assert 'pagekit.merge(pagekit.data, {"uploadsUrl":"/uploads"});' in html
        assert "pagekit.enablePlayers();" in html
        assert "pagekit.enableAreas();" in html
        assert html.index("uploadsUrl") < html.index('"user"')

    def test_render_page_without_user(self, kit, views_dir):
        (views_dir / "scripts.html").write_text('{% include "page_scripts.html" %}', encoding="utf-8")
        html = kit.render_page(SimpleNamespace(), "scripts")
        assert "enablePlayers" in html
        assert "enableAreas" not in html

    def test_render_page_keeps_caller_values(self, kit, views_dir):
        (views_dir / "calls.html").write_text("{{ calls }}", encoding="utf-8")
        request = SimpleNamespace()
        kit.for_request(request).call("ignored()")
        assert kit.render_page(request, "calls", {"calls": "mine"}) == "mine"

    def test_global_helpers_in_templates(self, kit, views_dir):
        (views_dir / "helpers.html").write_text("{{ get_global_calls_when('user') }}", encoding="utf-8")
        assert kit.partial("helpers") == "  pagekit.enableAreas();"

    def test_config_namespace(self, views_dir):
        kit = PageKit(PageKitConfig(client_namespace="site", partial_paths=[views_dir]))
        assert kit.registry.get_global_data() == (
            "  site.data = site.data || {};\n"
            f"  site.merge = site.merge || {MERGE_HELPER};"
        )

    def test_configured_merge_function(self, views_dir):
        kit = PageKit(PageKitConfig(merge_function="$.extend", partial_paths=[views_dir]))
        kit.registry.push_global_data({"tags": ["a"]})
        assert kit.registry.get_global_data() == (
            "  pagekit.data = pagekit.data || {};\n"
            '  $.extend(true, pagekit.data, {"tags":["a"]});'
        )
