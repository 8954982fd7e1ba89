"""Tests for magnolia.routing.router — resolution, transitions, history."""

import logging

import pytest

from magnolia.errors import ConfigurationError, Unroutable, UnsupportedPattern
from magnolia.host.document import Document, Element
from magnolia.host.history import MemoryHistory
from magnolia.routing.router import Router
from magnolia.ui import elements as mg
from magnolia.ui.view import View, ViewData


def _make_router(initial: str = "/") -> tuple[Router, Element, MemoryHistory]:
    document = Document()
    root = document.create_element("div")
    root.id = "root"
    document.body.append_child(root)
    history = MemoryHistory(initial)
    return Router(root, history), root, history


def _text_view(text: str):
    def producer(_data: ViewData) -> View:
        return mg.compose_view(mg.p(text))

    return producer


class _Recorder:
    """A producer that records the ViewData it was called with."""

    def __init__(self, text: str = "recorded") -> None:
        self.text = text
        self.calls: list[ViewData] = []

    def __call__(self, data: ViewData) -> View:
        self.calls.append(data)
        return mg.compose_view(mg.p(self.text))


class TestResolution:
    def test_exact_route(self) -> None:
        router, root, _ = _make_router()
        router.route("/", _text_view("home"))

        router.load("/")

        assert root.inner_html == "<p>home</p>"

    def test_trailing_slash_resolves_to_same_route(self) -> None:
        router, root, _ = _make_router()
        router.route("/about", _text_view("about"))

        router.load("/about/")

        assert root.inner_html == "<p>about</p>"

    def test_exact_match_beats_dynamic(self) -> None:
        router, _, _ = _make_router()
        dynamic = _Recorder("dynamic")
        exact = _Recorder("exact")
        router.route("/a/{x}", dynamic)
        router.route("/a/b", exact)

        router.load("/a/b")

        assert dynamic.calls == []
        assert len(exact.calls) == 1
        assert dict(exact.calls[0].path_segments) == {}

    def test_dynamic_segments_passed_to_producer(self) -> None:
        router, _, _ = _make_router()
        producer = _Recorder()
        router.route("/users/{id}/posts/{post}", producer)

        router.load("/users/42/posts/hello")

        assert dict(producer.calls[0].path_segments) == {"id": "42", "post": "hello"}

    def test_overlapping_dynamic_first_registered_wins(self) -> None:
        router, _, _ = _make_router()
        first = _Recorder("first")
        second = _Recorder("second")
        router.route("/u/{id}", first)
        router.route("/{kind}/{slug}", second)

        router.load("/u/me")

        assert len(first.calls) == 1
        assert second.calls == []

    def test_reregistering_template_overwrites(self) -> None:
        router, root, _ = _make_router()
        router.route("/", _text_view("old"))
        router.route("/", _text_view("new"))

        router.load("/")

        assert root.inner_html == "<p>new</p>"
        assert router.routes == [""]

    def test_fallback_when_unmatched(self) -> None:
        router, root, _ = _make_router()
        router.route("/", _text_view("home"))
        router.fallback_to(_text_view("404 Not Found!"))

        router.load("/missing")

        assert root.inner_html == "<p>404 Not Found!</p>"

    def test_fallback_gets_empty_segments(self) -> None:
        router, _, _ = _make_router()
        fallback = _Recorder()
        router.fallback_to(fallback)

        router.load("/anything/at/all")

        assert dict(fallback.calls[0].path_segments) == {}

    def test_unroutable_without_fallback(self) -> None:
        router, root, _ = _make_router()
        router.route("/", _text_view("home"))

        with pytest.raises(Unroutable) as exc_info:
            router.load("/missing")

        assert exc_info.value.path == "/missing"
        assert root.children == []

    def test_unroutable_from_navigate(self) -> None:
        router, _, _ = _make_router()
        with pytest.raises(Unroutable):
            router.navigate("/nowhere")

    def test_unroutable_keeps_active_view(self) -> None:
        router, root, _ = _make_router()
        router.route("/", _text_view("home"))
        router.load("/")

        with pytest.raises(Unroutable):
            router.load("/missing")

        assert root.inner_html == "<p>home</p>"
        assert router.current_path == "/"

    def test_wildcard_template_fails_at_match_time(self) -> None:
        router, _, _ = _make_router()
        router.route("/files/{dir}/:*", _text_view("files"))
        router.fallback_to(_text_view("fallback"))

        with pytest.raises(UnsupportedPattern):
            router.load("/files/a/b")

    def test_duplicate_segment_names_rejected_at_registration(self) -> None:
        router, _, _ = _make_router()
        with pytest.raises(ConfigurationError):
            router.route("/{id}/{id}", _text_view("x"))


class TestTransition:
    def test_active_view_replaced(self) -> None:
        router, root, _ = _make_router()
        router.route("/a", _text_view("A"))
        router.route("/b", _text_view("B"))

        router.load("/a")
        router.load("/b")

        assert root.inner_html == "<p>B</p>"
        assert router.active is not None
        assert router.active.url == "/b"

    def test_new_view_keeps_position_between_siblings(self) -> None:
        router, root, _ = _make_router()
        header = root.append_child(Element("header"))
        router.route("/a", _text_view("A"))
        router.route("/b", _text_view("B"))

        router.load("/a")
        root.append_child(Element("footer"))
        router.load("/b")

        assert header.parent is root
        assert root.inner_html == "<header></header><p>B</p><footer></footer>"

    def test_reference_node_removed_after_swap(self) -> None:
        router, root, _ = _make_router()
        router.route("/a", _text_view("A"))
        router.route("/b", _text_view("B"))

        router.load("/a")
        router.load("/b")

        assert [child.tag for child in root.children] == ["p"]

    def test_multi_child_view_order_preserved(self) -> None:
        router, root, _ = _make_router()
        root.append_child(Element("nav"))
        router.route("/a", lambda _d: mg.compose_view([mg.h1("A"), mg.p("a")]))
        router.route("/b", lambda _d: mg.compose_view([mg.h1("B"), None, mg.p("b")]))

        router.load("/a")
        root.append_child(Element("footer"))
        router.load("/b")

        assert root.inner_html == "<nav></nav><h1>B</h1><p>b</p><footer></footer>"

    def test_empty_view_mounts_placeholder(self) -> None:
        router, root, _ = _make_router()
        router.route("/empty", lambda _d: View())
        router.route("/full", _text_view("full"))
        root.append_child(Element("footer"))

        router.load("/empty")
        router.load("/full")

        assert root.inner_html == "<footer></footer><p>full</p>"

    def test_degraded_ordering_logged_and_recovered(self, caplog: pytest.LogCaptureFixture) -> None:
        router, root, _ = _make_router()
        router.route("/a", _text_view("A"))
        router.route("/b", _text_view("B"))
        router.load("/a")

        # Strip the active view's children so no reference node can be placed
        assert router.active is not None
        router.active.view.unmount()

        with caplog.at_level(logging.ERROR, logger="magnolia.router"):
            router.load("/b")

        assert root.inner_html == "<p>B</p>"
        assert any("unable to set ref node" in record.message for record in caplog.records)

    def test_producer_failure_keeps_position(self) -> None:
        router, root, _ = _make_router()
        root.append_child(Element("header"))
        router.route("/a", _text_view("A"))
        router.route("/c", _text_view("C"))

        def broken(_data: ViewData) -> View:
            raise RuntimeError("boom")

        router.route("/b", broken)
        paths: list[str] = []
        router.on_router_load(paths.append)

        router.load("/a")
        root.append_child(Element("footer"))
        with pytest.raises(RuntimeError, match="boom"):
            router.load("/b")

        assert router.active is None
        router.load("/c")

        assert root.inner_html == "<header></header><p>C</p><footer></footer>"
        assert paths == ["/a", "/c"]

    def test_first_view_mounts_at_slot_marker(self) -> None:
        router, root, _ = _make_router()
        root.append_child(Element("header"))
        marker = router.mark_slot()
        root.append_child(Element("footer"))
        router.route("/", _text_view("home"))

        router.load("/")

        assert marker.parent is None
        assert root.inner_html == "<header></header><p>home</p><footer></footer>"

    def test_mark_slot_is_idempotent(self) -> None:
        router, root, _ = _make_router()
        assert router.mark_slot() is router.mark_slot()
        assert len(root.children) == 1

    def test_unmount_hooks_fire_on_transition(self) -> None:
        router, _, _ = _make_router()
        events: list[str] = []

        def a_view(_data: ViewData) -> View:
            box = mg.div().on_unmount(lambda: events.append("box"))
            mg.p("child").on_unmount(lambda: events.append("child")).child_of(box)
            return mg.compose_view(box)

        router.route("/a", a_view)
        router.route("/b", _text_view("B"))

        router.load("/a")
        router.load("/b")

        assert events == ["box", "child"]

    def test_mount_hook_fires_after_insert(self) -> None:
        router, root, _ = _make_router()
        seen: list[bool] = []

        def view(_data: ViewData) -> View:
            node = mg.p("x")
            node.on_mount(lambda: seen.append(node.element.parent is root))
            return mg.compose_view(node)

        router.route("/", view)
        router.load("/")

        assert seen == [True]


class TestLoadCallbacks:
    def test_called_with_literal_path(self) -> None:
        router, _, _ = _make_router()
        router.route("/about", _text_view("about"))
        paths: list[str] = []
        router.on_router_load(paths.append)

        router.load("/about/")

        assert paths == ["/about/"]

    def test_called_in_registration_order(self) -> None:
        router, _, _ = _make_router()
        router.route("/", _text_view("home"))
        order: list[str] = []
        router.on_router_load(lambda _p: order.append("first"))
        router.on_router_load(lambda _p: order.append("second"))

        router.load("/")

        assert order == ["first", "second"]

    def test_called_after_view_mounted(self) -> None:
        router, root, _ = _make_router()
        router.route("/", _text_view("home"))
        snapshots: list[str] = []
        router.on_router_load(lambda _p: snapshots.append(root.inner_html))

        router.load("/")

        assert snapshots == ["<p>home</p>"]

    def test_called_for_fallback(self) -> None:
        router, _, _ = _make_router()
        router.fallback_to(_text_view("404"))
        paths: list[str] = []
        router.on_router_load(paths.append)

        router.load("/missing")

        assert paths == ["/missing"]

    def test_not_called_when_unroutable(self) -> None:
        router, _, _ = _make_router()
        paths: list[str] = []
        router.on_router_load(paths.append)

        with pytest.raises(Unroutable):
            router.load("/missing")

        assert paths == []


class TestHistory:
    def test_navigate_pushes(self) -> None:
        router, _, history = _make_router()
        router.route("/a", _text_view("A"))

        router.navigate("/a")

        assert history.entries == ("/", "/a")
        assert history.current_path() == "/a"

    def test_navigate_replace(self) -> None:
        router, _, history = _make_router()
        router.route("/a", _text_view("A"))

        router.navigate("/a", replace=True)

        assert history.entries == ("/a",)

    def test_back_reloads_without_touching_history(self) -> None:
        router, root, history = _make_router()
        router.route("/a", _text_view("A"))
        router.route("/b", _text_view("B"))
        router.navigate("/a", replace=True)
        router.navigate("/b")

        history.back()

        assert root.inner_html == "<p>A</p>"
        assert history.entries == ("/a", "/b")
        assert router.current_path == "/a"

    def test_forward_reloads(self) -> None:
        router, root, history = _make_router()
        router.route("/a", _text_view("A"))
        router.route("/b", _text_view("B"))
        router.navigate("/a", replace=True)
        router.navigate("/b")
        history.back()

        history.forward()

        assert root.inner_html == "<p>B</p>"

    def test_close_stops_listening(self) -> None:
        router, root, history = _make_router()
        router.route("/a", _text_view("A"))
        router.route("/b", _text_view("B"))
        router.navigate("/a", replace=True)
        router.navigate("/b")

        router.close()
        router.close()
        history.back()

        assert root.inner_html == "<p>B</p>"

    def test_lazy_route_without_task_group(self) -> None:
        router, _, _ = _make_router()

        async def loader():
            return _text_view("lazy")

        router.route_lazy("/lazy", loader)

        with pytest.raises(ConfigurationError, match="no task group"):
            router.load("/lazy")
