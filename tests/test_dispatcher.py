"""Dispatcher tests."""

import json

import pytest
from funcrouter_core.errors import NoRouteMatched
from funcrouter_core.http.response import Response
from funcrouter_core.routing.dispatcher import Dispatcher
from funcrouter_core.routing.router import Router


class Recorder:
    """Handler that records its calls."""

    def __init__(self, name="handler"):
        self.name = name
        self.calls = []

    def __call__(self, params):
        self.calls.append(params)
        return self.name


class TestDispatch:
    """Test dispatch matching."""

    def test_invokes_handler_with_params(self):
        """Test handler gets the extracted parameters."""
        router = Router()
        show = Recorder()
        router.get("/user/{id}/post/{slug}", show)

        result = router.dispatcher().dispatch("GET", "/user/42/post/hello")

        assert result == "handler"
        assert show.calls == [{"id": "42", "slug": "hello"}]
        assert list(show.calls[0]) == ["id", "slug"]

    def test_prefix_composition(self):
        """Test router prefix, group and path compose."""
        router = Router()
        users = Recorder()
        router.set_prefix("/api")
        router.add_route_group("/admin", lambda g: g.get("/users", users))

        router.dispatcher().dispatch("GET", "/api/admin/users")
        assert users.calls == [{}]

        with pytest.raises(NoRouteMatched):
            router.dispatcher().dispatch("GET", "/admin/users")

    def test_first_match_wins(self):
        """Test registration order beats specificity."""
        router = Router()
        dynamic = Recorder("dynamic")
        static = Recorder("static")
        router.get("/item/{id}", dynamic)
        router.get("/item/static", static)

        assert router.dispatcher().dispatch("GET", "/item/static") == "dynamic"
        assert dynamic.calls == [{"id": "static"}]
        assert static.calls == []

    def test_query_string_ignored(self):
        """Test query strings do not affect matching."""
        router = Router()
        search = Recorder()
        router.get("/search", search)

        router.dispatcher().dispatch("GET", "/search?q=test")
        router.dispatcher().dispatch("GET", "/search")
        assert search.calls == [{}, {}]

    def test_leading_slashes_not_collapsed(self):
        """Test a doubled leading slash does not reach the route."""
        router = Router()
        users = Recorder()
        router.get("/users", users)
        with pytest.raises(NoRouteMatched) as exc_info:
            router.dispatcher().dispatch("GET", "//users")
        assert exc_info.value.uri == "//users"
        assert users.calls == []

    def test_trailing_slash_ignored(self):
        """Test trailing slashes are trimmed from the URI."""
        router = Router()
        users = Recorder()
        router.get("/users", users)
        router.dispatcher().dispatch("GET", "/users/")
        assert users.calls == [{}]

    def test_root_route(self):
        """Test the root path."""
        router = Router()
        home = Recorder()
        router.get("/", home)
        router.dispatcher().dispatch("GET", "/?utm=1")
        assert home.calls == [{}]

    def test_method_case_insensitive(self):
        """Test request methods are uppercased."""
        router = Router()
        create = Recorder()
        router.post("/users", create)
        router.dispatcher().dispatch("post", "/users")
        assert create.calls == [{}]

    def test_method_buckets_separate(self):
        """Test routes only match their own method."""
        router = Router()
        router.get("/users", Recorder())
        with pytest.raises(NoRouteMatched):
            router.dispatcher().dispatch("POST", "/users")

    def test_fragment_constraint(self):
        """Test inline regex fragments constrain matches."""
        router = Router()
        by_id = Recorder("id")
        by_name = Recorder("name")
        router.get(r"/user/{id:\d+}", by_id)
        router.get("/user/{name}", by_name)

        assert router.dispatcher().dispatch("GET", "/user/abc") == "name"
        assert router.dispatcher().dispatch("GET", "/user/12") == "id"


class TestNoRouteMatched:
    """Test unmatched requests."""

    def test_unmatched_method(self):
        """Test DELETE with no DELETE routes."""
        router = Router()
        router.get("/nope", Recorder())

        with pytest.raises(NoRouteMatched) as exc_info:
            router.dispatcher().dispatch("DELETE", "/nope")

        assert exc_info.value.uri == "/nope"
        assert exc_info.value.method == "DELETE"
        assert '"/nope"' in str(exc_info.value)

    def test_uri_is_normalized(self):
        """Test the error carries the normalized URI."""
        router = Router()
        router.get("/a", Recorder())
        with pytest.raises(NoRouteMatched) as exc_info:
            router.dispatcher().dispatch("GET", "/missing/?x=1")
        assert exc_info.value.uri == "/missing"


class TestEmptyTable:
    """Test dispatch without routes."""

    def test_welcome_response(self):
        """Test the informational payload."""
        result = Router().dispatcher().dispatch("GET", "/anything")

        assert isinstance(result, Response)
        assert result.status == 200
        payload = json.loads(result.body)
        assert payload["status"] == "No routes registered"
        assert payload["hints"]

    def test_prefix_alone_is_still_empty(self):
        """Test a prefix without routes still gets the welcome."""
        router = Router(prefix="/api")
        assert isinstance(router.dispatcher().dispatch("GET", "/api"), Response)

    def test_custom_on_empty(self):
        """Test overriding the empty-table response."""
        dispatcher = Dispatcher(Router(), on_empty=lambda: "empty")
        assert dispatcher.dispatch("GET", "/") == "empty"


class TestAtMostOnce:
    """Test the dispatch guard."""

    def test_second_dispatch_is_noop(self):
        """Test the handler runs once."""
        router = Router()
        users = Recorder()
        router.get("/users", users)

        assert router.dispatch("GET", "/users") == "handler"
        assert router.dispatch("GET", "/users") is None
        assert users.calls == [{}]

    def test_noop_after_miss(self):
        """Test a failed dispatch also consumes the guard."""
        router = Router()
        users = Recorder()
        router.get("/users", users)

        with pytest.raises(NoRouteMatched):
            router.dispatch("GET", "/missing")
        assert router.dispatch("GET", "/users") is None
        assert users.calls == []

    def test_dispatched_flag(self):
        """Test the dispatcher state."""
        router = Router()
        router.get("/", Recorder())
        dispatcher = router.dispatcher()
        assert dispatcher.dispatched is False
        dispatcher.dispatch("GET", "/")
        assert dispatcher.dispatched is True

    def test_fresh_dispatchers_are_independent(self):
        """Test per-request dispatchers each run once."""
        router = Router()
        users = Recorder()
        router.get("/users", users)

        router.dispatcher().dispatch("GET", "/users")
        router.dispatcher().dispatch("GET", "/users")
        assert len(users.calls) == 2


class TestHandlerErrors:
    """Test handler failures."""

    def test_handler_exception_propagates(self):
        """Test exceptions from handlers are not swallowed."""
        router = Router()

        def broken(params):
            raise LookupError(params["id"])

        router.get("/item/{id}", broken)
        with pytest.raises(LookupError, match="9"):
            router.dispatch("GET", "/item/9")
        assert router.dispatch("GET", "/item/9") is None
