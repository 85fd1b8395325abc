import pytest
from flask import Flask

from jwt_http_parser import FlaskRequest, MatchedRoute


def test_flask_request_requires_request_context():
    with pytest.raises(RuntimeError):
        FlaskRequest()


def test_flask_request_wraps_current_request(app: Flask):
    with app.test_request_context("/foo", headers={"X-Test": "1"}) as ctx:
        request = FlaskRequest()

        assert request.request is ctx.request
        assert request.header("x-test") == "1"
        assert request.header("X-Missing") is None


def test_server_reads_wsgi_environ(make_request):
    request = make_request(environ_overrides={"REDIRECT_HTTP_AUTHORIZATION": "Bearer abc"})

    assert request.server("REDIRECT_HTTP_AUTHORIZATION") == "Bearer abc"
    assert request.server("HTTP_AUTHORIZATION") is None


def test_input_prefers_body_over_query(app: Flask):
    with app.test_request_context(
        "/foo", method="POST", data={"token": "body"}, query_string={"token": "query"}
    ):
        assert FlaskRequest().input("token") == "body"


def test_matched_flask_route(app: Flask):
    @app.get("/users/<int:user_id>/reset/<token>")
    def reset(user_id, token):  # type: ignore
        return {}

    with app.test_request_context("/users/7/reset/abc"):
        route = FlaskRequest().route()

        assert isinstance(route, MatchedRoute)
        assert route.rule.rule == "/users/<int:user_id>/reset/<token>"
        assert route.parameter("token") == "abc"
        assert route.parameter("user_id") == 7
        assert route.parameter("missing") is None
        assert route.parameters() == {"user_id": 7, "token": "abc"}


def test_unmatched_flask_route(app: Flask):
    with app.test_request_context("/nowhere"):
        assert FlaskRequest().route() is None


def test_route_resolver_result_is_passed_through(make_request):
    array = [False, {"uses": "someController"}, {"token": "abc"}]
    request = make_request()

    assert request.set_route_resolver(lambda: array) is request
    assert request.route() is array

    request.set_route_resolver(None)
    assert request.route() is None


def test_matched_route_copies_view_args():
    view_args = {"token": "abc"}
    route = MatchedRoute(None, view_args)
    view_args["token"] = "changed"

    assert route.parameter("token") == "abc"
    assert route.parameter("missing", "default") == "default"
    assert "token" in repr(route)
