"""Tests for how API routes are dispatched."""

import inspect

from fastapi.routing import APIRoute

# Routes that await the image host; their store work is pushed to the threadpool.
UPLOADING_ROUTES = {("POST", "/api/posts"), ("POST", "/api/stories")}


def _api_routes(app) -> list[APIRoute]:
    return [route for route in app.routes if isinstance(route, APIRoute) and route.path.startswith("/api")]


def test_store_bound_handlers_run_in_threadpool(app) -> None:
    """Handlers doing blocking store I/O are plain functions, not coroutines."""
    coroutine_routes = {
        (method, route.path)
        for route in _api_routes(app)
        if inspect.iscoroutinefunction(route.endpoint)
        for method in route.methods
    }
    assert coroutine_routes == UPLOADING_ROUTES


def test_every_api_route_is_checked(app) -> None:
    assert len(_api_routes(app)) == 14
