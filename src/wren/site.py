"""The site: informational pages, health check, static assets.

Every page renders through the configured default layout. The health
check and the not-found responder answer with a compact JSON body when
the request declares ``Content-Type: application/json``, and with the
rendered HTML page otherwise.

Routes::

    GET /                     home
    GET /healthz              {"message":"ok"} or the health page
    GET /privacy-policy       privacy policy
    GET /terms-of-service     terms of service
    GET /robots.txt           public/robots.txt via the asset guard
    GET /favicon.ico          public/favicon.ico via the asset guard
    GET <static_url>/...      asset guard
    anything else             {"message":"not found"} or the not-found page, 404
"""

from wren.app import App
from wren.config import AppConfig
from wren.http.request import Request
from wren.http.response import AnyResponse
from wren.negotiation import json_response, wants_json

HEALTH_OK = {"message": "ok"}
NOT_FOUND = {"message": "not found"}


def register_site(app: App) -> App:
    """Register the site's routes and not-found handler on *app*."""
    layout = app.config.default_layout

    def page(name: str) -> AnyResponse:
        return app.renderer.render(layout, name)

    @app.route("/", name="home")
    def home() -> AnyResponse:
        return page("home")

    @app.route("/healthz", name="healthz")
    def healthz(request: Request) -> AnyResponse:
        if wants_json(request):
            return json_response(HEALTH_OK)
        return page("healthz")

    @app.route("/privacy-policy", name="privacy-policy")
    def privacy_policy() -> AnyResponse:
        return page("privacy-policy")

    @app.route("/terms-of-service", name="terms-of-service")
    def terms_of_service() -> AnyResponse:
        return page("terms-of-service")

    @app.route("/robots.txt", name="robots")
    async def robots() -> AnyResponse:
        return await app.guard("robots.txt")

    @app.route("/favicon.ico", name="favicon")
    async def favicon() -> AnyResponse:
        return await app.guard("favicon.ico")

    async def assets(path: str = "") -> AnyResponse:
        return await app.guard(path)

    prefix = "/" + app.config.static_url.strip("/")
    if prefix == "/":
        # Explicit routes above still win over the root catch-all
        app.route("/{path:path}", name="static")(assets)
    else:
        app.route(prefix, name="static-root")(assets)
        app.route(prefix + "/{path:path}", name="static")(assets)

    @app.error(404)
    def not_found(request: Request) -> AnyResponse:
        if wants_json(request):
            return json_response(NOT_FOUND, status=404)
        return app.renderer.render(layout, "not-found", status=404)

    return app


def create_app(config: AppConfig | None = None) -> App:
    """Build the site app from *config*, or from the environment."""
    return register_site(App(config if config is not None else AppConfig.from_env()))
