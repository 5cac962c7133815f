"""Contacts — a filter-chain routing table.

An audit filter runs for every request, an authentication filter guards
the contact pages, and the endpoints sit behind them. Static resources and
webjars register through the uri pattern their handler declares.

The router only returns the matching routes in order; ``dispatch`` below
is a minimal executor that walks them and stops at the first handler that
does not ask for the next one.

Inspect it from the shell:
    waypoint routes app:router
    waypoint match app:router GET /contact/3
    waypoint url app:router contact id=3
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from waypoint import Route, RouteGroup, Router

log = logging.getLogger("contacts")

router = Router()

# Handlers return NEXT to continue the chain.
NEXT = object()


@dataclass(slots=True)
class Exchange:
    """Per-request state handed to every handler in the chain."""

    method: str
    path: str
    session: dict[str, Any] = field(default_factory=dict)
    params: dict[str, str] = field(default_factory=dict)
    trail: list[str] = field(default_factory=list)


class PublicResourceHandler:
    uri_pattern = "/public/{path: .*}"

    def __call__(self, exchange: Exchange) -> str:
        return f"public:{exchange.params['path']}"


class WebjarsResourceHandler:
    uri_pattern = "/webjars/{path: .*}"

    def __call__(self, exchange: Exchange) -> str:
        return f"webjar:{exchange.params['path']}"


_contacts: dict[str, str] = {"1": "Ana", "2": "Radu", "3": "Ioana"}


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

router.add_route(Route.resource(WebjarsResourceHandler()))
router.add_route(Route.resource(PublicResourceHandler()))


@router.route("/.*", methods=["ALL"])
def audit(exchange: Exchange) -> object:
    log.info("Request for %s '%s'", exchange.method, exchange.path)
    exchange.trail.append("audit")
    return NEXT


@router.route("/contact.*")
def authenticate(exchange: Exchange) -> object:
    exchange.trail.append("authenticate")
    if "username" not in exchange.session:
        return f"redirect:{router.uri_for('login', {'next': exchange.path})}"
    return NEXT


@router.route("/login", name="login")
def login_page(exchange: Exchange) -> str:
    return "login form"


@router.route("/", name="home")
def home(exchange: Exchange) -> str:
    return f"redirect:{router.uri_for('contacts')}"


@router.route("/contacts", name="contacts")
def contacts_page(exchange: Exchange) -> str:
    return ", ".join(_contacts.values())


@router.route("/contact/{id: [0-9]+}", name="contact")
def contact_page(exchange: Exchange) -> str:
    return _contacts.get(exchange.params["id"], "unknown contact")


api = RouteGroup("/api")


@api.route("contacts")
def list_contacts(exchange: Exchange) -> list[str]:
    return sorted(_contacts)


member = api.group("contact/{id: [0-9]+}")


@member.route("")
def get_contact(exchange: Exchange) -> dict[str, str]:
    contact_id = exchange.params["id"]
    return {"id": contact_id, "name": _contacts[contact_id]}


@member.route("", methods=["DELETE"])
def delete_contact(exchange: Exchange) -> dict[str, str]:
    _contacts.pop(exchange.params["id"], None)
    return {"deleted": exchange.params["id"]}


router.add_route_group(api)
router.freeze()


# ---------------------------------------------------------------------------
# Executor
# ---------------------------------------------------------------------------


def dispatch(method: str, path: str, session: dict[str, Any] | None = None) -> Any:
    """Run the matching routes in order until one returns a result."""
    exchange = Exchange(method=method, path=path, session=session or {})
    for match in router.find_routes(method, path):
        exchange.params = match.path_params
        result = match.route.handler(exchange)
        if result is not NEXT:
            return result
    return None
