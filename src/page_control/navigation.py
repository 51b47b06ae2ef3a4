"""Console sidebar definition and its flattening into grantable pages.

The sidebar is a forest of ``{title|name, url, items?}`` nodes. Group headers
carry the ``"#"`` url and are never grantable themselves, but their children
are. :func:`build_catalog` walks the forest depth first, pre-order, and keeps
the order it finds: that order is what the administrator sees in the page
picker and the order in which bulk grants are generated.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Union

from .models import CatalogEntry, NavigationNode

NavigationInput = Union[NavigationNode, Mapping[str, Any]]

CONSOLE_NAVIGATION: dict[str, list[dict[str, Any]]] = {
    "navMain": [
        {
            "title": "Master",
            "url": "#",
            "items": [
                {"title": "Company", "url": "/master/branch"},
                {"title": "State", "url": "/master/state"},
                {"title": "Bank", "url": "/master/bank"},
                {"title": "Buyer", "url": "/master/buyer"},
                {"title": "Scheme", "url": "/master/scheme"},
                {"title": "Country", "url": "/master/country"},
                {"title": "Container Size", "url": "/master/containersize"},
                {"title": "Payment TermsC", "url": "/master/paymentTermC"},
                {"title": "Bag Type", "url": "/master/bagType"},
                {"title": "Item", "url": "/master/item"},
                {"title": "Marking", "url": "/master/marking"},
                {"title": "Port of Loading", "url": "/master/portofloading"},
                {"title": "GR Code", "url": "/master/grcode"},
                {"title": "Product", "url": "/master/product"},
                {"title": "Shipper", "url": "/master/shipper"},
                {"title": "Vessel", "url": "/master/vessel"},
                {"title": "Pre Recepits", "url": "/master/prerecepits"},
                {"title": "Order Type", "url": "/master/order-type"},
                {"title": "Item Category", "url": "/master/item-category"},
                {"title": "Item Packing", "url": "/master/item-packing"},
                {"title": "Item Box", "url": "/master/item-box"},
            ],
        },
        {
            "title": "Reports",
            "url": "#",
            "items": [
                {"title": "BuyerR", "url": "/report/buyer-report"},
                {"title": "Sales Accounts", "url": "/report/sales-account-form"},
                {"title": "DutyDrawBack", "url": "/report/duty-drawback"},
            ],
        },
    ],
    "projects": [
        {"name": "Dashboard", "url": "/home"},
        {"name": "Contract", "url": "/contract"},
        {"name": "Invoice", "url": "/invoice"},
    ],
    "userManagement": [
        {"name": "User Management", "url": "/userManagement"},
        {"name": "UserType", "url": "/user-type"},
    ],
}

SECTION_ORDER: tuple[str, ...] = ("navMain", "projects", "userManagement")

_HEADER_FIELDS = ("title", "name", "url")


def navigation_forest(
    sections: Mapping[str, Sequence[NavigationInput]] | None = None,
    order: Sequence[str] = SECTION_ORDER,
) -> list[NavigationInput]:
    """Concatenate sidebar sections into one forest, sections in ``order`` first."""
    sections = CONSOLE_NAVIGATION if sections is None else sections
    names = [name for name in order if name in sections]
    names += [name for name in sections if name not in names]
    return [node for name in names for node in sections[name]]


def build_catalog(root: Sequence[NavigationInput]) -> list[CatalogEntry]:
    # Explicit stack, and nodes are validated one level at a time, so depth is unbounded.
    catalog: list[CatalogEntry] = []
    stack = list(reversed(root))
    while stack:
        node, children = _split(stack.pop())
        if node.is_navigable:
            catalog.append(CatalogEntry(title=node.label or node.url, url=node.url))
        stack.extend(reversed(children))
    return catalog


def console_catalog() -> list[CatalogEntry]:
    return build_catalog(navigation_forest())


def _split(node: NavigationInput) -> tuple[NavigationNode, Sequence[NavigationInput]]:
    if isinstance(node, NavigationNode):
        return node, node.items
    if not isinstance(node, Mapping):
        raise ValueError(f"Navigation node must be an object, got {type(node).__name__}")
    children = node.get("items") or []
    if not isinstance(children, (list, tuple)):
        raise ValueError(f"Navigation items must be a list, got {type(children).__name__}")
    header = NavigationNode.model_validate({key: node[key] for key in _HEADER_FIELDS if key in node})
    return header, children
