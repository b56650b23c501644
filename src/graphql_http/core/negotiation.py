"""
Accept header negotiation.

Decides whether a request prefers HTML (GraphiQL) over JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from fastapi import Request

from .params import GraphQLParams


JSON = "application/json"
HTML = "text/html"


@dataclass
class AcceptSpec:
    """Single media range from an Accept header."""
    type: str
    subtype: str
    q: float = 1.0
    order: int = 0
    params: dict[str, str] = field(default_factory=dict)


def parse_accept(header: str) -> list[AcceptSpec]:
    """Parse an Accept header into media ranges, skipping malformed entries."""
    specs = []
    for order, item in enumerate(header.split(",")):
        media_range, *raw_params = item.strip().split(";")
        type_, sep, subtype = media_range.strip().lower().partition("/")
        if not sep or not type_ or not subtype:
            continue

        q = 1.0
        params = {}
        for raw in raw_params:
            name, _, value = raw.partition("=")
            name = name.strip().lower()
            value = value.strip().strip('"')
            if name == "q":
                try:
                    q = float(value)
                except ValueError:
                    q = 0.0
            elif name:
                params[name] = value.lower()

        specs.append(AcceptSpec(type=type_, subtype=subtype, q=q, order=order, params=params))
    return specs


def _specificity(offer: str, spec: AcceptSpec) -> Optional[int]:
    """Match score of an offered type against a media range, None if no match."""
    offer_type, _, offer_subtype = offer.partition("/")
    score = 0

    if spec.type == offer_type:
        score |= 4
    elif spec.type != "*":
        return None

    if spec.subtype == offer_subtype:
        score |= 2
    elif spec.subtype != "*":
        return None

    # Offers carry no parameters, so ranges with parameters never match
    if spec.params:
        return None
    return score | 1


def preferred_media_type(accept: Optional[str], offers: Sequence[str]) -> Optional[str]:
    """
    Return the offer the client prefers most, or None if none is acceptable.

    A missing Accept header accepts anything, so the first offer wins.
    """
    if accept is None:
        return offers[0] if offers else None

    specs = parse_accept(accept)
    ranked = []
    for index, offer in enumerate(offers):
        best = None
        for spec in specs:
            score = _specificity(offer, spec)
            if score is None:
                continue
            key = (score, spec.q, spec.order)
            if best is None or key > best[0]:
                best = (key, spec)
        if best is None:
            continue
        score, spec = best[0][0], best[1]
        if spec.q <= 0:
            continue
        ranked.append((-spec.q, -score, spec.order, index, offer))

    if not ranked:
        return None
    return min(ranked)[-1]


def can_display_graphiql(request: Request, params: GraphQLParams) -> bool:
    """
    Check if GraphiQL can be displayed for this request.

    Not when raw output was requested; otherwise only if the client
    prefers HTML over JSON.
    """
    if params.raw:
        return False
    return preferred_media_type(request.headers.get("accept"), [JSON, HTML]) == HTML
