"""Routing request and outcome models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ...models.domain import Place, RouteResult, TransportMode


@dataclass(slots=True, frozen=True)
class RouteRequest:
    trip_id: str
    origin_text: str
    destination_text: str
    transport_mode: TransportMode = TransportMode.DRIVING


@dataclass(slots=True, frozen=True)
class RouteOk:
    result: RouteResult
    source: str


@dataclass(slots=True, frozen=True)
class RouteErr:
    kind: str
    message: str
    origin_text: str
    destination_text: str
    origin: Optional[Place] = None
    destination: Optional[Place] = None


RouteOutcome = Union[RouteOk, RouteErr]
