from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from .config import MIN_GRID_SIZE
from .exceptions import InvalidSessionState, NoActiveSession, SessionAlreadyActive

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Vector3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


def snap_value(value: float, grid_size: float) -> float:
    grid = max(MIN_GRID_SIZE, float(grid_size))
    return round(value / grid) * grid


def snap_to_grid(position: Vector3, grid_size: float) -> Vector3:
    """Snap the planar axes (x, y) to the nearest grid multiple; z is kept."""
    return replace(position, x=snap_value(position.x, grid_size), y=snap_value(position.y, grid_size))


class PlacementState(str, Enum):
    POSITIONING = "positioning"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


@dataclass
class PlacementSession:
    """One in-progress object between "bought" and "placed".

    Positioning -> Confirmed | Cancelled. Both end states are terminal. The
    session knows nothing about cost; charging the ledger is up to the caller.
    """

    catalog_id: str
    position: Vector3
    grid_size: float
    rotation: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0
    state: PlacementState = PlacementState.POSITIONING

    def __post_init__(self) -> None:
        self.grid_size = max(MIN_GRID_SIZE, float(self.grid_size))
        self.position = snap_to_grid(self.position, self.grid_size)

    @property
    def is_positioning(self) -> bool:
        return self.state is PlacementState.POSITIONING

    def _require_positioning(self, op: str) -> None:
        if not self.is_positioning:
            raise InvalidSessionState(f"Cannot {op} a placement that is {self.state.value}")

    def reposition(self, raw: Vector3) -> Vector3:
        self._require_positioning("reposition")
        self.position = snap_to_grid(raw, self.grid_size)
        return self.position

    def rotate(self, rotation: float) -> None:
        self._require_positioning("rotate")
        self.rotation = float(rotation) % 360.0

    def confirm(self) -> None:
        self._require_positioning("confirm")
        self.state = PlacementState.CONFIRMED
        logger.debug("Placement of '%s' confirmed at %s", self.catalog_id, self.position)

    def cancel(self) -> None:
        self._require_positioning("cancel")
        self.state = PlacementState.CANCELLED
        logger.debug("Placement of '%s' cancelled", self.catalog_id)


class PlacementController:
    """Holds at most one active PlacementSession.

    begin() while a session is active is rejected rather than replacing it.
    The session is released with clear() once the owner is done with it.
    """

    def __init__(self, grid_size: float) -> None:
        self.grid_size = max(MIN_GRID_SIZE, float(grid_size))
        self._session: Optional[PlacementSession] = None

    @property
    def session(self) -> Optional[PlacementSession]:
        return self._session

    @property
    def active(self) -> bool:
        return self._session is not None

    def require(self) -> PlacementSession:
        if self._session is None:
            raise NoActiveSession("No placement in progress")
        return self._session

    def begin(self, catalog_id: str, initial_position: Vector3) -> PlacementSession:
        if self._session is not None:
            raise SessionAlreadyActive(
                f"Placement of '{self._session.catalog_id}' is already in progress"
            )
        self._session = PlacementSession(catalog_id=catalog_id, position=initial_position, grid_size=self.grid_size)
        logger.info("Placement of '%s' started at %s", catalog_id, self._session.position)
        return self._session

    def reposition(self, raw: Vector3) -> Vector3:
        return self.require().reposition(raw)

    def confirm(self) -> PlacementSession:
        session = self.require()
        session.confirm()
        return session

    def cancel(self) -> PlacementSession:
        session = self.require()
        session.cancel()
        self._session = None
        return session

    def clear(self) -> None:
        self._session = None
