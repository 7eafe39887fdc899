from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional


def _to_decimal(value: Any) -> Optional[Decimal]:
    if value in (None, ""):
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


def _to_int(value: Any) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass
class Ticker:
    pair: str
    last: Optional[Decimal]
    bid: Optional[Decimal]
    ask: Optional[Decimal]
    high: Optional[Decimal]
    low: Optional[Decimal]
    volume: Optional[Decimal]
    timestamp: Optional[int] = None

    @classmethod
    def from_payload(cls, *, pair: str, payload: Dict) -> "Ticker":
        payload = payload if isinstance(payload, dict) else {}
        return cls(
            pair=pair,
            last=_to_decimal(payload.get("last")),
            bid=_to_decimal(payload.get("bid")),
            ask=_to_decimal(payload.get("ask")),
            high=_to_decimal(payload.get("high")),
            low=_to_decimal(payload.get("low")),
            volume=_to_decimal(payload.get("volume")),
            timestamp=_to_int(payload.get("timestamp")),
        )

    @property
    def spread(self) -> Optional[Decimal]:
        if self.bid is None or self.ask is None:
            return None
        return self.ask - self.bid


@dataclass
class OrderBook:
    pair: str
    bids: List[tuple[Decimal, Decimal]] = field(default_factory=list)
    asks: List[tuple[Decimal, Decimal]] = field(default_factory=list)
    timestamp: Optional[int] = None

    @classmethod
    def from_payload(cls, *, pair: str, payload: Dict) -> "OrderBook":
        payload = payload if isinstance(payload, dict) else {}
        return cls(
            pair=pair,
            bids=cls._parse_levels(payload.get("bids")),
            asks=cls._parse_levels(payload.get("asks")),
            timestamp=_to_int(payload.get("timestamp")),
        )

    @staticmethod
    def _parse_levels(levels: Any) -> List[tuple[Decimal, Decimal]]:
        parsed: List[tuple[Decimal, Decimal]] = []
        for level in levels or []:
            if not isinstance(level, (list, tuple)) or len(level) < 2:
                continue
            price = _to_decimal(level[0])
            amount = _to_decimal(level[1])
            if price is None or amount is None:
                continue
            parsed.append((price, amount))
        return parsed


@dataclass
class CurrencyBalance:
    available: Optional[Decimal]
    orders: Optional[Decimal] = None


@dataclass
class AccountBalance:
    username: Optional[str]
    timestamp: Optional[int]
    currencies: Dict[str, CurrencyBalance] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Dict) -> "AccountBalance":
        payload = payload if isinstance(payload, dict) else {}
        currencies: Dict[str, CurrencyBalance] = {}
        for code, entry in payload.items():
            # username/timestamp are scalars; every currency is a nested object
            if not isinstance(entry, dict):
                continue
            currencies[code] = CurrencyBalance(
                available=_to_decimal(entry.get("available")),
                orders=_to_decimal(entry.get("orders")),
            )
        return cls(
            username=payload.get("username"),
            timestamp=_to_int(payload.get("timestamp")),
            currencies=currencies,
        )

    def available(self, currency: str) -> Optional[Decimal]:
        entry = self.currencies.get(currency.upper())
        return entry.available if entry else None


@dataclass
class OpenOrder:
    id: Optional[str]
    type: Optional[str]
    price: Optional[Decimal]
    amount: Optional[Decimal]
    pending: Optional[Decimal]
    time: Optional[int]

    @classmethod
    def from_payload(cls, payload: Dict) -> "OpenOrder":
        payload = payload if isinstance(payload, dict) else {}
        order_id = payload.get("id")
        return cls(
            id=str(order_id) if order_id is not None else None,
            type=payload.get("type"),
            price=_to_decimal(payload.get("price")),
            amount=_to_decimal(payload.get("amount")),
            pending=_to_decimal(payload.get("pending")),
            time=_to_int(payload.get("time")),
        )

    @classmethod
    def list_from_payload(cls, payload: Any) -> List["OpenOrder"]:
        if not isinstance(payload, list):
            return []
        return [cls.from_payload(item) for item in payload]


@dataclass
class PlacedOrder(OpenOrder):
    """Order as echoed back by ``place_order``; same fields as an open order."""
