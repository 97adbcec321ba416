"""Named reduction strategies selectable at runtime."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from types import MappingProxyType

from ...errors import UnknownStrategyError
from ..ast import Term
from .call_by_name import cbn_step
from .call_by_value import cbv_step
from .normal_order import normal_order_step

NORMAL_ORDER = "normal-order"
CALL_BY_NAME = "call-by-name"
CALL_BY_VALUE = "call-by-value"


@dataclass(frozen=True)
class Strategy:
    """A single-step reducer together with its user-facing identifier."""

    name: str
    step: Callable[[Term], Term | None]

    def __call__(self, term: Term) -> Term | None:
        return self.step(term)

    def __str__(self) -> str:
        return self.name


STRATEGIES: MappingProxyType[str, Strategy] = MappingProxyType(
    {
        NORMAL_ORDER: Strategy(NORMAL_ORDER, normal_order_step),
        CALL_BY_NAME: Strategy(CALL_BY_NAME, cbn_step),
        CALL_BY_VALUE: Strategy(CALL_BY_VALUE, cbv_step),
    }
)


def get_strategy(name: str) -> Strategy:
    try:
        return STRATEGIES[name]
    except KeyError:
        raise UnknownStrategyError(name) from None
