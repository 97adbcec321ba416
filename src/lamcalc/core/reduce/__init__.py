"""Single-step reducers, one module per strategy."""

from .call_by_name import cbn_step
from .call_by_value import cbv_step
from .normal_order import normal_order_step
from .strategy import (
    CALL_BY_NAME,
    CALL_BY_VALUE,
    NORMAL_ORDER,
    STRATEGIES,
    Strategy,
    get_strategy,
)

__all__ = [
    "cbn_step",
    "cbv_step",
    "normal_order_step",
    "Strategy",
    "STRATEGIES",
    "get_strategy",
    "NORMAL_ORDER",
    "CALL_BY_NAME",
    "CALL_BY_VALUE",
]
