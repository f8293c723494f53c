"""Configuration store contract and the in-memory implementation."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from roofquote.models.rules import (
        FinancePlan,
        RateCardEntry,
        RateCardKey,
        WasteRuleConfig,
    )

logger = logging.getLogger(__name__)

DEFAULT_FINANCING_DISCLAIMER = (
    "Monthly payment estimates shown are for illustration purposes only and "
    "subject to credit approval. Actual terms, rates, and payments may vary "
    "based on creditworthiness and loan program selected. Contact us for "
    "personalized financing options."
)


class ConfigurationStore(Protocol):
    """Read contract the pricing pipeline needs from the configuration store.

    Implementations may raise any exception when the backing store is
    unreachable; callers decide whether a fallback exists.
    """

    def get_waste_rule_config(self) -> WasteRuleConfig | None: ...

    def get_rate_card_entry(self, key: RateCardKey) -> RateCardEntry | None: ...

    def list_active_finance_plans(self) -> list[FinancePlan]: ...

    def get_financing_disclaimer(self) -> str | None: ...


class InMemoryConfigurationStore:
    """Configuration store backed by in-process dictionaries.

    Admin writes notify registered change listeners, which is how the
    evaluator and engine caches get invalidated.

    Example::

        store = InMemoryConfigurationStore(
            waste_rules=DEFAULT_WASTE_RULES,
            rate_card=build_seed_rate_card(),
            finance_plans=SEED_FINANCE_PLANS,
        )
    """

    def __init__(
        self,
        waste_rules: WasteRuleConfig | None = None,
        rate_card: Iterable[RateCardEntry] = (),
        finance_plans: Iterable[FinancePlan] = (),
        disclaimer: str | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._waste_rules = waste_rules
        self._rate_card: dict[RateCardKey, RateCardEntry] = {
            entry.key: entry for entry in rate_card
        }
        self._finance_plans: dict[str, FinancePlan] = {
            plan.id: plan for plan in finance_plans
        }
        self._disclaimer = disclaimer
        self._listeners: list[Callable[[], None]] = []

    # ------------------------------------------------------------------
    # Read contract
    # ------------------------------------------------------------------

    def get_waste_rule_config(self) -> WasteRuleConfig | None:
        return self._waste_rules

    def get_rate_card_entry(self, key: RateCardKey) -> RateCardEntry | None:
        return self._rate_card.get(key)

    def list_active_finance_plans(self) -> list[FinancePlan]:
        return [plan for plan in self._finance_plans.values() if plan.active]

    def get_financing_disclaimer(self) -> str | None:
        return self._disclaimer or DEFAULT_FINANCING_DISCLAIMER

    # ------------------------------------------------------------------
    # Admin writes
    # ------------------------------------------------------------------

    def add_change_listener(self, listener: Callable[[], None]) -> None:
        """Register a callback run after every admin write."""
        with self._lock:
            self._listeners.append(listener)

    def set_waste_rule_config(self, config: WasteRuleConfig) -> None:
        with self._lock:
            self._waste_rules = config
        self._notify("waste rules")

    def upsert_rate_card_entry(self, entry: RateCardEntry) -> None:
        with self._lock:
            updated = dict(self._rate_card)
            updated[entry.key] = entry
            self._rate_card = updated
        self._notify("rate card")

    def remove_rate_card_entry(self, key: RateCardKey) -> None:
        with self._lock:
            updated = dict(self._rate_card)
            updated.pop(key, None)
            self._rate_card = updated
        self._notify("rate card")

    def add_finance_plan(self, plan: FinancePlan) -> None:
        with self._lock:
            updated = dict(self._finance_plans)
            updated[plan.id] = plan
            self._finance_plans = updated
        self._notify("finance plans")

    def set_financing_disclaimer(self, text: str | None) -> None:
        with self._lock:
            self._disclaimer = text
        self._notify("disclaimer")

    def __len__(self) -> int:
        return len(self._rate_card)

    def _notify(self, what: str) -> None:
        with self._lock:
            listeners = list(self._listeners)
        logger.info("Configuration updated (%s); invalidating %d cache(s)", what, len(listeners))
        for listener in listeners:
            listener()
