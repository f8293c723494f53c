"""Waste rule evaluation: complexity counts to waste percentage and squares.

Algorithm, per section:

1. **Tier lookup**: each complexity count (facets, hips/valleys,
   penetrations) is matched against its own tier table; the first tier with
   ``min <= value <= max`` contributes its ``add``, no match contributes 0.
2. **Sum and cap**: ``base + adders``, clamped to ``max_percent``.
3. **Final area**: ``area * (1 + waste / 100)``; squares are area / 100.

Rules come from the configuration store and are cached on the evaluator.
If the store is unreachable or holds no rules, the built-in defaults are
used and the result is flagged ``rule_source=built_in_default``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from roofquote.data.cache import SnapshotCache
from roofquote.data.seed import DEFAULT_WASTE_RULES
from roofquote.exceptions import ValidationError
from roofquote.models.enums import RuleSource
from roofquote.models.quote import WasteResult

if TYPE_CHECKING:
    from roofquote.data.repository import ConfigurationStore
    from roofquote.models.roof import RoofComplexity
    from roofquote.models.rules import WasteRule, WasteRuleConfig

logger = logging.getLogger(__name__)

SQFT_PER_SQUARE = 100.0

_CACHE_KEY = "waste_rules"


def adder_for_value(value: float, rules: list[WasteRule]) -> float:
    """Additive percentage for ``value``; first matching tier wins."""
    for rule in rules:
        if rule.matches(value):
            return rule.add
    return 0.0


class WasteRuleEvaluator:
    """Computes waste percentage and post-waste area for roof sections.

    Args:
        store: Configuration store providing the admin waste rules. When
            omitted, the built-in defaults are always used.
    """

    def __init__(self, store: ConfigurationStore | None = None) -> None:
        self._store = store
        self._cache: SnapshotCache[str, WasteRuleConfig] = SnapshotCache()

    def invalidate(self) -> None:
        """Forget the cached rules; the next evaluation reloads them."""
        self._cache.invalidate()

    def get_rules(self) -> tuple[WasteRuleConfig, RuleSource]:
        """Resolve the active waste rules and where they came from."""
        if self._store is None:
            return DEFAULT_WASTE_RULES, RuleSource.BUILT_IN_DEFAULT

        store = self._store
        try:
            rules = self._cache.get_or_load(_CACHE_KEY, store.get_waste_rule_config)
        except Exception:
            logger.warning(
                "Failed to load waste rules from the configuration store; "
                "using built-in defaults",
                exc_info=True,
            )
            return DEFAULT_WASTE_RULES, RuleSource.BUILT_IN_DEFAULT

        if rules is None:
            logger.warning("No waste rules configured; using built-in defaults")
            return DEFAULT_WASTE_RULES, RuleSource.BUILT_IN_DEFAULT
        return rules, RuleSource.STORE

    def evaluate(
        self,
        area_sqft: float,
        complexity: RoofComplexity,
        config: WasteRuleConfig | None = None,
    ) -> WasteResult:
        """Compute waste for one section.

        Args:
            area_sqft: Surface area (already slope-adjusted for sloped
                sections).
            complexity: Facet, hip/valley and penetration counts.
            config: Explicit rules to use instead of the store's.

        Raises:
            ValidationError: If ``area_sqft`` is not positive.
        """
        if not area_sqft > 0:
            msg = f"Area must be positive, got {area_sqft}"
            raise ValidationError(msg)

        if config is not None:
            rules, source = config, RuleSource.EXPLICIT
        else:
            rules, source = self.get_rules()
        return self._compute(area_sqft, complexity, rules, source)

    @staticmethod
    def _compute(
        area_sqft: float,
        complexity: RoofComplexity,
        rules: WasteRuleConfig,
        source: RuleSource,
    ) -> WasteResult:
        base_waste = rules.base_percent
        facets_adder = adder_for_value(complexity.facets, rules.facets)
        hips_valleys_adder = adder_for_value(complexity.hips_valleys, rules.hips_valleys)
        penetrations_adder = adder_for_value(complexity.penetrations, rules.penetrations)

        total = base_waste + facets_adder + hips_valleys_adder + penetrations_adder
        total = min(total, rules.max_percent)

        final_area = area_sqft * (1 + total / 100)
        return WasteResult(
            base_waste=base_waste,
            facets_adder=facets_adder,
            hips_valleys_adder=hips_valleys_adder,
            penetrations_adder=penetrations_adder,
            total_waste_percent=total,
            final_area_sqft=final_area,
            final_squares=final_area / SQFT_PER_SQUARE,
            rule_source=source,
        )

    def evaluate_sections(
        self,
        sections: list[tuple[float, RoofComplexity]],
    ) -> list[WasteResult]:
        """Evaluate several ``(area_sqft, complexity)`` pairs with one rule set."""
        rules, source = self.get_rules()
        for area, _ in sections:
            if not area > 0:
                msg = f"Area must be positive, got {area}"
                raise ValidationError(msg)
        return [
            self._compute(area, complexity, rules, source) for area, complexity in sections
        ]
