"""Points scoring engine - declarative rule evaluation"""

import math
import sys
from typing import Any, Dict, List, Mapping, Optional

from airdrop_estimator.domain.exceptions import RuleConfigurationError
from airdrop_estimator.domain.models import (
    BooleanRule,
    Category,
    MultiplierRule,
    Rule,
    RuleDetail,
    ScoringConfig,
    ScoringResult,
    SumRule,
    Tier,
    TieredRule,
    TimeWeightedRule,
)


def clamp_cap(score: float, cap: Optional[float]) -> float:
    """Apply a score ceiling if the rule declares one"""
    return min(score, cap) if cap is not None else score


def eval_tiered(value: float, tiers: List[Tier]) -> float:
    """
    Progressive (banded) scoring.

    Each band covers (lower, upper]: lower is the tier's explicit `gt` or the
    previous band's upper bound (0 for the first band), upper is `lte` or
    unbounded. The part of `value` inside each band is scored at that band's
    rate until the whole value has been allocated.

    Example:
        tiers = [Tier(1, lte=100), Tier(0.5, lte=1000), Tier(0.1)]
        eval_tiered(300, tiers) = 100 * 1 + 200 * 0.5 = 200
    """
    remaining = value
    last_bound = 0.0
    score = 0.0

    for tier in tiers:
        lower = tier.gt if tier.gt is not None else last_bound
        upper = tier.lte if tier.lte is not None else math.inf
        if remaining <= 0:
            break

        width = max(0.0, min(value, upper) - lower)
        if width > 0:
            score += width * tier.score_per_unit
            remaining -= width

        last_bound = upper

    # Degenerate single-tier config: score the whole value at its rate
    if score == 0 and len(tiers) == 1:
        score = value * tiers[0].score_per_unit

    return score


def _finite(value: float) -> float:
    """Saturate overflow at the largest float; NaN counts as 0"""
    if math.isnan(value):
        return 0.0
    return max(-sys.float_info.max, min(sys.float_info.max, value))


def _number(inputs: Mapping[str, Any], key: str) -> float:
    value = inputs.get(key)
    return 0.0 if value is None else _finite(float(value))


def _round_half_up(value: float) -> int:
    return int(math.floor(_finite(value) + 0.5))


def compute_score(config: ScoringConfig, inputs: Mapping[str, Any]) -> ScoringResult:
    """
    Main entry point: evaluate every rule in order and combine.

    Non-multiplier rules add to the base score and their category subtotal.
    Multiplier rules fold into a running product applied to the base score
    at the end. Missing inputs count as 0 (or False for boolean rules).
    Every intermediate value saturates at the largest finite float, so huge
    inputs yield a huge total instead of an overflow.
    """
    details: List[RuleDetail] = []
    by_category: Dict[str, float] = {}
    base_score = 0.0
    multiplier = 1.0

    for rule in config.rules:
        if isinstance(rule, MultiplierRule):
            raw = _number(inputs, rule.input_key)
            bound = rule.max if rule.max is not None else math.inf
            effective = _finite(min(bound, rule.base + raw * rule.per_unit))
            multiplier = _finite(multiplier * effective)
            details.append(
                RuleDetail(
                    id=rule.id,
                    label=rule.label,
                    category=rule.category,
                    raw=raw,
                    effective=effective,
                    score=0,
                    explain=f"multiplier={effective:.3f}",
                )
            )
            continue

        if isinstance(rule, TimeWeightedRule):
            amount = max(0.0, _number(inputs, rule.input_key))
            days = max(0.0, _number(inputs, rule.days_key))
            raw = _finite(amount * days)
            score = clamp_cap(raw * rule.rate, rule.cap)
        elif isinstance(rule, TieredRule):
            raw = max(0.0, _number(inputs, rule.input_key))
            score = clamp_cap(eval_tiered(raw, list(rule.tiers)), rule.cap)
        elif isinstance(rule, SumRule):
            raw = max(0.0, _number(inputs, rule.input_key))
            score = clamp_cap(raw * rule.weight, rule.cap)
        elif isinstance(rule, BooleanRule):
            raw = 1.0 if inputs.get(rule.input_key) else 0.0
            score = raw * rule.score
        else:
            # load_scoring_config only ever builds the rule types above
            raise RuleConfigurationError(f"Unsupported rule object: {rule!r}")

        score = _finite(score)
        base_score = _finite(base_score + score)
        by_category[rule.category] = _finite(by_category.get(rule.category, 0) + score)
        details.append(
            RuleDetail(
                id=rule.id,
                label=rule.label,
                category=rule.category,
                raw=raw,
                effective=raw,
                score=score,
                explain=f"score={score:.2f}",
            )
        )

    return ScoringResult(
        version=config.version,
        total=_round_half_up(base_score * multiplier),
        by_category=by_category,
        details=details,
        multiplier=multiplier,
    )


# Configuration loading


def _get(data: Mapping[str, Any], name: str, alias: str | None = None) -> Any:
    """Read a field by its snake_case name or its camelCase alias"""
    if not isinstance(data, Mapping):
        raise RuleConfigurationError(f"Expected an object, got {data!r}")
    if name in data:
        return data[name]
    if alias is not None and alias in data:
        return data[alias]
    raise RuleConfigurationError(f"Rule {data.get('id', '?')!r} is missing field {name!r}")


def _as_number(data: Mapping[str, Any], name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise RuleConfigurationError(f"Rule {data.get('id', '?')!r}: {name!r} must be a number")
    return float(value)


def _required_number(data: Mapping[str, Any], name: str, alias: str | None = None) -> float:
    return _as_number(data, name, _get(data, name, alias))


def _optional_number(data: Mapping[str, Any], name: str) -> Optional[float]:
    value = data.get(name)
    return None if value is None else _as_number(data, name, value)


def _as_list(name: str, value: Any) -> list:
    if not isinstance(value, (list, tuple)):
        raise RuleConfigurationError(f"{name} must be a list, got {type(value).__name__}")
    return list(value)


def _parse_tiers(rule_id: str, raw_tiers: Any) -> tuple:
    """Build tiers and reject unsorted, overlapping or gapped bands"""
    raw_tiers = _as_list(f"Tiered rule {rule_id!r}: tiers", raw_tiers)
    if not raw_tiers:
        raise RuleConfigurationError(f"Tiered rule {rule_id!r} declares no tiers")

    tiers = []
    last_bound = 0.0
    for index, raw in enumerate(raw_tiers):
        tier = Tier(
            score_per_unit=_required_number(raw, "score_per_unit", "scorePerUnit"),
            lte=_optional_number(raw, "lte"),
            gt=_optional_number(raw, "gt"),
        )

        if last_bound == math.inf:
            raise RuleConfigurationError(f"Tiered rule {rule_id!r}: only the last tier may be unbounded")

        lower = tier.gt if tier.gt is not None else last_bound
        if index == 0 and lower < 0:
            raise RuleConfigurationError(f"Tiered rule {rule_id!r}: first tier starts below 0")
        if index > 0 and lower != last_bound:
            raise RuleConfigurationError(
                f"Tiered rule {rule_id!r}: tier {index} starts at {lower}, expected {last_bound}"
            )

        upper = tier.lte if tier.lte is not None else math.inf
        if upper <= lower:
            raise RuleConfigurationError(
                f"Tiered rule {rule_id!r}: tier {index} upper bound {upper} is not above {lower}"
            )

        tiers.append(tier)
        last_bound = upper

    return tuple(tiers)


def _parse_rule(data: Mapping[str, Any]) -> Rule:
    common = {
        "id": str(_get(data, "id")),
        "category": str(_get(data, "category")),
        "label": str(data.get("label", data.get("id"))),
        "input_key": str(_get(data, "input_key", "inputKey")),
    }
    rule_type = data.get("type")

    if rule_type == "timeWeighted":
        return TimeWeightedRule(
            **common,
            days_key=str(_get(data, "days_key", "daysKey")),
            rate=_required_number(data, "rate"),
            cap=_optional_number(data, "cap"),
        )
    if rule_type == "tiered":
        return TieredRule(
            **common,
            tiers=_parse_tiers(common["id"], _get(data, "tiers")),
            cap=_optional_number(data, "cap"),
        )
    if rule_type == "sum":
        return SumRule(**common, weight=_required_number(data, "weight"), cap=_optional_number(data, "cap"))
    if rule_type == "boolean":
        return BooleanRule(**common, score=_required_number(data, "score"))
    if rule_type == "multiplier":
        return MultiplierRule(
            **common,
            base=_required_number(data, "base"),
            per_unit=_required_number(data, "per_unit", "perUnit"),
            max=_optional_number(data, "max"),
        )

    raise RuleConfigurationError(f"Rule {common['id']!r} has unknown type {rule_type!r}")


def load_scoring_config(data: Mapping[str, Any]) -> ScoringConfig:
    """
    Validate a plain (JSON-shaped) configuration and build the typed rule set.

    Raises:
        RuleConfigurationError: unknown rule type, missing field, malformed
            tiers, non-list rules/categories/tiers, duplicate rule id, or a
            rule in an undeclared category
    """
    if not isinstance(data, Mapping):
        raise RuleConfigurationError(f"Expected a configuration object, got {type(data).__name__}")

    categories = tuple(
        Category(id=str(_get(c, "id")), label=str(c.get("label", c["id"])))
        for c in _as_list("categories", data.get("categories", []))
    )
    known_categories = {c.id for c in categories}

    rules = []
    seen_ids = set()
    for raw_rule in _as_list("rules", data.get("rules", [])):
        rule = _parse_rule(raw_rule)
        if rule.id in seen_ids:
            raise RuleConfigurationError(f"Duplicate rule id {rule.id!r}")
        if known_categories and rule.category not in known_categories:
            raise RuleConfigurationError(f"Rule {rule.id!r} uses undeclared category {rule.category!r}")
        seen_ids.add(rule.id)
        rules.append(rule)

    return ScoringConfig(version=str(data.get("version", "")), rules=tuple(rules), categories=categories)


DEFAULT_SCORING_CONFIG: Dict[str, Any] = {
    "version": "s4-demo-1",
    "categories": [
        {"id": "holding", "label": "Holding"},
        {"id": "activity", "label": "Activity"},
        {"id": "bonus", "label": "Bonus"},
    ],
    "rules": [
        {
            "type": "timeWeighted",
            "id": "usde_holding",
            "category": "holding",
            "label": "USDe held x days",
            "inputKey": "usde_amount",
            "daysKey": "usde_days",
            "rate": 0.05,
        },
        {
            "type": "tiered",
            "id": "lp_liquidity",
            "category": "activity",
            "label": "LP liquidity",
            "inputKey": "lp_usd",
            "tiers": [
                {"lte": 1_000, "scorePerUnit": 1.0},
                {"lte": 10_000, "scorePerUnit": 0.5},
                {"scorePerUnit": 0.1},
            ],
            "cap": 50_000,
        },
        {
            "type": "sum",
            "id": "swap_volume",
            "category": "activity",
            "label": "Swap volume",
            "inputKey": "swap_usd",
            "weight": 0.02,
            "cap": 10_000,
        },
        {
            "type": "boolean",
            "id": "early_user",
            "category": "bonus",
            "label": "Early user",
            "inputKey": "is_early_user",
            "score": 50,
        },
        {
            "type": "multiplier",
            "id": "lock_boost",
            "category": "bonus",
            "label": "Locked sENA boost",
            "inputKey": "locked_sena_months",
            "base": 1,
            "perUnit": 0.1,
            "max": 2,
        },
    ],
}
