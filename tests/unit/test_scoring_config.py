"""Unit tests for scoring configuration loading and validation"""

import pytest

from airdrop_estimator.domain.exceptions import RuleConfigurationError
from airdrop_estimator.domain.models import BooleanRule, MultiplierRule, Tier, TieredRule, TimeWeightedRule
from airdrop_estimator.domain.scoring import DEFAULT_SCORING_CONFIG, load_scoring_config


def _tiered(tiers):
    return {
        "version": "v",
        "rules": [{"type": "tiered", "id": "t", "category": "c", "label": "T", "inputKey": "x", "tiers": tiers}],
    }


def test_load_scoring_config_builds_typed_rules(demo_config_data):
    config = load_scoring_config(demo_config_data)

    assert config.version == "test-1"
    assert [c.id for c in config.categories] == ["holding", "activity", "bonus"]
    assert isinstance(config.rules[0], TimeWeightedRule)
    assert config.rules[0].days_key == "days"
    assert config.rules[0].cap == 300
    assert isinstance(config.rules[1], TieredRule)
    assert config.rules[1].tiers[-1] == Tier(score_per_unit=0.1)
    assert isinstance(config.rules[3], BooleanRule)
    assert isinstance(config.rules[4], MultiplierRule)
    assert config.rules[4].per_unit == 0.1


def test_load_scoring_config_accepts_snake_case():
    config = load_scoring_config(
        {
            "version": "v",
            "rules": [
                {
                    "type": "multiplier",
                    "id": "m",
                    "category": "bonus",
                    "label": "M",
                    "input_key": "x",
                    "base": 1,
                    "per_unit": 0.2,
                }
            ],
        }
    )

    assert config.rules[0].input_key == "x"
    assert config.rules[0].max is None


def test_default_config_is_valid():
    config = load_scoring_config(DEFAULT_SCORING_CONFIG)
    assert config.version == "s4-demo-1"
    assert len(config.rules) == 5


def test_unknown_rule_type_rejected():
    data = {"version": "v", "rules": [{"type": "exponential", "id": "e", "category": "c", "inputKey": "x"}]}
    with pytest.raises(RuleConfigurationError, match="unknown type"):
        load_scoring_config(data)


def test_missing_field_rejected():
    data = {"version": "v", "rules": [{"type": "sum", "id": "s", "category": "c", "inputKey": "x"}]}
    with pytest.raises(RuleConfigurationError, match="weight"):
        load_scoring_config(data)


def test_duplicate_rule_id_rejected():
    rule = {"type": "boolean", "id": "b", "category": "c", "inputKey": "x", "score": 1}
    with pytest.raises(RuleConfigurationError, match="Duplicate"):
        load_scoring_config({"version": "v", "rules": [rule, dict(rule)]})


def test_undeclared_category_rejected():
    data = {
        "version": "v",
        "categories": [{"id": "holding", "label": "Holding"}],
        "rules": [{"type": "boolean", "id": "b", "category": "other", "inputKey": "x", "score": 1}],
    }
    with pytest.raises(RuleConfigurationError, match="undeclared category"):
        load_scoring_config(data)


def test_non_numeric_cap_rejected():
    data = {
        "version": "v",
        "rules": [{"type": "sum", "id": "s", "category": "c", "inputKey": "x", "weight": 1, "cap": "100"}],
    }
    with pytest.raises(RuleConfigurationError, match="cap"):
        load_scoring_config(data)


@pytest.mark.parametrize(
    "tiers",
    [
        [],
        [{"lte": 1000, "scorePerUnit": 1}, {"lte": 100, "scorePerUnit": 0.5}],
        [{"scorePerUnit": 1}, {"lte": 100, "scorePerUnit": 0.5}],
        [{"lte": 100, "scorePerUnit": 1}, {"gt": 50, "lte": 200, "scorePerUnit": 0.5}],
        [{"lte": 100, "scorePerUnit": 1}, {"gt": 150, "lte": 200, "scorePerUnit": 0.5}],
        [{"gt": -10, "lte": 100, "scorePerUnit": 1}],
        5,
        "tiers",
        [5],
    ],
    ids=["empty", "descending", "unbounded-not-last", "overlap", "gap", "negative-start", "not-a-list", "string", "non-object-tier"],
)
def test_malformed_tiers_rejected(tiers):
    with pytest.raises(RuleConfigurationError):
        load_scoring_config(_tiered(tiers))


def test_explicit_contiguous_bounds_accepted():
    config = load_scoring_config(
        _tiered([{"gt": 0, "lte": 100, "scorePerUnit": 1}, {"gt": 100, "scorePerUnit": 0.5}])
    )
    assert config.rules[0].tiers[1].gt == 100


@pytest.mark.parametrize(
    "data",
    [
        {"version": "v", "rules": None},
        {"version": "v", "rules": {"id": "r"}},
        {"version": "v", "categories": None, "rules": []},
        {"version": "v", "categories": "holding", "rules": []},
        {"version": "v", "rules": ["boolean"]},
        ["not", "a", "mapping"],
    ],
    ids=["null-rules", "object-rules", "null-categories", "string-categories", "string-rule", "list-config"],
)
def test_non_list_config_fields_rejected(data):
    with pytest.raises(RuleConfigurationError):
        load_scoring_config(data)
