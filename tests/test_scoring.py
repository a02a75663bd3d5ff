"""
tests/test_scoring.py — Unit tests for the deterministic rule layer and score merge.

Pure functions only; no DB or LLM involved.
"""

from types import SimpleNamespace

import pytest

from app.db.models import Intent
from app.services.scoring import (
    RuleScore,
    ai_points,
    completeness_score,
    compose_reasoning,
    final_score,
    industry_score,
    role_score,
    rule_score,
)


def make_lead(**overrides):
    fields = {
        "name": "Ava Patel",
        "role": "VP Sales",
        "company": "FlowMetrics",
        "industry": "FinTech",
        "location": "Austin",
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


# ── role_score ────────────────────────────────────────────────────────────────

class TestRoleScore:
    @pytest.mark.parametrize("role", ["CEO", "Co-Founder & CEO", "VP Marketing", "Head of Growth", "Owner"])
    def test_decision_makers_score_20(self, role):
        assert role_score(role) == 20

    @pytest.mark.parametrize("role", ["Senior Engineer", "Growth Manager", "Team Lead"])
    def test_influencers_score_10(self, role):
        assert role_score(role) == 10

    def test_unrelated_role_scores_0(self):
        assert role_score("Accountant") == 0

    def test_decision_maker_wins_over_influencer(self):
        # "manager" and "director" both present — no accumulation
        assert role_score("Director, Product Manager") == 20

    def test_blank_and_none(self):
        assert role_score("") == 0
        assert role_score(None) == 0


# ── industry_score ────────────────────────────────────────────────────────────

class TestIndustryScore:
    def test_exact_match_case_insensitive(self):
        assert industry_score("FinTech", ["saas", "fintech"]) == 20

    def test_exact_match_trims_whitespace(self):
        assert industry_score("  SaaS ", [" saas "]) == 20

    def test_substring_match(self):
        assert industry_score("B2B SaaS", ["saas"]) == 10

    def test_ideal_contains_industry(self):
        assert industry_score("health", ["healthcare"]) == 10

    def test_token_overlap(self):
        assert industry_score("retail analytics", ["data analytics platforms"]) == 10

    def test_no_overlap(self):
        assert industry_score("Construction", ["saas", "fintech"]) == 0

    def test_blank_industry_always_zero(self):
        assert industry_score("", ["saas"]) == 0
        assert industry_score("   ", ["saas"]) == 0
        assert industry_score(None, ["saas"]) == 0

    def test_blank_ideal_use_case_ignored(self):
        assert industry_score("Construction", ["", "  "]) == 0

    def test_no_ideal_use_cases(self):
        assert industry_score("SaaS", []) == 0


# ── completeness_score ────────────────────────────────────────────────────────

class TestCompletenessScore:
    def test_all_fields_present(self):
        assert completeness_score(make_lead()) == 10

    @pytest.mark.parametrize("field", ["name", "role", "company", "industry", "location"])
    def test_blank_field_scores_zero(self, field):
        assert completeness_score(make_lead(**{field: "   "})) == 0

    def test_none_field_scores_zero(self):
        assert completeness_score(make_lead(location=None)) == 0

    def test_bio_not_required(self):
        assert completeness_score(make_lead(linkedin_bio=None)) == 10


# ── merge ─────────────────────────────────────────────────────────────────────

class TestMerge:
    def test_rule_score_scenario_totals_50(self):
        rules = rule_score(make_lead(), ["saas", "fintech"])
        assert rules == RuleScore(role=20, industry=20, completeness=10)
        assert rules.total == 50

    def test_ai_points(self):
        assert ai_points(Intent.HIGH) == 50
        assert ai_points(Intent.MEDIUM) == 30
        assert ai_points(Intent.LOW) == 10

    def test_max_rules_plus_high_is_exactly_100(self):
        assert final_score(RuleScore(20, 20, 10), Intent.HIGH) == 100

    def test_final_score_always_in_range(self):
        for role in (0, 10, 20):
            for industry in (0, 10, 20):
                for completeness in (0, 10):
                    for intent in Intent:
                        score = final_score(RuleScore(role, industry, completeness), intent)
                        assert 0 <= score <= 100

    def test_final_score_clamps_above_100(self):
        assert final_score(RuleScore(40, 40, 10), Intent.HIGH) == 100

    def test_zero_rules_low_intent(self):
        assert final_score(RuleScore(0, 0, 0), Intent.LOW) == 10

    def test_compose_reasoning_format(self):
        text = compose_reasoning(RuleScore(20, 10, 0), "Strong fit.")
        assert text == "Rule: role 20, industry 10, completeness 0. AI: Strong fit."
