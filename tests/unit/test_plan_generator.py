"""
Unit tests for PlanGenerator, default plans and skill-name matching.

Run: pytest tests/unit/test_plan_generator.py -v
"""

import pytest

from tools.plan_generator import (
    PlanGenerator,
    build_default_plan,
    find_matching_key,
    find_matching_plan,
)
from utils.exceptions import ExternalServiceError, MalformedResponseError


def _generated(title="Generated Course"):
    return {
        "udemy": {"title": title, "duration": "5 hours", "link": "https://udemy.com/course/x"},
        "youtube": {"title": "Generated Video", "link": "https://youtube.com/watch?v=x"},
        "reading": {"title": "Generated Article", "link": "https://example.com/article"},
        "tasks": ["First task", "Second task", "Third task"],
    }


SKILLS = {
    "technical": ["Deep understanding on Data Analysis"],
    "functional": ["Lead cross-functional teams with effective Project Management"],
    "behavioral": ["Communicate clearly and persuasively across all audiences"],
}


# ---------------------------------------------------------------------------
# build_default_plan
# ---------------------------------------------------------------------------

class TestBuildDefaultPlan:

    def test_titles_derive_from_category(self):
        plan = build_default_plan("technical", "Deep understanding on Data Analysis")

        assert plan["udemy"] == {
            "title": "Technical Skills Enhancement Course",
            "duration": "8 hours",
            "link": "https://udemy.com",
        }
        assert plan["youtube"] == {
            "title": "Mastering Technical Skills - Complete Tutorial",
            "link": "https://youtube.com",
        }
        assert plan["reading"] == {
            "title": "Technical Best Practices Guide",
            "link": "https://docs.example.com",
        }

    def test_four_tasks_with_first_three_words(self):
        plan = build_default_plan("behavioral", "Communicate clearly and persuasively")

        assert len(plan["tasks"]) == 4
        assert plan["tasks"][0] == "Complete practical exercise on Communicate clearly and"
        assert plan["tasks"][1:] == [
            "Apply learnings in a real project scenario",
            "Share knowledge with team members",
            "Document key insights and improvements",
        ]

    @pytest.mark.parametrize("name", [
        "Communicate  clearly and persuasively",
        "  Communicate clearly\tand persuasively ",
        "Communicate\nclearly   and",
    ])
    def test_runs_of_whitespace_collapse_in_first_task(self, name):
        plan = build_default_plan("behavioral", name)
        assert plan["tasks"][0] == "Complete practical exercise on Communicate clearly and"

    def test_no_completion_flags(self):
        plan = build_default_plan("functional", "Planning")
        assert not any(key.endswith("Read") for key in plan)

    def test_deterministic(self):
        assert build_default_plan("technical", "SQL") == build_default_plan("technical", "SQL")


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------

class TestFindMatchingKey:

    def test_exact_match_wins_over_earlier_fuzzy_match(self):
        candidates = {"Data Science basics": {}, "Data Analysis": {}}
        assert find_matching_key(candidates, "Data Analysis") == "Data Analysis"

    def test_requested_first_word_in_key(self):
        candidates = {"Advanced Leadership": {}, "Mastering Python for analysts": {}}
        assert find_matching_key(candidates, "Python programming") == "Mastering Python for analysts"

    def test_key_first_word_in_requested_name(self):
        candidates = {"Leadership coaching": {}}
        assert find_matching_key(candidates, "Inspire teams through Leadership") == "Leadership coaching"

    def test_case_insensitive(self):
        candidates = {"PYTHON BASICS": {}}
        assert find_matching_key(candidates, "python programming") == "PYTHON BASICS"

    def test_first_match_in_insertion_order(self):
        candidates = {"Data pipelines": {}, "Data modeling": {}}
        assert find_matching_key(candidates, "Data Analysis") == "Data pipelines"

        reordered = {"Data modeling": {}, "Data pipelines": {}}
        assert find_matching_key(reordered, "Data Analysis") == "Data modeling"

    def test_no_match(self):
        assert find_matching_key({"Stakeholder Management": {}}, "Python programming") is None

    def test_blank_key_does_not_match_everything(self):
        assert find_matching_key({"": {}, "   ": {}}, "Python programming") is None


class TestFindMatchingPlan:

    def test_strips_flags_and_unknown_keys(self):
        generated = {**_generated(), "udemyRead": True, "tasksRead": [0], "notes": "x"}
        plan = find_matching_plan({"Python": generated}, "Python")
        assert set(plan) == {"udemy", "youtube", "reading", "tasks"}

    def test_bogus_completion_flags_do_not_reject_plan(self):
        generated = {**_generated(), "tasksRead": [0, 0, 9]}
        assert find_matching_plan({"Python": generated}, "Python")["tasks"] == _generated()["tasks"]

    def test_invalid_plan_is_unmatched(self):
        broken = {"udemy": {"title": ""}, "tasks": []}
        assert find_matching_plan({"Python": broken}, "Python") is None

    @pytest.mark.parametrize("candidates", [None, [], "Python"])
    def test_non_mapping_candidates(self, candidates):
        assert find_matching_plan(candidates, "Python") is None


# ---------------------------------------------------------------------------
# PlanGenerator
# ---------------------------------------------------------------------------

class TestPlanGenerator:

    def test_uses_generated_plans_keyed_by_requested_names(self, fake_llm):
        response = {
            "technical": {"Data Analysis mastery": _generated("Pandas in Depth")},
            "functional": {"Lead cross-functional teams with effective Project Management": _generated()},
            "behavioral": {},
        }
        generator = PlanGenerator(llm_service=fake_llm(response=response))

        plans = generator.generate_plans(SKILLS)

        technical = plans["technical"]["Deep understanding on Data Analysis"]
        # "Deep" is not in the key, but the key's first word "Data" is in the name
        assert technical["udemy"]["title"] == "Pandas in Depth"
        assert "Lead cross-functional teams with effective Project Management" in plans["functional"]

    def test_unmatched_skill_gets_default_plan(self, fake_llm):
        response = {"technical": {"Kubernetes operations": _generated()}}
        generator = PlanGenerator(llm_service=fake_llm(response=response))

        plans = generator.generate_plans({"technical": ["Basic Programming in Python"]})

        plan = plans["technical"]["Basic Programming in Python"]
        assert len(plan["tasks"]) == 4
        assert plan["udemy"]["title"] == "Technical Skills Enhancement Course"
        assert plan["youtube"]["title"]
        assert plan["reading"]["title"]

    @pytest.mark.parametrize("error", [
        ExternalServiceError("timeout"),
        MalformedResponseError("not json"),
    ])
    def test_collaborator_failure_falls_back(self, fake_llm, error):
        generator = PlanGenerator(llm_service=fake_llm(error=error))

        plans = generator.generate_plans(SKILLS)

        for category, names in SKILLS.items():
            for name in names:
                assert plans[category][name] == build_default_plan(category, name)

    def test_non_object_reply_falls_back(self, fake_llm):
        generator = PlanGenerator(llm_service=fake_llm(response=["not", "an", "object"]))
        plans = generator.generate_plans(SKILLS)
        assert plans["technical"]["Deep understanding on Data Analysis"]["tasks"][1] == (
            "Apply learnings in a real project scenario"
        )

    def test_every_requested_skill_has_exactly_one_plan(self, fake_llm):
        generator = PlanGenerator(llm_service=fake_llm(response={}))
        plans = generator.generate_plans(SKILLS)
        assert {c: list(p) for c, p in plans.items()} == SKILLS

    def test_single_request_for_the_batch(self, fake_llm):
        llm = fake_llm(response={})
        PlanGenerator(llm_service=llm).generate_plans(SKILLS)

        assert len(llm.calls) == 1
        prompt = llm.calls[0]["human_prompt"]
        for names in SKILLS.values():
            assert names[0] in prompt

    def test_no_skills_skips_collaborator(self, fake_llm):
        llm = fake_llm(response={})
        plans = PlanGenerator(llm_service=llm).generate_plans({})

        assert llm.calls == []
        assert plans == {"technical": {}, "functional": {}, "behavioral": {}}

    def test_deterministic_for_identical_input(self, fake_llm):
        response = {"technical": {"Data modeling": _generated("A"), "Data pipelines": _generated("B")}}
        first = PlanGenerator(llm_service=fake_llm(response=response)).generate_plans({"technical": ["Data Analysis"]})
        second = PlanGenerator(llm_service=fake_llm(response=response)).generate_plans({"technical": ["Data Analysis"]})

        assert first == second
        assert first["technical"]["Data Analysis"]["udemy"]["title"] == "A"
