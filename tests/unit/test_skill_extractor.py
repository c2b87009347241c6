"""
Unit tests for SkillExtractor and its fallback policy.

Run: pytest tests/unit/test_skill_extractor.py -v
"""

import pytest

from tools.skill_extractor import FALLBACK_SKILLS, SkillExtractor, fallback_skills, validate_skills
from utils.exceptions import ExternalServiceError, MalformedResponseError

GOOD_REPLY = {
    "technical": ["Write efficient SQL queries", "Automate reports in Python", "Model data in dbt"],
    "functional": ["Plan quarterly roadmaps", "Run effective sprint reviews", "Estimate work accurately"],
    "behavioral": ["Give constructive feedback", "Delegate with clear ownership", "Present to executives"],
}


def _assert_three_per_category(skills):
    assert set(skills) == {"technical", "functional", "behavioral"}
    for names in skills.values():
        assert len(names) == 3
        assert all(isinstance(n, str) and n for n in names)


class TestSkillExtractor:

    def test_returns_collaborator_skills(self, fake_llm):
        extractor = SkillExtractor(llm_service=fake_llm(response=GOOD_REPLY))
        assert extractor.extract_skills("Rating,Feedback\n2,needs SQL") == GOOD_REPLY

    def test_appraisal_text_embedded_in_prompt(self, fake_llm):
        llm = fake_llm(response=GOOD_REPLY)
        SkillExtractor(llm_service=llm).extract_skills("Competency,Rating\nSQL,2")
        assert "Competency,Rating\nSQL,2" in llm.calls[0]["human_prompt"]

    @pytest.mark.parametrize("error", [
        ExternalServiceError("connection refused"),
        MalformedResponseError("Reply is not valid JSON"),
    ])
    def test_collaborator_failure_returns_fallback(self, fake_llm, error):
        skills = SkillExtractor(llm_service=fake_llm(error=error)).extract_skills("anything")

        assert skills == FALLBACK_SKILLS
        _assert_three_per_category(skills)

    @pytest.mark.parametrize("reply", [
        None,
        [],
        {"technical": ["a", "b", "c"]},
        {**GOOD_REPLY, "technical": ["only", "two"]},
        {**GOOD_REPLY, "functional": ["a", "b", "c", "d"]},
        {**GOOD_REPLY, "behavioral": ["a", "", "c"]},
        {**GOOD_REPLY, "behavioral": ["a", 2, "c"]},
        {**GOOD_REPLY, "technical": "a, b, c"},
    ])
    def test_wrong_shape_returns_fallback(self, fake_llm, reply):
        skills = SkillExtractor(llm_service=fake_llm(response=reply)).extract_skills("anything")
        assert skills == FALLBACK_SKILLS

    def test_empty_input_still_yields_skills(self, fake_llm):
        skills = SkillExtractor(llm_service=fake_llm(error=ExternalServiceError("down"))).extract_skills("")
        _assert_three_per_category(skills)

    def test_fallback_is_a_copy(self, fake_llm):
        extractor = SkillExtractor(llm_service=fake_llm(error=ExternalServiceError("down")))
        skills = extractor.extract_skills("x")
        skills["technical"].append("mutated")

        assert len(fallback_skills()["technical"]) == 3


class TestValidateSkills:

    def test_strips_whitespace(self):
        reply = {k: [f"  {n}  " for n in v] for k, v in GOOD_REPLY.items()}
        assert validate_skills(reply) == GOOD_REPLY

    def test_extra_keys_ignored(self):
        assert validate_skills({**GOOD_REPLY, "notes": "x"}) == GOOD_REPLY

    def test_missing_category_raises(self):
        with pytest.raises(MalformedResponseError):
            validate_skills({"technical": ["a", "b", "c"], "functional": ["a", "b", "c"]})
