"""
Unit tests for PromptLoader.

Run: pytest tests/unit/test_prompt_loader.py -v
"""

import pytest

from utils.prompt_loader import PromptLoader


class TestPromptLoader:

    def test_load_pair_formats_request_only(self):
        system_prompt, human_prompt = PromptLoader().load_pair(
            "plan_generation",
            technical="SQL",
            functional="Roadmaps",
            behavioral="Feedback",
        )

        assert system_prompt
        assert "Technical: SQL" in human_prompt
        assert "Behavioral: Feedback" in human_prompt
        # doubled braces become literal JSON braces
        assert '"udemy": {' in human_prompt

    def test_missing_variable(self):
        with pytest.raises(ValueError, match="appraisal_data"):
            PromptLoader().load("skill_extraction")

    def test_missing_template(self):
        with pytest.raises(FileNotFoundError):
            PromptLoader().load("does_not_exist")

    def test_custom_directory(self, tmp_path):
        (tmp_path / "idp").mkdir()
        (tmp_path / "idp" / "greeting.md").write_text("Hello {name}", encoding="utf-8")

        assert PromptLoader(prompts_dir=tmp_path).load("greeting", name="Ada") == "Hello Ada"
