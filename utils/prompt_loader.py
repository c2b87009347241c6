"""
Markdown prompt templates for the text-generation collaborator.

Templates live in prompts/<mode>/<name>.md and use str.format placeholders
(literal JSON braces are doubled). Each collaborator request is a pair:
"<name>_system.md" for the system message and "<name>.md" for the request.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, Tuple

PROMPTS_ROOT = Path(__file__).parent.parent / "prompts"


@lru_cache()
def _read_template(path: Path) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


class PromptLoader:
    """Load and format prompt templates"""

    def __init__(self, prompts_dir: Path = PROMPTS_ROOT, mode: str = "idp"):
        """
        Args:
            prompts_dir: Root directory containing prompt templates
            mode: Subdirectory used when load() is not given one
        """
        self.prompts_dir = Path(prompts_dir)
        self.mode = mode

    def load(self, template_name: str, mode: str = None, **kwargs: Any) -> str:
        """
        Load and format a prompt template.

        Raises:
            FileNotFoundError: no such template
            ValueError: a placeholder in the template has no value

        Example:
            PromptLoader().load("skill_extraction", appraisal_data="Competency,Rating\\nSQL,2")
        """
        mode = mode or self.mode
        template_path = self.prompts_dir / mode / f"{template_name}.md"

        if not template_path.exists():
            raise FileNotFoundError(f"Prompt template not found: {template_path}")

        try:
            return _read_template(template_path).format(**kwargs)
        except KeyError as e:
            raise ValueError(
                f"Missing required variable '{e.args[0]}' for template '{template_name}' in mode '{mode}'"
            )

    def load_pair(self, template_name: str, **kwargs: Any) -> Tuple[str, str]:
        """(system prompt, request prompt) for one collaborator call."""
        return self.load(f"{template_name}_system"), self.load(template_name, **kwargs)
