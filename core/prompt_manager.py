from pathlib import Path
from typing import Any, Dict, Optional, Union

import jinja2
import yaml


class PromptManager:
    """Dot-path access to a YAML catalogue of instructions and tool descriptions."""

    def __init__(self, file_path: Union[str, Path], section_path: Optional[str] = None) -> None:
        """Load prompts from a YAML file.

        Args:
            file_path: Path to the YAML file containing prompts
            section_path: Section of the file to scope lookups to (dot notation)

        Raises:
            FileNotFoundError: If the prompt file doesn't exist
            yaml.YAMLError: If the YAML file is malformed
            ValueError: If the section is not found in the prompts file
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"Prompt file not found: {file_path}")

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                self._prompt_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Failed to parse YAML file {file_path}: {e}")

        if section_path:
            self._prompt_data = self._traverse_path(self._prompt_data, section_path)

        self._template_cache: Dict[str, jinja2.Template] = {}

    def _traverse_path(self, data: Any, path: str) -> Any:
        current = data
        try:
            for key in path.split("."):
                current = current[key]
        except (KeyError, TypeError):
            raise ValueError(f"Path '{path}' not found in prompts data")
        return current

    def get_text(self, prompt_name: str) -> str:
        """Return a prompt verbatim, stripped of surrounding whitespace.

        Raises:
            ValueError: If the prompt is missing or is not a string
        """
        try:
            prompt = self._traverse_path(self._prompt_data, prompt_name)
        except ValueError as e:
            raise ValueError(f"Prompt '{prompt_name}' not found: {e}")
        if not isinstance(prompt, str):
            raise ValueError(f"Prompt '{prompt_name}' is not a string")
        return prompt.strip()

    def render_prompt(self, prompt_name: str, **prompt_args) -> str:
        """Render a prompt template with given parameters.

        Raises:
            ValueError: If the prompt is missing or is not a string
            jinja2.TemplateError: If template rendering fails
        """
        template_str = self.get_text(prompt_name)
        if template_str not in self._template_cache:
            self._template_cache[template_str] = jinja2.Template(
                template_str, undefined=jinja2.StrictUndefined
            )
        return self._template_cache[template_str].render(**prompt_args)
