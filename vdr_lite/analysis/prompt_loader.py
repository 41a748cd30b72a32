from pathlib import Path

from vdr_lite.analysis.exceptions import PromptLoadError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"

DOCUMENT_ANALYSIS_SYSTEM = "document_analysis_system.txt"
DOCUMENT_ANALYSIS_USER = "document_analysis_user.txt"
SUMMARY_SYSTEM = "summary_system.txt"
SUMMARY_USER = "summary_user.txt"


def load_prompt(name: str, directory: Path | None = None) -> str:
    """Load a prompt template from the prompts directory.

    Args:
        name: File name of the prompt asset.
        directory: Directory holding prompt assets.
                   Defaults to the bundled prompts/ directory.

    Returns:
        The template text with surrounding whitespace removed.

    Raises:
        PromptLoadError: if the file cannot be read.
    """
    path = (directory or _DEFAULT_PROMPT_DIR) / name
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise PromptLoadError(f"Failed to load prompt file '{name}': {exc}") from exc


def render_prompt(template: str, **values: str) -> str:
    """Fill named `{placeholders}`; a placeholder without a value is an error.

    Raises:
        PromptLoadError: if the template references an unknown placeholder.
    """
    try:
        return template.format_map(values)
    except (KeyError, IndexError, ValueError) as exc:
        raise PromptLoadError(f"Failed to render prompt template: {exc!r}") from exc
