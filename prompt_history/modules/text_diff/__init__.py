"""Line-level text diff engine: calculate, apply, revert and format."""

from prompt_history.modules.text_diff.calculator import calculate
from prompt_history.modules.text_diff.patch import apply, revert
from prompt_history.modules.text_diff.report import format_diff
from prompt_history.modules.text_diff.schemas import DiffObject

__all__ = ["DiffObject", "apply", "calculate", "format_diff", "revert"]
