"""Identifiers for the supported prompt pairs."""

from enum import Enum


class PromptId(str, Enum):
    """Named prompt pairs; each value is the template base name.

    FORMAT_REPAIR_V1 is reserved for the repair round and takes a single
    ``raw_output`` variable.
    """

    STRUCTURED_JSON_V1 = "structured_json_v1"
    FORMAT_REPAIR_V1 = "format_repair_v1"

    @property
    def base_name(self) -> str:
        return self.value


REPAIR_PROMPT = PromptId.FORMAT_REPAIR_V1
REPAIR_VARIABLE = "raw_output"
