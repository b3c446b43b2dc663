import json
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

_DESCRIPTION_RE = re.compile(r"## Description\s*\n(.*?)(?=\n##|$)", re.S)
_IMPROVEMENTS_RE = re.compile(r"## Improvements\s*\n(.*?)(?=\n##|$)", re.S)
_CODE_RE = re.compile(r"```(?:typescript|tsx|jsx)?\s*\n(.*?)\n```", re.S)


@dataclass
class ParsedCode:
    code: str = ""
    description: str = ""
    improvements: list[str] = field(default_factory=list)


class CodeResponseParser(ABC):
    @abstractmethod
    def parse(self, response: str) -> ParsedCode: ...


class MarkdownSectionParser(CodeResponseParser):
    """
    Parses replies laid out as ``## Description``, ``## Improvements`` (dash
    bullets) and a fenced code block. Missing sections are left empty.
    """

    def parse(self, response: str) -> ParsedCode:
        parsed = ParsedCode()

        match = _DESCRIPTION_RE.search(response)
        if match:
            parsed.description = match.group(1).strip()

        match = _IMPROVEMENTS_RE.search(response)
        if match:
            parsed.improvements = [
                re.sub(r"^-\s*", "", line.strip()).strip()
                for line in match.group(1).split("\n")
                if line.strip().startswith("-")
            ]

        match = _CODE_RE.search(response)
        if match:
            parsed.code = match.group(1).strip()

        return parsed


def extract_json_object(text: str) -> dict:
    """Pull the first JSON object out of a model reply, fenced or not."""
    text = text.strip()
    fenced = re.search(r"```(?:json)?\s*\n(.*?)\n```", text, re.S)
    if fenced:
        text = fenced.group(1).strip()

    start = text.find("{")
    if start == -1:
        raise ValueError("No JSON object in response")
    obj, _ = json.JSONDecoder().raw_decode(text[start:])
    if not isinstance(obj, dict):
        raise ValueError("Response JSON is not an object")
    return obj
