# mentormatch/utils/skills.py
import json
import logging
from typing import Iterable, List, Optional, Union

from ..constants import BusinessRules

logger = logging.getLogger(__name__)

SkillsInput = Optional[Union[str, Iterable[str]]]

def normalize_skills(value: SkillsInput) -> List[str]:
    """Returns the canonical ordered skill list.

    Accepts a list, a JSON-encoded list, or a comma-delimited string. Entries are
    stripped, empties dropped, and case-insensitive duplicates removed keeping the
    first spelling.
    """
    if value is None:
        return []

    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return []
        if raw.startswith("["):
            try:
                decoded = json.loads(raw)
            except ValueError:
                logger.debug("Skills value looks like JSON but does not parse: %r", raw)
            else:
                if isinstance(decoded, list):
                    return normalize_skills([str(item) for item in decoded])
        items: Iterable[str] = raw.split(BusinessRules.SKILL_DELIMITER)
    else:
        items = value

    skills: List[str] = []
    seen = set()
    for item in items:
        skill = str(item).strip()
        key = skill.casefold()
        if skill and key not in seen:
            seen.add(key)
            skills.append(skill)
    return skills

def has_skill(skills: Iterable[str], wanted: str) -> bool:
    """Whole-token, case-insensitive match: "Java" never matches "JavaScript"."""
    target = wanted.strip().casefold()
    if not target:
        return True
    return any(skill.strip().casefold() == target for skill in normalize_skills(list(skills)))
