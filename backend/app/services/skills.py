def parse_skills(text: str) -> list[str]:
    """Split a comma-separated skills string into a trimmed list.

    "Go, Rust , C++" -> ["Go", "Rust", "C++"]. Empty pieces are dropped.
    """
    if not text:
        return []
    return [skill.strip() for skill in text.split(",") if skill.strip()]


def normalize_skills(values: list[str]) -> list[str]:
    """Flatten repeated form values, any of which may itself be comma-joined."""
    skills = []
    for value in values:
        skills.extend(parse_skills(value))
    return skills
