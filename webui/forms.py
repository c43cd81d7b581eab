from dataclasses import dataclass, field

from pydantic import BaseModel


def parse_skills(text: str) -> list[str]:
    """"Go, Rust , C++" -> ["Go", "Rust", "C++"]; blank entries are dropped."""
    if not text:
        return []
    return [skill.strip() for skill in text.split(",") if skill.strip()]


class ResumeFile(BaseModel):
    filename: str
    content: bytes
    content_type: str = "application/pdf"


class ProfileForm(BaseModel):
    fullname: str = ""
    email: str = ""
    phone_number: str = ""
    bio: str = ""
    skills: str = ""  # comma-separated, as typed
    file: ResumeFile | None = None

    @classmethod
    def from_user(cls, user: dict | None) -> "ProfileForm":
        user = user or {}
        profile = user.get("profile") or {}
        return cls(
            fullname=user.get("fullname") or "",
            email=user.get("email") or "",
            phone_number=user.get("phone_number") or "",
            bio=profile.get("bio") or "",
            skills=", ".join(profile.get("skills") or []),
        )


@dataclass(frozen=True)
class EncodedRequest:
    data: dict[str, str | list[str]]
    files: dict[str, tuple[str, bytes, str]] = field(default_factory=dict)


def encode_profile_update(form: ProfileForm) -> EncodedRequest:
    """Build the form body for POST /user/profile/update.

    `skills` stays a list so it goes out as one repeated field per skill.
    The resume is attached only when the user picked a new file.
    """
    data: dict[str, str | list[str]] = {
        "fullname": form.fullname,
        "email": form.email,
        "phoneNumber": form.phone_number,
        "bio": form.bio,
        "skills": parse_skills(form.skills),
    }
    files = {}
    if form.file is not None:
        files["file"] = (form.file.filename, form.file.content, form.file.content_type)
    return EncodedRequest(data=data, files=files)
