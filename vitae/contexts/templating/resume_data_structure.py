"""
Résumé Data Structure

Typed, immutable representation of the résumé data file. This structure is the
interface between the Intake context (which only parses JSON) and the renderers.

Field names mirror the data file's camelCase keys in snake_case. Optional fields
are explicit: a missing optional key becomes None (or an empty tuple for lists),
while a missing required key raises RenderError naming the dotted field path.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple, TypeVar

from vitae.contexts.templating.exceptions import RenderError

T = TypeVar("T")


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _as_object(raw: Any, path: str) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise RenderError(
            f"Expected an object, got {type(raw).__name__}", field_path=path or "<root>"
        )
    return raw


def _required(raw: Dict[str, Any], key: str, path: str) -> Any:
    field_path = _join(path, key)
    if key not in raw or raw[key] is None:
        raise RenderError("Missing required field", field_path=field_path)
    return raw[key]


def _text(raw: Dict[str, Any], key: str, path: str) -> str:
    value = _required(raw, key, path)
    if not isinstance(value, str):
        raise RenderError(
            f"Expected a string, got {type(value).__name__}", field_path=_join(path, key)
        )
    return value


def _optional_text(raw: Dict[str, Any], key: str, path: str) -> Optional[str]:
    if raw.get(key) is None:
        return None
    return _text(raw, key, path)


def _text_list(raw: Dict[str, Any], key: str, path: str, required: bool = True) -> Tuple[str, ...]:
    if not required and raw.get(key) is None:
        return ()
    value = _required(raw, key, path)
    field_path = _join(path, key)
    if not isinstance(value, list):
        raise RenderError(f"Expected a list, got {type(value).__name__}", field_path=field_path)
    for i, item in enumerate(value):
        if not isinstance(item, str):
            raise RenderError(
                f"Expected a string, got {type(item).__name__}", field_path=f"{field_path}[{i}]"
            )
    return tuple(value)


def _records(
    raw: Dict[str, Any],
    key: str,
    path: str,
    builder: Callable[[Any, str], T],
    required: bool = True,
) -> Tuple[T, ...]:
    if not required and raw.get(key) is None:
        return ()
    value = _required(raw, key, path)
    field_path = _join(path, key)
    if not isinstance(value, list):
        raise RenderError(f"Expected a list, got {type(value).__name__}", field_path=field_path)
    return tuple(builder(item, f"{field_path}[{i}]") for i, item in enumerate(value))


@dataclass(frozen=True)
class Personal:
    name: str
    location: str
    email: str
    phone: str
    linkedin: str
    github: str
    profile_image: str
    headline: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any, path: str = "personal") -> "Personal":
        raw = _as_object(raw, path)
        return cls(
            name=_text(raw, "name", path),
            location=_text(raw, "location", path),
            email=_text(raw, "email", path),
            phone=_text(raw, "phone", path),
            linkedin=_text(raw, "linkedin", path),
            github=_text(raw, "github", path),
            profile_image=_text(raw, "profileImage", path),
            headline=_optional_text(raw, "headline", path),
        )

    @property
    def first_name(self) -> str:
        tokens = self.name.split()
        return tokens[0] if tokens else ""

    @property
    def last_name(self) -> str:
        tokens = self.name.split()
        return tokens[-1] if tokens else ""


@dataclass(frozen=True)
class Summary:
    short: str
    detailed: str

    @classmethod
    def from_dict(cls, raw: Any, path: str = "summary") -> "Summary":
        raw = _as_object(raw, path)
        return cls(short=_text(raw, "short", path), detailed=_text(raw, "detailed", path))


@dataclass(frozen=True)
class ContactLink:
    """A link in one of the contact lists; `download` is set for file links (e.g. the PDF)."""

    icon: str
    url: str
    text: str
    download: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any, path: str) -> "ContactLink":
        raw = _as_object(raw, path)
        return cls(
            icon=_text(raw, "icon", path),
            url=_text(raw, "url", path),
            text=_text(raw, "text", path),
            download=_optional_text(raw, "download", path),
        )


@dataclass(frozen=True)
class Contact:
    primary: Tuple[ContactLink, ...]
    contact: Tuple[ContactLink, ...]
    links: Tuple[ContactLink, ...]

    @classmethod
    def from_dict(cls, raw: Any, path: str = "contact") -> "Contact":
        raw = _as_object(raw, path)
        return cls(
            primary=_records(raw, "primary", path, ContactLink.from_dict),
            contact=_records(raw, "contact", path, ContactLink.from_dict),
            links=_records(raw, "links", path, ContactLink.from_dict),
        )


@dataclass(frozen=True)
class Job:
    title: str
    company: str
    company_url: str
    period: str
    detailed_description: str

    @classmethod
    def from_dict(cls, raw: Any, path: str) -> "Job":
        raw = _as_object(raw, path)
        return cls(
            title=_text(raw, "title", path),
            company=_text(raw, "company", path),
            company_url=_text(raw, "companyUrl", path),
            period=_text(raw, "period", path),
            detailed_description=_text(raw, "detailedDescription", path),
        )


@dataclass(frozen=True)
class Education:
    institution: str
    degree: str
    period: str
    credential_url: Optional[str] = None
    achievements: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, raw: Any, path: str) -> "Education":
        raw = _as_object(raw, path)
        return cls(
            institution=_text(raw, "institution", path),
            degree=_text(raw, "degree", path),
            period=_text(raw, "period", path),
            credential_url=_optional_text(raw, "credentialUrl", path),
            achievements=_text_list(raw, "achievements", path, required=False),
        )


@dataclass(frozen=True)
class Certification:
    name: str
    issuer: str
    period: str
    credential_url: str

    @classmethod
    def from_dict(cls, raw: Any, path: str) -> "Certification":
        raw = _as_object(raw, path)
        return cls(
            name=_text(raw, "name", path),
            issuer=_text(raw, "issuer", path),
            period=_text(raw, "period", path),
            credential_url=_text(raw, "credentialUrl", path),
        )


@dataclass(frozen=True)
class Version:
    version: str
    url: str

    @classmethod
    def from_dict(cls, raw: Any, path: str) -> "Version":
        raw = _as_object(raw, path)
        return cls(version=_text(raw, "version", path), url=_text(raw, "url", path))


@dataclass(frozen=True)
class Collaboration:
    name: str
    url: str
    role: str
    description: str
    versions: Tuple[Version, ...] = ()

    @classmethod
    def from_dict(cls, raw: Any, path: str) -> "Collaboration":
        raw = _as_object(raw, path)
        return cls(
            name=_text(raw, "name", path),
            url=_text(raw, "url", path),
            role=_text(raw, "role", path),
            description=_text(raw, "description", path),
            versions=_records(raw, "versions", path, Version.from_dict, required=False),
        )


@dataclass(frozen=True)
class Interests:
    summary: str
    detailed: Tuple[str, ...]

    @classmethod
    def from_dict(cls, raw: Any, path: str = "interests") -> "Interests":
        raw = _as_object(raw, path)
        return cls(summary=_text(raw, "summary", path), detailed=_text_list(raw, "detailed", path))


@dataclass(frozen=True)
class SocialLink:
    platform: str
    url: str
    icon: str

    @classmethod
    def from_dict(cls, raw: Any, path: str) -> "SocialLink":
        raw = _as_object(raw, path)
        return cls(
            platform=_text(raw, "platform", path),
            url=_text(raw, "url", path),
            icon=_text(raw, "icon", path),
        )


@dataclass(frozen=True)
class Skills:
    leadership: Tuple[str, ...]
    technical: Tuple[str, ...]

    @classmethod
    def from_dict(cls, raw: Any, path: str = "skills") -> "Skills":
        raw = _as_object(raw, path)
        return cls(
            leadership=_text_list(raw, "leadership", path),
            technical=_text_list(raw, "technical", path),
        )


@dataclass(frozen=True)
class Language:
    language: str
    proficiency: str

    @classmethod
    def from_dict(cls, raw: Any, path: str) -> "Language":
        raw = _as_object(raw, path)
        return cls(language=_text(raw, "language", path), proficiency=_text(raw, "proficiency", path))


@dataclass(frozen=True)
class Meta:
    description: str
    keywords: str
    author: str
    canonical: str
    analytics_id: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any, path: str = "meta") -> "Meta":
        raw = _as_object(raw, path)
        analytics = raw.get("analytics")
        analytics_id = None
        if analytics is not None:
            analytics_path = _join(path, "analytics")
            analytics_id = _optional_text(
                _as_object(analytics, analytics_path), "googleAnalyticsId", analytics_path
            )
        return cls(
            description=_text(raw, "description", path),
            keywords=_text(raw, "keywords", path),
            author=_text(raw, "author", path),
            canonical=_text(raw, "canonical", path),
            analytics_id=analytics_id or None,
        )


@dataclass(frozen=True)
class ResumeData:
    """
    Complete résumé document, loaded once per build and never mutated.

    Build with ResumeData.from_dict(raw) where raw is the parsed data file.
    """

    personal: Personal
    summary: Summary
    contact: Contact
    experience: Tuple[Job, ...]
    education: Tuple[Education, ...]
    certifications: Tuple[Certification, ...]
    collaborations: Tuple[Collaboration, ...]
    interests: Interests
    social: Tuple[SocialLink, ...]
    skills: Skills
    languages: Tuple[Language, ...]
    meta: Meta

    @classmethod
    def from_dict(cls, raw: Any) -> "ResumeData":
        """
        Build the typed record from a parsed data document.

        Args:
            raw: Parsed JSON document

        Returns:
            ResumeData instance

        Raises:
            RenderError: If a required field is missing or has the wrong shape
        """
        raw = _as_object(raw, "")
        return cls(
            personal=Personal.from_dict(_required(raw, "personal", "")),
            summary=Summary.from_dict(_required(raw, "summary", "")),
            contact=Contact.from_dict(_required(raw, "contact", "")),
            experience=_records(raw, "experience", "", Job.from_dict),
            education=_records(raw, "education", "", Education.from_dict),
            certifications=_records(raw, "certifications", "", Certification.from_dict),
            collaborations=_records(raw, "collaborations", "", Collaboration.from_dict),
            interests=Interests.from_dict(_required(raw, "interests", "")),
            social=_records(raw, "social", "", SocialLink.from_dict),
            skills=Skills.from_dict(_required(raw, "skills", "")),
            languages=_records(raw, "languages", "", Language.from_dict),
            meta=Meta.from_dict(_required(raw, "meta", "")),
        )

    @property
    def headline(self) -> str:
        """Professional headline: explicit headline, else the most recent job title."""
        if self.personal.headline:
            return self.personal.headline
        if self.experience:
            return self.experience[0].title
        return "Professional"
