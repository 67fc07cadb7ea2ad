"""
Static site content models.

Every record on the collaborator page is a frozen pydantic model whose
sequences are tuples, so the content validated at start-up cannot be
changed for the lifetime of the process.

Public API:
    Site         — aggregate of everything the page renders
    UseCase      — one filterable use-case card
    slugify(text) → str
"""

import re

from pydantic import BaseModel, ConfigDict, computed_field, model_validator

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """'Citizen-facing land law guidance' → 'citizen-facing-land-law-guidance'."""
    return _SLUG_RE.sub("-", text.lower()).strip("-")


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Project + contact
# ---------------------------------------------------------------------------

class Highlight(_Record):
    title: str
    desc: str
    icon: str = ""


class Project(_Record):
    name: str
    tagline: str
    one_liner: str
    areas: tuple[str, ...] = ()
    highlights: tuple[Highlight, ...] = ()
    fit: tuple[str, ...] = ()


class ContactLinks(_Record):
    website: str
    github: str
    preprint: str


class Contact(_Record):
    emails: tuple[str, ...]
    affiliation: str
    location: str
    links: ContactLinks


# ---------------------------------------------------------------------------
# Page blocks
# ---------------------------------------------------------------------------

class Section(_Record):
    key: str
    title: str
    bullets: tuple[str, ...] = ()


class UseCase(_Record):
    title: str
    subtitle: str
    tags: tuple[str, ...] = ()
    points: tuple[str, ...] = ()
    icon: str = ""  # display only, never searched

    @computed_field
    @property
    def slug(self) -> str:
        return slugify(self.title)


class Opportunity(_Record):
    title: str
    who: str
    desc: str
    bullets: tuple[str, ...] = ()
    icon: str = ""


class Step(_Record):
    title: str
    detail: str


class Collaboration(_Record):
    steps: tuple[Step, ...] = ()
    outcomes: tuple[Step, ...] = ()
    minimum_requirements: tuple[str, ...] = ()
    optional_enhancements: tuple[str, ...] = ()


class FaqEntry(_Record):
    question: str
    answer: str


class Link(_Record):
    label: str
    href: str


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------

class Site(_Record):
    project: Project
    contact: Contact
    sections: tuple[Section, ...] = ()
    use_cases: tuple[UseCase, ...] = ()
    artifacts: tuple[Link, ...] = ()
    opportunities: tuple[Opportunity, ...] = ()
    collaboration: Collaboration = Collaboration()
    faq: tuple[FaqEntry, ...] = ()
    nav: tuple[Link, ...] = ()

    @model_validator(mode="after")
    def _check_invariants(self) -> "Site":
        seen: set[str] = set()
        for uc in self.use_cases:
            if uc.title in seen:
                raise ValueError(f"Duplicate use case title: {uc.title!r}")
            seen.add(uc.title)

        for item in self.nav:
            if not item.href.startswith("#"):
                raise ValueError(f"Navigation must use in-page anchors, got {item.href!r}")
        return self

    def section(self, key: str) -> Section:
        for s in self.sections:
            if s.key == key:
                return s
        raise KeyError(key)
