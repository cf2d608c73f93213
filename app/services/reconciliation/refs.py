"""External references and the name heuristics used to reconcile them.

openparliament.ca identifies politicians by URL slug
(``/politicians/fares-al-soud/``), bills by ``/bills/45-1/C-5/`` and votes by
``/votes/45-1/59/``.
"""

import re
import unicodedata
from dataclasses import dataclass

_BILL_URL = re.compile(r"/bills/(?P<session>\d+-\d+)/(?P<number>[A-Za-z]+-\d+[A-Za-z]*)/?")
_VOTE_URL = re.compile(r"/votes/(?P<parliament>\d+)-(?P<session>\d+)/(?P<number>\d+)/?")


def politician_slug(url: str | None) -> str | None:
    """'/politicians/ziad-aboultaif/' -> 'ziad-aboultaif'."""
    if not url:
        return None
    path = url.split("/politicians/", 1)[-1]
    slug = path.strip("/").split("/", 1)[0]
    return slug or None


@dataclass(frozen=True)
class DerivedName:
    """First/last name guessed from a slug.

    Every token but the last is the first name, so multi-word surnames
    ("de-bellefeuille" style) come out wrong; the later matchers cover most
    of those cases.
    """

    first_name: str
    last_name: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


def derive_name(slug: str | None) -> DerivedName | None:
    if not slug:
        return None
    tokens = [t for t in slug.split("-") if t]
    if not tokens:
        return None
    words = [t.capitalize() for t in tokens]
    return DerivedName(first_name=" ".join(words[:-1]), last_name=words[-1])


def name_to_slug(name: str) -> str:
    """'Élisabeth Brière' -> 'elisabeth-briere'."""
    text = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii").lower()
    text = re.sub(r"[^a-z0-9\s-]", "", text).strip()
    return re.sub(r"[\s-]+", "-", text)


@dataclass(frozen=True)
class PoliticianRef:
    """Loose reference to a politician: URL, display name, or both."""

    url: str | None = None
    name: str | None = None

    @property
    def slug(self) -> str | None:
        return politician_slug(self.url)

    @property
    def derived(self) -> DerivedName | None:
        if self.slug:
            return derive_name(self.slug)
        if self.name and " " in self.name.strip():
            first, last = self.name.strip().rsplit(" ", 1)
            return DerivedName(first_name=first, last_name=last)
        return None

    @property
    def full_name(self) -> str | None:
        if self.name:
            return self.name.strip()
        derived = self.derived
        return derived.full_name if derived else None

    @property
    def key(self) -> str:
        return self.url or self.name or ""


@dataclass(frozen=True)
class BillRef:
    legisinfo_id: int | None = None
    bill_number: str | None = None
    session: str | None = None

    @classmethod
    def from_url(cls, url: str | None, legisinfo_id: int | None = None) -> "BillRef | None":
        parsed = parse_bill_url(url)
        if parsed is None:
            return cls(legisinfo_id=legisinfo_id) if legisinfo_id else None
        session, number = parsed
        return cls(legisinfo_id=legisinfo_id, bill_number=number, session=session)


def parse_bill_url(url: str | None) -> tuple[str, str] | None:
    """'/bills/45-1/C-5/' -> ('45-1', 'C-5')."""
    if not url:
        return None
    m = _BILL_URL.search(url)
    if not m:
        return None
    return m.group("session"), m.group("number").upper()


def parse_vote_url(url: str | None) -> tuple[int, int, int] | None:
    """'/votes/45-1/59/' -> (45, 1, 59)."""
    if not url:
        return None
    m = _VOTE_URL.search(url)
    if not m:
        return None
    return int(m.group("parliament")), int(m.group("session")), int(m.group("number"))
