import base64
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from datetime import date
from pathlib import Path
from typing import List, Optional

from .types import EmailField, PhoneField, SocialUrls, UrlField
from .utils import resolve_major_version


@dataclass
class Address:
    label: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state_province: Optional[str] = None
    postal_code: Optional[str | int] = None
    country_region: Optional[str] = None
    type: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping) -> "Address":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def is_empty(self) -> bool:
        return not (
            self.label
            or self.street
            or self.city
            or self.state_province
            or self.postal_code
            or self.country_region
        )


@dataclass
class Media:
    url: Optional[str] = None
    media_type: Optional[str] = None
    base64: bool = False

    def attach_from_url(self, url: str, media_type: str = "JPEG") -> None:
        self.url = url
        self.media_type = media_type or "JPEG"
        self.base64 = False

    def embed_from_string(self, data: str, media_type: str = "JPEG") -> None:
        """Store already base64-encoded image data."""
        self.url = data
        self.media_type = media_type or "JPEG"
        self.base64 = True

    def embed_from_file(self, path: str | Path) -> None:
        p = Path(path)
        encoded = base64.b64encode(p.read_bytes()).decode("ascii")
        self.embed_from_string(encoded, p.suffix.lstrip(".").upper() or "JPEG")


@dataclass
class Contact:
    formatted_name: Optional[str] = None
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    last_name: Optional[str] = None
    name_prefix: Optional[str] = None
    name_suffix: Optional[str] = None
    nickname: Optional[str] = None
    gender: Optional[str] = None
    uid: Optional[str] = None
    birthday: Optional[date] = None
    anniversary: Optional[date] = None
    is_organization: bool = False

    cell_phone: PhoneField = None
    pager_phone: PhoneField = None
    home_phone: PhoneField = None
    work_phone: PhoneField = None
    home_fax: PhoneField = None
    work_fax: PhoneField = None
    other_phone: PhoneField = None

    email: EmailField = None
    work_email: EmailField = None
    other_email: EmailField = None

    url: UrlField = None
    work_url: UrlField = None
    social_urls: SocialUrls = field(default_factory=dict)

    home_address: Address = field(default_factory=Address)
    work_address: Address = field(default_factory=Address)
    other_addresses: List[Address] = field(default_factory=list)

    photo: Media = field(default_factory=Media)
    logo: Media = field(default_factory=Media)

    title: Optional[str] = None
    role: Optional[str] = None
    organization: Optional[str] = None
    note: Optional[str] = None
    source: Optional[str] = None

    version: str = "3.0"

    @property
    def major_version(self) -> Optional[int]:
        return resolve_major_version(self.version)
