"""Pydantic v2 request models for the vCard API.

The models mirror ``models.Contact``; ``ContactIn.to_contact`` converts a
validated request body into the record the formatter consumes.
"""

from datetime import date
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from . import settings
from .models import Address, Contact, Media


class LabeledPhoneIn(BaseModel):
    label: Optional[str] = None
    number: Union[str, int]


class LabeledEmailIn(BaseModel):
    label: Optional[str] = None
    email: str


class LabeledUrlIn(BaseModel):
    label: Optional[str] = None
    url: str


PhoneIn = Union[str, int, LabeledPhoneIn]
EmailIn = Union[str, LabeledEmailIn]
UrlIn = Union[str, LabeledUrlIn]


class AddressIn(BaseModel):
    label: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state_province: Optional[str] = None
    postal_code: Optional[Union[str, int]] = None
    country_region: Optional[str] = None
    type: Optional[str] = None


class MediaIn(BaseModel):
    url: Optional[str] = None
    media_type: Optional[str] = None
    base64: bool = False


class ContactIn(BaseModel):
    """Contact record accepted by ``POST /vcard``."""

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

    cell_phone: Union[PhoneIn, List[PhoneIn], None] = None
    pager_phone: Union[PhoneIn, List[PhoneIn], None] = None
    home_phone: Union[PhoneIn, List[PhoneIn], None] = None
    work_phone: Union[PhoneIn, List[PhoneIn], None] = None
    home_fax: Union[PhoneIn, List[PhoneIn], None] = None
    work_fax: Union[PhoneIn, List[PhoneIn], None] = None
    other_phone: Union[PhoneIn, List[PhoneIn], None] = None

    email: Union[EmailIn, List[EmailIn], None] = None
    work_email: Union[EmailIn, List[EmailIn], None] = None
    other_email: Union[EmailIn, List[EmailIn], None] = None

    url: Union[UrlIn, List[UrlIn], None] = None
    work_url: Union[UrlIn, List[UrlIn], None] = None
    social_urls: Dict[str, Union[str, List[str], None]] = Field(default_factory=dict)

    home_address: AddressIn = Field(default_factory=AddressIn)
    work_address: AddressIn = Field(default_factory=AddressIn)
    other_addresses: List[AddressIn] = Field(default_factory=list)

    photo: MediaIn = Field(default_factory=MediaIn)
    logo: MediaIn = Field(default_factory=MediaIn)

    title: Optional[str] = None
    role: Optional[str] = None
    organization: Optional[str] = None
    note: Optional[str] = None
    source: Optional[str] = None

    version: str = Field(default_factory=lambda: settings.DEFAULT_VCARD_VERSION)

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        if v not in settings.SUPPORTED_VERSIONS:
            raise ValueError(
                f"Unsupported vCard version {v!r}; expected one of {', '.join(settings.SUPPORTED_VERSIONS)}"
            )
        return v

    def to_contact(self) -> Contact:
        # Labeled entries become plain dicts, which the formatter normalizes.
        nested = {"home_address", "work_address", "other_addresses", "photo", "logo"}
        data = self.model_dump(exclude=nested)
        return Contact(
            **data,
            home_address=Address(**self.home_address.model_dump()),
            work_address=Address(**self.work_address.model_dump()),
            other_addresses=[Address(**a.model_dump()) for a in self.other_addresses],
            photo=Media(**self.photo.model_dump()),
            logo=Media(**self.logo.model_dump()),
        )
