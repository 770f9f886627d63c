from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypedDict, Union


class LabeledPhone(TypedDict, total=False):
    label: str
    number: str | int


class LabeledEmail(TypedDict, total=False):
    label: str
    email: str


class LabeledUrl(TypedDict, total=False):
    label: str
    url: str


@dataclass(frozen=True)
class Scalar:
    """A bare entry value; always takes the category default label."""

    value: object

    def label_or(self, default: str) -> str:
        return default


@dataclass(frozen=True)
class Labeled:
    """An entry value carrying its own label. Empty labels fall back."""

    label: str | None
    value: object

    def label_or(self, default: str) -> str:
        return self.label or default


Entry = Union[Scalar, Labeled]

PhoneValue = Union[str, int, LabeledPhone, Labeled]
EmailValue = Union[str, LabeledEmail, Labeled]
UrlValue = Union[str, LabeledUrl, Labeled]

PhoneField = Union[PhoneValue, Sequence[PhoneValue], None]
EmailField = Union[EmailValue, Sequence[EmailValue], None]
UrlField = Union[UrlValue, Sequence[UrlValue], None]
SocialUrls = dict[str, Union[str, Sequence[str], None]]


__all__ = [
    "LabeledPhone",
    "LabeledEmail",
    "LabeledUrl",
    "Scalar",
    "Labeled",
    "Entry",
    "PhoneField",
    "EmailField",
    "UrlField",
    "SocialUrls",
]
