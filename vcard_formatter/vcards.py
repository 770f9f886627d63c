from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from pathlib import Path

from .models import Address, Contact
from .utils import (
    CRLF,
    above,
    at_least,
    encoding_prefix,
    escape_text,
    format_date,
    normalize_entries,
)

logger = logging.getLogger(__name__)

BEGIN_LINE = "BEGIN:VCARD"
END_LINE = "END:VCARD"
ORGANIZATION_MARKER = "X-ABShowAs:COMPANY"


def format_address(address: Address | None, type_: str, major: int | None) -> list[str]:
    """Render one postal address as LABEL/ADR lines.

    Version 4 folds the label into the ADR line as a quoted LABEL parameter;
    older versions emit a separate LABEL property ahead of ADR.
    """
    if address is None or address.is_empty():
        return []
    prefix = encoding_prefix(major)
    components = ";".join(
        escape_text(v)
        for v in (
            address.street,
            address.city,
            address.state_province,
            address.postal_code,
            address.country_region,
        )
    )
    if at_least(major, 4):
        label_param = f';LABEL="{escape_text(address.label)}"' if address.label else ""
        return [f"ADR{prefix};TYPE={type_}{label_param}:;;{components}"]
    lines = []
    if address.label:
        lines.append(f"LABEL{prefix};TYPE={type_}:{escape_text(address.label)}")
    lines.append(f"ADR{prefix};TYPE={type_}:;;{components}")
    return lines


def format_media(
    name: str, url: str, media_type: str | None, base64: bool, major: int | None
) -> str:
    if at_least(major, 4):
        params = ";ENCODING=b;MEDIATYPE=image/" if base64 else ";MEDIATYPE=image/"
    elif major == 3:
        params = ";ENCODING=b;TYPE=" if base64 else ";TYPE="
    else:
        params = ";ENCODING=BASE64;" if base64 else ";"
    return f"{name}{params}{media_type or ''}:{escape_text(url)}"


def _formatted_name(c: Contact) -> str:
    if c.formatted_name:
        return c.formatted_name
    return " ".join(p for p in (c.first_name, c.middle_name, c.last_name) if p)


def _emit_name(c: Contact, major: int | None) -> list[str]:
    prefix = encoding_prefix(major)
    n_fields = [
        escape_text(c.last_name),
        escape_text(c.first_name),
        escape_text(c.middle_name),
        escape_text(c.name_prefix),
        escape_text(c.name_suffix),
    ]
    return [
        f"FN{prefix}:{escape_text(_formatted_name(c))}",
        f"N{prefix}:" + ";".join(n_fields),
    ]


def _emit_identity(c: Contact, major: int | None) -> list[str]:
    prefix = encoding_prefix(major)
    props = []
    if c.nickname and at_least(major, 3):
        props.append(f"NICKNAME{prefix}:{escape_text(c.nickname)}")
    if c.gender:
        props.append(f"GENDER:{escape_text(c.gender)}")
    if c.uid:
        props.append(f"UID{prefix}:{escape_text(c.uid)}")
    if c.birthday:
        props.append(f"BDAY:{format_date(c.birthday)}")
    if c.anniversary:
        props.append(f"ANNIVERSARY:{format_date(c.anniversary)}")
    return props


def _emit_emails(value: object, default_label: str, internet_v3: bool, major: int | None) -> list[str]:
    # Only the work category omits INTERNET under version 3.
    prefix = encoding_prefix(major)
    props = []
    for entry in normalize_entries(value, "email"):
        label = entry.label_or(default_label)
        email = escape_text(entry.value)
        if at_least(major, 4):
            props.append(f"EMAIL{prefix};type={label}:{email}")
        elif at_least(major, 3):
            marker = ",INTERNET" if internet_v3 else ""
            props.append(f"EMAIL{prefix};type={label}{marker}:{email}")
        else:
            props.append(f"EMAIL{prefix};{label};INTERNET:{email}")
    return props


def _emit_media(c: Contact, major: int | None) -> list[str]:
    props = []
    for name, media in (("LOGO", c.logo), ("PHOTO", c.photo)):
        if media.url:
            props.append(format_media(name, media.url, media.media_type, media.base64, major))
    return props


def _emit_typed_phones(value: object, uri_type: str, legacy_type: str, major: int | None) -> list[str]:
    """Cell and pager numbers. Entry labels do not apply to these slots."""
    props = []
    for entry in normalize_entries(value, "number"):
        number = escape_text(entry.value)
        if at_least(major, 4):
            props.append(f'TEL;VALUE=uri;TYPE="{uri_type}":tel:{number}')
        else:
            props.append(f"TEL;TYPE={legacy_type}:{number}")
    return props


def _emit_phones(c: Contact, major: int | None) -> list[str]:
    props = _emit_typed_phones(c.cell_phone, "voice,cell", "CELL", major)
    props += _emit_typed_phones(c.pager_phone, "pager,cell", "PAGER", major)

    for entry in normalize_entries(c.home_phone, "number"):
        label, number = entry.label_or("home"), escape_text(entry.value)
        if at_least(major, 4):
            props.append(f'TEL;VALUE=uri;TYPE="voice,{label}":tel:{number}')
        else:
            props.append(f"TEL;TYPE={label},VOICE:{number}")

    # Work numbers switch to the URI form only above version 4.
    for entry in normalize_entries(c.work_phone, "number"):
        label, number = entry.label_or("work"), escape_text(entry.value)
        if above(major, 4):
            props.append(f'TEL;VALUE=uri;TYPE="voice,{label}":tel:{number}')
        else:
            props.append(f"TEL;TYPE={label},VOICE:{number}")

    # The home fax URI form has no closing quote on TYPE.
    for entry in normalize_entries(c.home_fax, "number"):
        label, number = entry.label_or("home"), escape_text(entry.value)
        if at_least(major, 4):
            props.append(f'TEL;VALUE=uri;TYPE="fax,{label}:tel:{number}')
        else:
            props.append(f"TEL;TYPE={label},FAX:{number}")

    for entry in normalize_entries(c.work_fax, "number"):
        label, number = entry.label_or("work"), escape_text(entry.value)
        if at_least(major, 4):
            props.append(f'TEL;VALUE=uri;TYPE="fax,{label}":tel:{number}')
        else:
            props.append(f"TEL;TYPE={label},FAX:{number}")

    for entry in normalize_entries(c.other_phone, "number"):
        label, number = entry.label_or("OTHER"), escape_text(entry.value)
        if at_least(major, 4):
            props.append(f'TEL;VALUE=uri;TYPE="voice,{label}":tel:{number}')
        else:
            props.append(f"TEL;TYPE={label}:{number}")
    return props


def _emit_addresses(c: Contact, major: int | None) -> list[str]:
    props = format_address(c.home_address, "HOME", major)
    props += format_address(c.work_address, "WORK", major)
    for address in c.other_addresses or []:
        if isinstance(address, Mapping):
            address = Address.from_mapping(address)
        props += format_address(address, address.type or "OTHER", major)
    return props


def _emit_text(names: Iterable[tuple[str, str | None]], major: int | None) -> list[str]:
    prefix = encoding_prefix(major)
    return [f"{name}{prefix}:{escape_text(value)}" for name, value in names if value]


def _emit_urls(c: Contact, major: int | None) -> list[str]:
    prefix = encoding_prefix(major)
    props = []
    for value, default_label in ((c.url, "website"), (c.work_url, "WORK")):
        for entry in normalize_entries(value, "url"):
            props.append(f"URL;type={entry.label_or(default_label)}{prefix}:{escape_text(entry.value)}")
    return props


def _emit_social_urls(c: Contact) -> list[str]:
    props = []
    for network, urls in (c.social_urls or {}).items():
        for entry in normalize_entries(urls, "url"):
            props.append(f"URL;TYPE={network}:{escape_text(entry.value)}")
    return props


def _revision_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_vcard(c: Contact, major: int | None) -> str:
    """Serialize one contact for the given major version (2, 3 or 4).

    ``major`` decides every version-dependent branch; None selects the
    legacy (version 2) output. The contact is read, never modified.
    """
    logger.debug("Formatting vCard version %s (major %s)", c.version, major)
    props = [BEGIN_LINE, f"VERSION:{c.version}"]
    props += _emit_name(c, major)
    props += _emit_identity(c, major)
    props += _emit_emails(c.email, "HOME", True, major)
    props += _emit_emails(c.work_email, "WORK", False, major)
    props += _emit_emails(c.other_email, "OTHER", True, major)
    props += _emit_media(c, major)
    props += _emit_phones(c, major)
    props += _emit_addresses(c, major)
    props += _emit_text((("TITLE", c.title), ("ROLE", c.role), ("ORG", c.organization)), major)
    props += _emit_urls(c, major)
    props += _emit_text((("NOTE", c.note),), major)
    props += _emit_social_urls(c)
    props += _emit_text((("SOURCE", c.source),), major)
    props.append(f"REV:{_revision_timestamp()}")
    if c.is_organization:
        props.append(ORGANIZATION_MARKER)
    props.append(END_LINE)
    logger.debug("Formatted %d vCard properties", len(props))
    return CRLF.join(props) + CRLF


def contact_to_vcard(c: Contact) -> str:
    return format_vcard(c, c.major_version)


def contacts_to_vcards(contacts: Iterable[Contact]) -> str:
    return "".join(contact_to_vcard(c) for c in contacts)


def save_to_file(c: Contact, path: str | Path) -> Path:
    """Write the contact's vCard to ``path`` unchanged (CRLF kept)."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8", newline="") as fh:
        fh.write(contact_to_vcard(c))
    logger.info("Saved vCard to %s", target)
    return target
