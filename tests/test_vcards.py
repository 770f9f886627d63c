import re
from datetime import date

import vobject

from vcard_formatter.models import Address, Contact
from vcard_formatter.vcards import contact_to_vcard, save_to_file

TEST_VALUE_UID = "69531f4a-c34d-4a1e-8922-bd38a9476a53"


def build_sample(version: str = "3.0") -> Contact:
    c = Contact(version=version)
    c.uid = TEST_VALUE_UID
    c.last_name = "Doe"
    c.middle_name = "D"
    c.first_name = "John"
    c.name_suffix = "JR"
    c.name_prefix = "MR"
    c.nickname = "Test User"
    c.gender = "M"
    c.organization = "ACME Corporation"
    c.photo.attach_from_url("https://testurl", "png")
    c.logo.attach_from_url("https://testurl", "png")
    c.work_phone = [
        "312-555-1212",
        {"label": "CUSTOM WORK LABEL", "number": "312-555-1212"},
    ]
    c.home_phone = [
        "312-555-1313",
        {"label": "CUSTOM HOME LABEL", "number": "312-555-1313"},
    ]
    c.cell_phone = "12345678900"
    c.pager_phone = "312-555-1515"
    c.home_fax = "312-555-1616"
    c.work_fax = "312-555-1717"
    c.birthday = date(2018, 12, 1)
    c.anniversary = date(2018, 12, 1)
    c.title = "Crash Test Dummy"
    c.role = "Crash Testing"
    c.email = [
        "john.doe@testmail",
        {"email": "john.doe@testmail", "label": "Custom Private Label"},
    ]
    c.work_email = [
        "john.doe@workmail",
        {"email": "john.doe@workmail", "label": "Custom Work Label"},
    ]
    c.url = ["http://johndoe", {"url": "http://johndoeeee", "label": "Custom URL Label"}]
    c.work_url = [
        "http://acemecompany/johndoe",
        {"url": "http://acemecompany/johndoeee", "label": "Custom WORK URL Label"},
    ]
    c.home_address = Address(
        label="Home Address",
        street="123 Main Street",
        city="Chicago",
        state_province="IL",
        postal_code="12345",
        country_region="United States of America",
    )
    c.work_address = Address(
        label="Work Address",
        street="123 Corporate Loop\nSuite 500",
        city="Los Angeles",
        state_province="CA",
        postal_code="54321",
        country_region="California Republic",
    )
    c.other_addresses = [
        Address(
            type="HOME",
            label="Home Address",
            street="124 Main Street",
            city="Los Angeles",
            state_province="CA",
            postal_code="54321",
            country_region="California Republic",
        ),
        Address(
            type="WORK",
            street="123 Corporate Loop\nSuite 502",
            city="Los Angeles",
            state_province="CA",
            postal_code="54321",
            country_region="California Republic",
        ),
        Address(
            street="Jovana Kursule 2",
            city="Ćuprija",
            state_province="RS",
            postal_code="35230",
            country_region="Serbia",
        ),
    ]
    c.other_phone = [
        {"label": "CUSTOM LABEL", "number": "312-555-1316"},
        {"label": "CUSTOM LABEL", "number": "312-555-1353"},
    ]
    c.source = "http://sourceurl"
    c.note = "John Doe's \nnotes;,"
    c.social_urls = {
        "facebook": "https://facebook/johndoe",
        "linkedIn": "https://linkedin/johndoe",
        "twitter": "https://twitter/johndoe",
        "empty": [],
        "tapni": ["https://t.link", "https://t.link", "https://t.link"],
    }
    return c


def value_by_field_name(field_name: str, lines: list[str]):
    for line in lines:
        if line.startswith(field_name):
            return line.split(":")[1]
    return None


def test_starts_with_begin_and_ends_with_end():
    lines = contact_to_vcard(build_sample()).splitlines()
    assert lines[0] == "BEGIN:VCARD"
    assert lines[1] == "VERSION:3.0"
    assert lines[-1] == "END:VCARD"


def test_every_line_is_crlf_terminated_and_well_formed():
    out = contact_to_vcard(build_sample())
    assert out.endswith("\r\n")
    for line in out.split("\r\n"):
        if line:
            assert len(line.split(":")) >= 2, line


def test_note_escapes_newline_comma_and_semicolon():
    out = contact_to_vcard(build_sample())
    assert re.search(r"^NOTE;CHARSET=utf-8:John Doe's \\nnotes\\;\\,\r?$", out, re.M)


def test_birthday_and_anniversary_are_compact_dates():
    lines = contact_to_vcard(build_sample()).splitlines()
    assert value_by_field_name("BDAY", lines) == "20181201"
    assert value_by_field_name("ANNIVERSARY", lines) == "20181201"


def test_uid_is_emitted_verbatim():
    lines = contact_to_vcard(build_sample()).splitlines()
    assert value_by_field_name("UID", lines) == TEST_VALUE_UID


def test_formatted_and_structured_name():
    out = contact_to_vcard(build_sample())
    assert re.search(r"^FN;CHARSET=utf-8:John D Doe\r?$", out, re.M)
    assert re.search(r"^N;CHARSET=utf-8:Doe;John;D;MR;JR\r?$", out, re.M)


def test_custom_phone_labels_in_legacy_form():
    lines = contact_to_vcard(build_sample()).splitlines()
    assert value_by_field_name("TEL;TYPE=CUSTOM WORK LABEL", lines) == "312-555-1212"
    assert value_by_field_name("TEL;TYPE=CUSTOM LABEL", lines) == "312-555-1316"
    assert "TEL;TYPE=CUSTOM WORK LABEL,VOICE:312-555-1212" in lines
    assert "TEL;TYPE=work,VOICE:312-555-1212" in lines
    assert "TEL;TYPE=home,FAX:312-555-1616" in lines


def test_other_address_position_and_default_type():
    lines = contact_to_vcard(build_sample()).splitlines()
    assert lines[30].split(";")[4] == "124 Main Street"
    other = [line for line in lines if line.startswith("ADR;CHARSET=utf-8;TYPE=OTHER:")]
    assert len(other) == 1
    assert other[0].split(";")[4] == "Jovana Kursule 2"


def test_work_address_street_newline_is_escaped():
    out = contact_to_vcard(build_sample())
    assert "ADR;CHARSET=utf-8;TYPE=WORK:;;123 Corporate Loop\\nSuite 500;Los Angeles;CA;54321;California Republic\r\n" in out


def test_numeric_values_are_coerced_to_text():
    c = build_sample()
    c.work_address.postal_code = 12345
    c.cell_phone = 12345678900
    lines = contact_to_vcard(c).splitlines()
    assert "ADR;CHARSET=utf-8;TYPE=WORK:;;123 Corporate Loop\\nSuite 500;Los Angeles;CA;12345;California Republic" in lines
    assert "TEL;TYPE=CELL:12345678900" in lines


def test_social_urls_skip_empty_and_expand_sequences():
    lines = contact_to_vcard(build_sample()).splitlines()
    assert lines.count("URL;TYPE=tapni:https://t.link") == 3
    assert "URL;TYPE=facebook:https://facebook/johndoe" in lines
    assert not any(line.startswith("URL;TYPE=empty") for line in lines)


def test_urls_carry_label_then_charset():
    lines = contact_to_vcard(build_sample()).splitlines()
    assert "URL;type=website;CHARSET=utf-8:http://johndoe" in lines
    assert "URL;type=Custom URL Label;CHARSET=utf-8:http://johndoeeee" in lines
    assert "URL;type=WORK;CHARSET=utf-8:http://acemecompany/johndoe" in lines


def test_serialization_does_not_mutate_record_and_is_repeatable(monkeypatch):
    monkeypatch.setattr("vcard_formatter.vcards._revision_timestamp", lambda: "2020-01-01T00:00:00.000Z")
    c = build_sample()
    c.email = "single@example.com"
    first = contact_to_vcard(c)
    assert c.email == "single@example.com"
    assert isinstance(c.home_phone, list) and len(c.home_phone) == 2
    assert contact_to_vcard(c) == first


def test_revision_line_present_before_end():
    lines = contact_to_vcard(build_sample()).splitlines()
    assert re.match(r"^REV:\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$", lines[-2])


def test_organization_marker_after_revision():
    c = build_sample()
    c.is_organization = True
    lines = contact_to_vcard(c).splitlines()
    assert lines[-3].startswith("REV:")
    assert lines[-2] == "X-ABShowAs:COMPANY"
    assert lines[-1] == "END:VCARD"


def test_save_to_file_writes_document_verbatim(tmp_path):
    c = build_sample()
    target = save_to_file(c, tmp_path / "out" / "card.vcf")
    data = target.read_bytes().decode("utf-8")
    assert data.startswith("BEGIN:VCARD\r\nVERSION:3.0\r\n")
    assert data.endswith("END:VCARD\r\n")
    assert "\r\r\n" not in data


def test_version_3_output_is_readable_by_vobject():
    c = Contact(version="3.0", first_name="John", last_name="Doe")
    c.email = "john.doe@testmail"
    c.cell_phone = "312-555-1414"
    c.home_address = Address(street="123 Main Street", city="Chicago", postal_code="12345")
    card = vobject.readOne(contact_to_vcard(c))
    assert card.fn.value == "John Doe"
    assert card.n.value.family == "Doe"
    assert card.n.value.given == "John"
    assert card.email.value == "john.doe@testmail"
    assert card.adr.value.street == "123 Main Street"
    assert card.adr.value.city == "Chicago"
