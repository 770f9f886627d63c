from datetime import date

from vcard_formatter.models import Address, Contact
from vcard_formatter.vcards import contact_to_vcard

contact = Contact(version="4.0", first_name="Jöhn", last_name="Dör")
contact.birthday = date(1985, 7, 13)
contact.cell_phone = "+1 555 010 2000"
contact.work_email = {"label": "work", "email": "john.work@example.com"}
contact.work_address = Address(label="Office", street="1 Loop", city="Chicago", postal_code=60601)
contact.social_urls = {"github": "https://github.com/john"}

for version in ("2.1", "3.0", "4.0"):
    contact.version = version
    print(contact_to_vcard(contact))
