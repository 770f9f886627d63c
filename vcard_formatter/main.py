import io
import logging
import re

from fastapi import FastAPI
from fastapi.responses import StreamingResponse

from .schemas import ContactIn
from .settings import LOG_LEVEL
from .vcards import contact_to_vcard

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI()


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/vcard")
async def create_vcard(body: ContactIn):
    contact = body.to_contact()
    vcf_text = contact_to_vcard(contact)
    # Derive download filename from the contact's display name
    display = contact.formatted_name or " ".join(
        p for p in (contact.first_name, contact.last_name) if p
    )
    base = re.sub(r"[^A-Za-z0-9_.-]+", "-", display).strip("-") or "contact"
    out_name = f"{base}-{contact.version}.vcf"
    logger.info("Serialized vCard %s (%d bytes)", out_name, len(vcf_text))
    return StreamingResponse(
        io.BytesIO(vcf_text.encode("utf-8")),
        media_type="text/vcard; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename={out_name}"},
    )
