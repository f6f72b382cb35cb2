"""SignedSource-style signatures for generated files.

A generated file carries ``@generated <<SignedSource::...>>`` while it is being
assembled. Signing replaces the placeholder with the MD5 of the whole text
(computed with the placeholder still in place), so any later edit to the body
makes :func:`verify_signature` fail until the file is regenerated.
"""

from __future__ import annotations

import hashlib
import re

from debugger_frontend_sync.errors import SigningError

GENERATED = "@" + "generated"
TOKEN = "<<SignedSource::*O*zOeWoEQle#+L!plEphiEmie@IsG>>"
SIGNATURE_RE = re.compile(r"SignedSource<<([a-f0-9]{32})>>")


def get_signing_token() -> str:
    return f"{GENERATED} {TOKEN}"


def _digest(text: str) -> str:
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def is_signed(text: str) -> bool:
    return SIGNATURE_RE.search(text) is not None


def sign_file(text: str) -> str:
    """Return ``text`` with its signing token replaced by a signature.

    Already-signed text is re-signed.

    Raises:
        SigningError: If ``text`` has neither a signing token nor a signature.
    """
    if TOKEN not in text:
        if not is_signed(text):
            raise SigningError("sign_file: text has no signing token and no signature")
        text = SIGNATURE_RE.sub(lambda _match: TOKEN, text, count=1)
    signature = _digest(text)
    return text.replace(TOKEN, f"SignedSource<<{signature}>>", 1)


def verify_signature(text: str) -> bool:
    """Return ``True`` when the embedded signature matches the body.

    Raises:
        SigningError: If ``text`` carries no signature.
    """
    match = SIGNATURE_RE.search(text)
    if match is None:
        raise SigningError("verify_signature: text is not signed")
    unsigned = text[: match.start()] + TOKEN + text[match.end() :]
    return _digest(unsigned) == match.group(1)
