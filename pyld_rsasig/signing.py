## An implementation of the Linked Data Signatures specification for JSON-LD.
##
## Author: Christopher Allan Webber <cwebber@dustycloud.org>
##
## BSD 3-Clause License
## Copyright (c) 2017 Spec-Ops.
##
## Redistribution and use in source and binary forms, with or without
## modification, are permitted provided that the following conditions are met:
##
## Redistributions of source code must retain the above copyright notice,
## this list of conditions and the following disclaimer.
##
## Redistributions in binary form must reproduce the above copyright
## notice, this list of conditions and the following disclaimer in the
## documentation and/or other materials provided with the distribution.
##
## Neither the name of the Spec-Ops nor the names of its contributors
## may be used to endorse or promote products derived from this
## software without specific prior written permission.
##
## THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS
## IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED
## TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A
## PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT
## HOLDER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL,
## SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED
## TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR
## PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
## LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING
## NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS
## SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.

import base64
import copy
import logging

from .contexts import SECURITY_CONTEXT_URL
from .errors import LdsTypeError
from .hashing import create_verify_hash
from .options import GENERATE_NONCE, SignatureOptions, gen_nonce, now_iso8601
from .suites import RsaSignature2017

logger = logging.getLogger(__name__)

SIGNATURE_CONTEXT = [
    SECURITY_CONTEXT_URL,
    # Makes "type": "RsaSignature2017" expand to sec:RsaSignature2017.
    {"@vocab": "sec:"}]


def is_valid_uri(obj):
    """
    Check to see if OBJ is a valid URI

    (or at least do the best check we can: that it's a string, and that
    it contains the ':' character.)
    """
    return isinstance(obj, str) and ":" in obj


class Signature(object):
    """
    The result of signing a dataset: the signature metadata plus the raw
    signature value.  Use to_json() or insert_signature() to embed it in
    a JSON-LD document.
    """

    def __init__(self, created, creator, signature_value, domain=None,
                 nonce=None, kind=RsaSignature2017.name):
        self.kind = kind
        self.created = created
        self.creator = creator
        self.domain = domain
        self.nonce = nonce
        self.signature_value = signature_value

    def options(self):
        return SignatureOptions(self.creator, created=self.created,
                                domain=self.domain, nonce=self.nonce)

    def to_json(self):
        signature = {
            "@context": copy.deepcopy(SIGNATURE_CONTEXT),
            "type": self.kind,
            "created": self.created,
            "creator": self.creator}
        if self.domain is not None:
            signature["domain"] = self.domain
        if self.nonce is not None:
            signature["nonce"] = self.nonce
        signature["signatureValue"] = base64.b64encode(
            self.signature_value).decode("utf-8")
        return signature

    def __repr__(self):
        return ("<Signature kind=%r created=%r creator=%r domain=%r "
                "nonce=%r signature_value=%r>") % (
                    self.kind, self.created, self.creator, self.domain,
                    self.nonce,
                    base64.b64encode(self.signature_value).decode("utf-8"))


def sign(dataset, private_key, creator, created=None, domain=None,
         nonce=GENERATE_NONCE, rng=None, suite=RsaSignature2017,
         canonicalizer=None):
    """
    Sign DATASET with the RsaSignature2017 suite.

     - dataset: the Dataset to be signed.
     - private_key: an RSA private key from the cryptography package.
     - creator: the IRI of the paired public key.
     - created: override the signature date with an ISO 8601 string.
       Used verbatim; only meant for tests and reproducible output, never
       for production.
     - domain: an optional operational domain.
     - nonce: a nonce string; None to omit the nonce; by default a fresh
       nonce is generated.
     - rng: a callable returning N random bytes, used for the nonce
       (default: secrets.token_bytes).
     - canonicalizer: the Canonicalizer to use (default: URDNA2015).

    Returns a Signature.
    """
    if not is_valid_uri(creator):
        raise LdsTypeError(
            "[jsig.sign] creator must be a URL string.")
    if domain is not None and not isinstance(domain, str):
        raise LdsTypeError(
            "[jsig.sign] domain must be a string.")
    if nonce is GENERATE_NONCE:
        nonce = gen_nonce(rng)
    elif nonce is not None and not isinstance(nonce, str):
        raise LdsTypeError(
            "[jsig.sign] nonce must be a string.")
    if created is None:
        created = now_iso8601()
    elif not isinstance(created, str):
        raise LdsTypeError(
            "[jsig.sign] created must be a string.")

    options = SignatureOptions(creator, created=created, domain=domain,
                               nonce=nonce)
    options_dataset, _ = options.to_dataset()
    to_be_signed = create_verify_hash(dataset, options_dataset,
                                      canonicalizer)
    signature_value = suite.sign_digest(private_key, to_be_signed)
    logger.debug("signed %d quads as %s", len(dataset), creator)

    return Signature(created, creator, signature_value, domain=domain,
                     nonce=nonce, kind=suite.name)


def insert_signature(document, signature):
    """
    Return a copy of the JSON-LD DOCUMENT with SIGNATURE as its
    `signature` entry, replacing any existing one.
    """
    if not isinstance(document, dict):
        raise LdsTypeError(
            "expected a map, got %s" % type(document).__name__)
    output = copy.deepcopy(document)
    output.pop("signature", None)
    output["signature"] = signature.to_json()
    return output
