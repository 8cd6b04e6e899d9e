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

"""
Exceptions raised while signing, verifying and extracting RsaSignature2017
signatures.

Every failure mode is its own class so callers can tell "this is not a
signed document" apart from "this signature is forged or garbled".
"""


class LdsError(Exception): pass
class LdsTypeError(LdsError, TypeError): pass


class SigningError(LdsError):
    """The RSA primitive refused to sign (eg. the modulus is too small)."""


class VerificationError(LdsError):
    """The input was well-formed but the signature does not match."""


# Canonicalization

class CanonicalizationError(LdsError):
    """
    Base class of the errors surfaced by the canonicalization stage.

    ROLE is "document" or "options" once the error has passed through
    create_verify_hash, telling which of the two datasets failed.
    """
    def __init__(self, message, role=None):
        super().__init__(message)
        self.role = role

class DatasetError(CanonicalizationError):
    """The dataset backend failed while being read or converted."""

class ToxicGraphError(CanonicalizationError):
    """The canonicalizer's complexity bound was exceeded."""

class UnsupportedFeatureError(CanonicalizationError):
    """The dataset uses an RDF feature the canonicalizer cannot handle."""


# Structural problems with a signed JSON-LD document

class SignedDocumentError(LdsError):
    message = None

    def __init__(self, message=None):
        super().__init__(message or self.message)

class MissingSignatureOptions(SignedDocumentError):
    message = "missing signature options"

class UnsupportedType(SignedDocumentError):
    message = "the signature type is not RsaSignature2017"

class NestingSignatureNode(SignedDocumentError):
    message = "the signature options contain a nested node"

class DuplicateSignatures(SignedDocumentError):
    message = "an element of the signature set is itself a set of signatures"

class BadSubject(SignedDocumentError):
    message = "the signature node identifier is not a string"

class BadSignatureOptions(SignedDocumentError):
    message = "the signature options are not a JSON object"

class BadSignatureValue(SignedDocumentError):
    message = "signatureValue is not a valid base64 string"


# JSON-LD expansion

class ExpansionError(LdsError): pass

class DocumentExpansionError(ExpansionError):
    """The signed document could not be expanded to RDF."""

class OptionsExpansionError(ExpansionError):
    """A signature options object could not be expanded to RDF."""
