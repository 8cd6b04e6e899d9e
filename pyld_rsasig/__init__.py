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
RsaSignature2017 Linked Data Signatures for JSON-LD.

    >>> signature = sign(dataset, private_key, "https://example.com/#key")
    >>> signed = insert_signature(document, signature)

    >>> parsed = await SignedDocument.parse(remote_document(signed))
    >>> parsed.verify(public_key)
"""

from .canonicalize import Canonicalizer, Urdna2015Canonicalizer, canonicalize
from .contexts import (
    IDENTITY_CONTEXT, IDENTITY_CONTEXT_URL, SECURITY_CONTEXT,
    SECURITY_CONTEXT_URL, make_preloaded_loader, preloaded)
from .dataset import Dataset, Quad, Term, blank_node, iri, literal
from .document import (
    DocumentParser, DocumentSignature, Expander, PyLdExpander, SignedDocument,
    parse, remote_document)
from .errors import (
    BadSignatureOptions, BadSignatureValue, BadSubject,
    CanonicalizationError, DatasetError, DocumentExpansionError,
    DuplicateSignatures, ExpansionError, LdsError, LdsTypeError,
    MissingSignatureOptions, NestingSignatureNode, OptionsExpansionError,
    SignedDocumentError, SigningError, ToxicGraphError, UnsupportedFeatureError,
    UnsupportedType, VerificationError)
from .hashing import create_verify_hash
from .options import GENERATE_NONCE, SignatureOptions, format_iso8601, gen_nonce
from .signing import Signature, insert_signature, sign
from .suites import SUITES, RsaSignature2017, SignatureSuite
from .verification import verify
