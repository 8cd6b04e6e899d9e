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

import hashlib
import logging

from .canonicalize import canonicalize
from .errors import CanonicalizationError

logger = logging.getLogger(__name__)


def _hash_canonicalized(dataset, canonicalizer, role):
    try:
        canonical = canonicalize(dataset, canonicalizer)
    except CanonicalizationError as e:
        e.role = role
        raise
    return hashlib.sha256(canonical).hexdigest()


def create_verify_hash(dataset, options_dataset, canonicalizer=None):
    """
    The Create Verify Hash Algorithm of Linked Data Signatures.

    Returns the 32 byte SHA-256 digest of
    hex(SHA-256(canonical options)) + hex(SHA-256(canonical document)).

    Both datasets are canonicalized with CANONICALIZER (URDNA2015 by
    default).  Canonicalization errors propagate with their `role` set to
    "options" or "document".
    """
    # The options are canonicalized and hashed before the document is
    # looked at.
    options_hash = _hash_canonicalized(options_dataset, canonicalizer,
                                       "options")

    document_hash = _hash_canonicalized(dataset, canonicalizer, "document")

    output = hashlib.sha256(
        (options_hash + document_hash).encode('utf-8')).digest()
    logger.debug("create verify hash: %s", output.hex())
    return output
