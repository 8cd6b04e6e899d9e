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
Signature options (created, creator, domain, nonce) and the fixed-shape
RDF dataset describing them.
"""

import base64
import secrets
from datetime import datetime

import isodate
import pytz

from .dataset import Dataset, blank_node, iri, literal
from .errors import LdsTypeError

DC_CREATED = 'http://purl.org/dc/terms/created'
DC_CREATOR = 'http://purl.org/dc/terms/creator'
SEC_DOMAIN = 'https://w3id.org/security#domain'
SEC_NONCE = 'https://w3id.org/security#nonce'
XSD_DATETIME = 'http://www.w3.org/2001/XMLSchema#dateTime'

# The one subject every options quad shares.
OPTIONS_NODE = blank_node('_:b0')

NONCE_BYTES = 15


class _GenerateNonce(object):
    def __repr__(self):
        return 'GENERATE_NONCE'

# Default for `nonce` arguments: generate a fresh nonce.  Passing None
# instead omits the nonce altogether.
GENERATE_NONCE = _GenerateNonce()


def format_iso8601(dt):
    """
    Format DT in UTC with millisecond precision, eg.
    2024-01-01T00:00:00.000Z.  The digest depends on the exact string, so
    the precision is fixed.

    DT must have an "aware" timezone (.tzinfo not None).
    """
    if dt.tzinfo is None:
        raise LdsTypeError("datetime must have a timezone: %r" % (dt,))
    if dt.tzinfo is not pytz.utc:
        dt = dt.astimezone(pytz.utc)
    return "%s.%03dZ" % (isodate.datetime_isoformat(dt, "%Y-%m-%dT%H:%M:%S"),
                         dt.microsecond // 1000)


def now_iso8601():
    return format_iso8601(datetime.now(pytz.utc))


def gen_nonce(rng=None):
    """
    Return a 20 character base64url (unpadded) nonce made of 15 random
    bytes.  RNG is a callable returning N random bytes and defaults to
    secrets.token_bytes.
    """
    rng = rng or secrets.token_bytes
    return base64.urlsafe_b64encode(rng(NONCE_BYTES)).rstrip(b'=').decode('ascii')


class SignatureOptions(object):
    """
    The metadata of one signature.  CREATED is left as None to have it
    resolved to the current time when the dataset is built; DOMAIN and
    NONCE are omitted from the dataset when None.
    """

    def __init__(self, creator, created=None, domain=None, nonce=None):
        self.creator = creator
        self.created = created
        self.domain = domain
        self.nonce = nonce

    def __repr__(self):
        return "<SignatureOptions creator=%r created=%r domain=%r nonce=%r>" % (
            self.creator, self.created, self.domain, self.nonce)

    def to_dataset(self):
        """
        Build the options dataset.  Returns (dataset, created), CREATED
        being the timestamp actually used, so that callers do not have to
        ask for the current time a second time.
        """
        created = self.created
        if created is None:
            created = now_iso8601()

        dataset = Dataset()
        dataset.insert(OPTIONS_NODE, iri(DC_CREATED),
                       literal(created, XSD_DATETIME))
        dataset.insert(OPTIONS_NODE, iri(DC_CREATOR), iri(self.creator))
        if self.domain is not None:
            dataset.insert(OPTIONS_NODE, iri(SEC_DOMAIN), literal(self.domain))
        if self.nonce is not None:
            dataset.insert(OPTIONS_NODE, iri(SEC_NONCE), literal(self.nonce))
        return dataset, created
