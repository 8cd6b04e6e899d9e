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
Extraction of RsaSignature2017 signatures embedded in JSON-LD documents.

A signed document carries its signature(s) under a top-level `signature`
entry:

    {"@context": ..., ..., "signature": {"type": "RsaSignature2017",
                                         "creator": ..., "created": ...,
                                         "signatureValue": ...}}

Parsing splits that entry off, turns each signature node into an options
object (inheriting the document's @context), and expands the document and
every options object to RDF.
"""

import asyncio
import base64
import binascii
import copy
import inspect
import logging

from pyld import jsonld

from .contexts import make_preloaded_loader
from .dataset import Dataset, iri
from .errors import (
    BadSignatureOptions, BadSignatureValue, BadSubject, DatasetError,
    DocumentExpansionError, DuplicateSignatures, LdsTypeError,
    MissingSignatureOptions, NestingSignatureNode, OptionsExpansionError,
    UnsupportedType)
from .options import DC_CREATED, DC_CREATOR, SEC_DOMAIN, SEC_NONCE, XSD_DATETIME
from .suites import RsaSignature2017
from .verification import verify

logger = logging.getLogger(__name__)


def remote_document(document, url=None, content_type=None, context_url=None):
    """
    Wrap a JSON value the way pyld document loaders return documents.
    CONTEXT_URL is the context linked from an HTTP Link header, if any.
    """
    return {
        "contentType": content_type,
        "contextUrl": context_url,
        "documentUrl": url,
        "document": document}


class Expander(object):
    """
    Expands a remote document (see remote_document()) to a Dataset.

    `expand` may be a plain method, which is run in a worker thread, or a
    coroutine function.  It raises jsonld.JsonLdError on failure.
    """
    def expand(self, remote_doc):
        raise NotImplementedError()


class PyLdExpander(Expander):
    def __init__(self, document_loader=None, options=None):
        self.document_loader = document_loader or make_preloaded_loader()
        self.options = options or {}

    def expand(self, remote_doc):
        options = {
            "documentLoader": self.document_loader,
            "produceGeneralizedRdf": False}
        if remote_doc.get("documentUrl"):
            options["base"] = remote_doc["documentUrl"]
        if remote_doc.get("contextUrl"):
            options["expandContext"] = remote_doc["contextUrl"]
        options.update(self.options)
        return Dataset.from_pyld(
            jsonld.to_rdf(remote_doc["document"], options))


class DocumentSignature(object):
    """
    One signature extracted from a signed document.  OPTIONS is the
    dataset of its metadata, ID its `id` entry (or None).
    """

    def __init__(self, options, signature_value, id=None,
                 kind=RsaSignature2017.name):
        self.options = options
        self.id = id
        self.kind = kind
        self.signature_value = signature_value

    def __repr__(self):
        return "<DocumentSignature kind=%r id=%r options=%r>" % (
            self.kind, self.id, self.options)

    # The accessors match any subject, which is fine since nested nodes
    # are rejected by the parser.

    def _first_object(self, predicate, where):
        for quad in self.options.quads_matching(
                predicate=iri(predicate), where=where):
            return quad.object.value
        return None

    def created(self):
        return self._first_object(
            DC_CREATED,
            lambda o: o.is_literal() and o.datatype == XSD_DATETIME)

    def creator(self):
        return self._first_object(DC_CREATOR, lambda o: o.is_iri())

    def domain(self):
        return self._first_object(SEC_DOMAIN, lambda o: o.is_literal())

    def nonce(self):
        return self._first_object(SEC_NONCE, lambda o: o.is_literal())

    def verify(self, dataset, public_key, canonicalizer=None):
        verify(dataset, self.options, public_key, self.signature_value,
               canonicalizer=canonicalizer)


class SignedDocument(object):
    def __init__(self, document, signatures):
        self.document = document
        self.signatures = signatures

    def __repr__(self):
        return "<SignedDocument document=%r signatures=%d>" % (
            self.document, len(self.signatures))

    @classmethod
    async def parse(cls, remote_doc):
        return await DocumentParser().parse(remote_doc)

    def verify(self, public_key, canonicalizer=None):
        """Verify every signature; the first failure raises."""
        for signature in self.signatures:
            signature.verify(self.document, public_key, canonicalizer)


class DocumentParser(object):
    """
    Parses signed JSON-LD documents.  EXPANDER expands the document;
    OPTIONS_EXPANDER, when given, expands the signature options instead of
    EXPANDER.
    """

    def __init__(self, expander=None, options_expander=None):
        self.expander = expander or PyLdExpander()
        self.options_expander = options_expander

    def with_options_expander(self, options_expander):
        return DocumentParser(self.expander, options_expander)

    def without_options_expander(self):
        return DocumentParser(self.expander)

    async def parse(self, remote_doc):
        """
        Parse REMOTE_DOC (see remote_document()) into a SignedDocument.
        The caller's JSON is left untouched.
        """
        if not isinstance(remote_doc, dict) or "document" not in remote_doc:
            raise LdsTypeError(
                "expected a remote document, see remote_document()")
        document, candidates = extract_signatures(remote_doc["document"])

        def _remote(obj):
            return remote_document(
                obj, url=remote_doc.get("documentUrl"),
                content_type=remote_doc.get("contentType"),
                context_url=remote_doc.get("contextUrl"))

        options_expander = self.options_expander or self.expander
        results = await asyncio.gather(
            _expand(self.expander, _remote(document), "document"),
            *[_expand(options_expander, _remote(options), "options")
              for options, _, _ in candidates],
            return_exceptions=True)
        # Every expansion has finished here; report the first failure.
        for result in results:
            if isinstance(result, BaseException):
                raise result

        document_dataset = results[0]
        signatures = []
        for options, (_, id, signature_value) in zip(results[1:], candidates):
            check_flat_options(options)
            signatures.append(
                DocumentSignature(options, signature_value, id=id))
        logger.debug("parsed signed document with %d signature(s)",
                     len(signatures))
        return SignedDocument(document_dataset, signatures)


async def parse(remote_doc, expander=None):
    return await DocumentParser(expander).parse(remote_doc)


async def _expand(expander, remote_doc, role):
    try:
        if inspect.iscoroutinefunction(expander.expand):
            return await expander.expand(remote_doc)
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, expander.expand, remote_doc)
    except jsonld.JsonLdError as e:
        if role == "document":
            raise DocumentExpansionError(
                "could not expand document: %s" % e) from e
        raise OptionsExpansionError(
            "could not expand signature options: %s" % e) from e
    except DatasetError as e:
        e.role = role
        raise


def _force_list(value):
    if isinstance(value, list):
        return value
    return [value]


def _candidate_objects(value):
    if not isinstance(value, list):
        value = [value]
    if not value:
        # TODO: confirm against other implementations whether an empty
        #   signature set should rather parse as an unsigned document.
        raise MissingSignatureOptions()
    for candidate in value:
        if isinstance(candidate, list):
            if not candidate:
                raise MissingSignatureOptions()
            if len(candidate) > 1:
                raise DuplicateSignatures()
            candidate = candidate[0]
        if not isinstance(candidate, dict):
            raise BadSignatureOptions()
        # the same object may appear more than once in the set
        yield copy.deepcopy(candidate)


def merge_context(document_context, options):
    """
    Put DOCUMENT_CONTEXT in front of the @context of the OPTIONS object,
    so that the options' own term definitions win.
    """
    if "@context" not in options:
        options["@context"] = copy.deepcopy(document_context)
        return options
    inherited = copy.deepcopy(_force_list(document_context))
    own = options["@context"]
    if isinstance(own, list):
        options["@context"] = inherited + own
    else:
        options["@context"] = inherited + [own]
    return options


def _is_rsa_signature_2017(type_):
    if isinstance(type_, str):
        return type_ == RsaSignature2017.name
    if isinstance(type_, list):
        return RsaSignature2017.name in [t for t in type_ if isinstance(t, str)]
    return False


def extract_signatures(document):
    """
    Split the `signature` entry off a signed JSON-LD DOCUMENT.

    Returns (document_object, [(options_object, id, signature_value)]),
    both built on a copy of DOCUMENT.

    Entries are removed by key, without checking what the keys expand to:
    only the top-level `signature` entry is removed, as existing
    implementations do, even if user content happens to use that key.
    The entries are not covered by the signature anyway.
    """
    if not isinstance(document, dict):
        raise LdsTypeError(
            "expected a JSON object, got %s" % type(document).__name__)
    document = copy.deepcopy(document)

    if "signature" not in document:
        raise MissingSignatureOptions()
    signature_entry = document.pop("signature")

    candidates = []
    for options in _candidate_objects(signature_entry):
        # Ideally the whole document would be expanded before removing the
        # signature, but that loses `signature` entries without a term
        # definition, which are common in the wild.
        if "@context" in document:
            merge_context(document["@context"], options)

        if not _is_rsa_signature_2017(options.pop("type", None)):
            raise UnsupportedType()

        id = options.pop("id", None)
        if id is not None and not isinstance(id, str):
            raise BadSubject()

        if "signatureValue" not in options:
            raise MissingSignatureOptions()
        signature_value = options.pop("signatureValue")
        if not isinstance(signature_value, str):
            raise BadSignatureValue()
        try:
            signature_value = base64.b64decode(signature_value, validate=True)
        except (binascii.Error, ValueError) as e:
            raise BadSignatureValue() from e

        candidates.append((options, id, signature_value))

    return document, candidates


def check_flat_options(options):
    """
    Make sure the options dataset describes a single blank node in the
    default graph.  Anything else means the signature node had nested
    nodes (or an @id / @graph), whose meaning is unclear.
    """
    subject = None
    for quad in options:
        if quad.graph is not None:
            raise NestingSignatureNode()
        if subject is None:
            if not quad.subject.is_blank_node():
                raise NestingSignatureNode()
            subject = quad.subject
        elif quad.subject != subject:
            raise NestingSignatureNode()
