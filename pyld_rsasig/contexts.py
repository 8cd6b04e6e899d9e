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
Preloaded copies of the two legacy contexts used by RsaSignature2017
documents, and a pyld document loader serving them.

https://w3id.org/identity/v1 was used by the examples of the Linked Data
Signatures spec and by most existing implementations, but the domain it
redirected to has been abandoned, so documents referring to it cannot be
verified without a cached copy.  The copy below is the former content of
web-payments.org/contexts/identity-v1.jsonld.

https://w3id.org/security/v1 is the Security Vocabulary context, which is
still alive but stable enough to be safely cached.
"""

import copy
import json
import logging

from pyld import jsonld

logger = logging.getLogger(__name__)

SECURITY_CONTEXT_URL = 'https://w3id.org/security/v1'
SECURITY_CONTEXT = {
    "@context": {
        "id": "@id",
        "type": "@type",

        "dc": "http://purl.org/dc/terms/",
        "sec": "https://w3id.org/security#",
        "xsd": "http://www.w3.org/2001/XMLSchema#",

        "EcdsaKoblitzSignature2016": "sec:EcdsaKoblitzSignature2016",
        "Ed25519Signature2018": "sec:Ed25519Signature2018",
        "EncryptedMessage": "sec:EncryptedMessage",
        "GraphSignature2012": "sec:GraphSignature2012",
        "LinkedDataSignature2015": "sec:LinkedDataSignature2015",
        "LinkedDataSignature2016": "sec:LinkedDataSignature2016",
        "CryptographicKey": "sec:Key",

        "authenticationTag": "sec:authenticationTag",
        "canonicalizationAlgorithm": "sec:canonicalizationAlgorithm",
        "cipherAlgorithm": "sec:cipherAlgorithm",
        "cipherData": "sec:cipherData",
        "cipherKey": "sec:cipherKey",
        "created": {"@id": "dc:created", "@type": "xsd:dateTime"},
        "creator": {"@id": "dc:creator", "@type": "@id"},
        "digestAlgorithm": "sec:digestAlgorithm",
        "digestValue": "sec:digestValue",
        "domain": "sec:domain",
        "encryptionKey": "sec:encryptionKey",
        "expiration": {"@id": "sec:expiration", "@type": "xsd:dateTime"},
        "expires": {"@id": "sec:expiration", "@type": "xsd:dateTime"},
        "initializationVector": "sec:initializationVector",
        "iterationCount": "sec:iterationCount",
        "nonce": "sec:nonce",
        "normalizationAlgorithm": "sec:normalizationAlgorithm",
        "owner": {"@id": "sec:owner", "@type": "@id"},
        "password": "sec:password",
        "privateKey": {"@id": "sec:privateKey", "@type": "@id"},
        "privateKeyPem": "sec:privateKeyPem",
        "publicKey": {"@id": "sec:publicKey", "@type": "@id"},
        "publicKeyBase58": "sec:publicKeyBase58",
        "publicKeyPem": "sec:publicKeyPem",
        "publicKeyWif": "sec:publicKeyWif",
        "publicKeyService": {"@id": "sec:publicKeyService", "@type": "@id"},
        "revoked": {"@id": "sec:revoked", "@type": "xsd:dateTime"},
        "salt": "sec:salt",
        "signature": "sec:signature",
        "signatureAlgorithm": "sec:signingAlgorithm",
        "signatureValue": "sec:signatureValue"}}

IDENTITY_CONTEXT_URL = 'https://w3id.org/identity/v1'
IDENTITY_CONTEXT = {
    "@context": {
        "id": "@id",
        "type": "@type",

        "cred": "https://w3id.org/credentials#",
        "dc": "http://purl.org/dc/terms/",
        "identity": "https://w3id.org/identity#",
        "perm": "https://w3id.org/permissions#",
        "ps": "https://w3id.org/payswarm#",
        "rdf": "http://www.w3.org/1999/02/22-rdf-syntax-ns#",
        "rdfs": "http://www.w3.org/2000/01/rdf-schema#",
        "sec": "https://w3id.org/security#",
        "schema": "http://schema.org/",
        "xsd": "http://www.w3.org/2001/XMLSchema#",

        "Group": "https://www.w3.org/ns/activitystreams#Group",

        "claim": {"@id": "cred:claim", "@type": "@id"},
        "credential": {"@id": "cred:credential", "@type": "@id"},
        "issued": {"@id": "cred:issued", "@type": "xsd:dateTime"},
        "issuer": {"@id": "cred:issuer", "@type": "@id"},
        "recipient": {"@id": "cred:recipient", "@type": "@id"},
        "Credential": "cred:Credential",
        "CryptographicKeyCredential": "cred:CryptographicKeyCredential",

        "about": {"@id": "schema:about", "@type": "@id"},
        "address": {"@id": "schema:address", "@type": "@id"},
        "addressCountry": "schema:addressCountry",
        "addressLocality": "schema:addressLocality",
        "addressRegion": "schema:addressRegion",
        "comment": "rdfs:comment",
        "created": {"@id": "dc:created", "@type": "xsd:dateTime"},
        "creator": {"@id": "dc:creator", "@type": "@id"},
        "description": "schema:description",
        "email": "schema:email",
        "familyName": "schema:familyName",
        "givenName": "schema:givenName",
        "image": {"@id": "schema:image", "@type": "@id"},
        "label": "rdfs:label",
        "name": "schema:name",
        "postalCode": "schema:postalCode",
        "streetAddress": "schema:streetAddress",
        "title": "dc:title",
        "url": {"@id": "schema:url", "@type": "@id"},
        "Person": "schema:Person",
        "PostalAddress": "schema:PostalAddress",
        "Organization": "schema:Organization",

        "identityService": {"@id": "identity:identityService",
                            "@type": "@id"},
        "idp": {"@id": "identity:idp", "@type": "@id"},
        "Identity": "identity:Identity",

        "paymentProcessor": "ps:processor",
        "preferences": {"@id": "ps:preferences", "@type": "@vocab"},

        "cipherAlgorithm": "sec:cipherAlgorithm",
        "cipherData": "sec:cipherData",
        "cipherKey": "sec:cipherKey",
        "digestAlgorithm": "sec:digestAlgorithm",
        "digestValue": "sec:digestValue",
        "domain": "sec:domain",
        "expires": {"@id": "sec:expiration", "@type": "xsd:dateTime"},
        "initializationVector": "sec:initializationVector",
        "member": {"@id": "schema:member", "@type": "@id"},
        "memberOf": {"@id": "schema:memberOf", "@type": "@id"},
        "nonce": "sec:nonce",
        "normalizationAlgorithm": "sec:normalizationAlgorithm",
        "owner": {"@id": "sec:owner", "@type": "@id"},
        "password": "sec:password",
        "privateKey": {"@id": "sec:privateKey", "@type": "@id"},
        "privateKeyPem": "sec:privateKeyPem",
        "publicKey": {"@id": "sec:publicKey", "@type": "@id"},
        "publicKeyPem": "sec:publicKeyPem",
        "publicKeyService": {"@id": "sec:publicKeyService", "@type": "@id"},
        "revoked": {"@id": "sec:revoked", "@type": "xsd:dateTime"},
        "signature": "sec:signature",
        "signatureAlgorithm": "sec:signatureAlgorithm",
        "signatureValue": "sec:signatureValue",
        "CryptographicKey": "sec:Key",
        "EncryptedMessage": "sec:EncryptedMessage",
        "GraphSignature2012": "sec:GraphSignature2012",
        "LinkedDataSignature2015": "sec:LinkedDataSignature2015",

        "accessControl": {"@id": "perm:accessControl", "@type": "@id"},
        "writePermission": {"@id": "perm:writePermission", "@type": "@id"}
    }
}

PRELOADED_CONTEXTS = {
    SECURITY_CONTEXT_URL: SECURITY_CONTEXT,
    'http://w3id.org/security/v1': SECURITY_CONTEXT,
    IDENTITY_CONTEXT_URL: IDENTITY_CONTEXT,
    'http://w3id.org/identity/v1': IDENTITY_CONTEXT,
}


def _make_remote_document(url, doc):
    # Wrap in the structure that's expected to come back from a
    # documentLoader
    return {
        "contentType": "application/ld+json",
        "contextUrl": None,
        "documentUrl": url,
        "document": doc}


def preloaded(url):
    """
    Return the remote document for URL if it is one of the preloaded
    contexts, otherwise None.
    """
    doc = PRELOADED_CONTEXTS.get(url)
    if doc is None:
        return None
    return _make_remote_document(url, copy.deepcopy(doc))


def make_preloaded_loader(url_map=None, load_unknown_urls=True,
                          cache_externally_loaded=True, fallback=None):
    """
    Make a pyld document loader that serves the preloaded contexts (plus
    anything in URL_MAP) without touching the network.

    Other URLs go to FALLBACK, a pyld document loader which defaults to
    pyld's requests loader.  With LOAD_UNKNOWN_URLS unset they raise a
    JsonLdError instead.
    """
    _url_map = {
        url: _make_remote_document(url, doc)
        for url, doc in PRELOADED_CONTEXTS.items()}
    if url_map:
        _url_map.update({
            url: _make_remote_document(url, doc)
            for url, doc in url_map.items()})
    _fallback = [fallback]

    def loader(url, options=None):
        if url in _url_map:
            logger.debug("serving preloaded document for %s", url)
            return copy.deepcopy(_url_map[url])
        elif load_unknown_urls:
            if _fallback[0] is None:
                _fallback[0] = jsonld.requests_document_loader()
            logger.debug("loading %s through the fallback loader", url)
            doc = _fallback[0](url, options or {})
            if isinstance(doc["document"], str):
                doc["document"] = json.loads(doc["document"])
            if cache_externally_loaded:
                _url_map[url] = copy.deepcopy(doc)
            return doc
        else:
            raise jsonld.JsonLdError(
                "url not found and loader set to not load unknown URLs.",
                "jsonld.LoadDocumentError", {'url': url},
                code='loading document failed')

    return loader
