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

import logging

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa, utils

from .errors import LdsTypeError, SigningError, VerificationError

logger = logging.getLogger(__name__)


class SignatureSuite():
    name = None

    @classmethod
    def sign_digest(cls, private_key, digest):
        raise NotImplementedError()

    @classmethod
    def verify_digest(cls, public_key, digest, signature_value):
        raise NotImplementedError()


class RsaSignature2017(SignatureSuite):
    """
    RSASSA-PKCS1-v1_5 over the create verify hash, which is treated as an
    already computed SHA-256 digest (it is not hashed again).
    """
    name = "RsaSignature2017"

    @classmethod
    def _algorithm(cls):
        return utils.Prehashed(hashes.SHA256())

    @classmethod
    def sign_digest(cls, private_key, digest):
        if not isinstance(private_key, rsa.RSAPrivateKey):
            raise LdsTypeError(
                "[%s] private key must be an RSA private key." % cls.name)
        try:
            return private_key.sign(digest, padding.PKCS1v15(),
                                    cls._algorithm())
        except ValueError as e:
            # eg. a modulus too small for the DigestInfo
            raise SigningError("[%s] %s" % (cls.name, e)) from e

    @classmethod
    def verify_digest(cls, public_key, digest, signature_value):
        if not isinstance(public_key, rsa.RSAPublicKey):
            raise LdsTypeError(
                "[%s] public key must be an RSA public key." % cls.name)
        try:
            public_key.verify(signature_value, digest, padding.PKCS1v15(),
                              cls._algorithm())
        except InvalidSignature as e:
            logger.debug("%s signature did not verify", cls.name)
            raise VerificationError(
                "[%s] signature didn't verify." % cls.name) from e


SUITES = {
    s.name: s
    for s in [RsaSignature2017]}
