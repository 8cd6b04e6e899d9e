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
Loading of RSA keys from PEM or DER files.
"""

import os

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from .errors import LdsError, LdsTypeError

KEY_FORMATS = ("auto", "der", "pem")


def _guess_format(path, key_format):
    if key_format == "auto":
        ext = os.path.splitext(path)[1].lower()
        if ext == ".der":
            return "der"
        elif ext == ".pem":
            return "pem"
    return key_format


def _load(data, key_format, loaders, what):
    if key_format == "auto":
        for loader in loaders:
            try:
                return loader(data)
            except ValueError:
                continue
        raise LdsError("unable to determine %s format" % what)
    elif key_format == "der":
        loader = loaders[0]
    elif key_format == "pem":
        loader = loaders[1]
    else:
        raise LdsTypeError("unknown key format: %r" % (key_format,))
    try:
        return loader(data)
    except ValueError as e:
        raise LdsError("unable to read %s %s: %s"
                       % (what, key_format.upper(), e)) from e


def load_private_key(path, key_format="auto"):
    """Load a PKCS#8 RSA private key."""
    with open(path, "rb") as f:
        data = f.read()
    key = _load(
        data, _guess_format(path, key_format),
        [lambda d: serialization.load_der_private_key(
            d, password=None, backend=default_backend()),
         lambda d: serialization.load_pem_private_key(
            d, password=None, backend=default_backend())],
        "private key")
    if not isinstance(key, rsa.RSAPrivateKey):
        raise LdsTypeError("%s does not hold an RSA private key" % path)
    return key


def load_public_key(path, key_format="auto"):
    """Load a SubjectPublicKeyInfo RSA public key."""
    with open(path, "rb") as f:
        data = f.read()
    key = _load(
        data, _guess_format(path, key_format),
        [lambda d: serialization.load_der_public_key(
            d, backend=default_backend()),
         lambda d: serialization.load_pem_public_key(
            d, backend=default_backend())],
        "public key")
    if not isinstance(key, rsa.RSAPublicKey):
        raise LdsTypeError("%s does not hold an RSA public key" % path)
    return key
