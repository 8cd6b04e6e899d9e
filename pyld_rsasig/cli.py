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
pyld-rsasig: sign and verify JSON-LD documents with the RsaSignature2017
suite of Linked Data Signatures.
"""

import argparse
import asyncio
import json
import logging
import sys

from pyld import jsonld

from .document import DocumentParser, PyLdExpander, remote_document
from .errors import LdsError
from .keys import KEY_FORMATS, load_private_key, load_public_key
from .signing import insert_signature, is_valid_uri, sign

logger = logging.getLogger(__name__)


def _read_json(path):
    # No base IRI: relative IRIs must not depend on where the file lives.
    if path == "-":
        return json.load(sys.stdin)
    with open(path, "r") as f:
        return json.load(f)


def _creator(value):
    if not is_valid_uri(value):
        raise argparse.ArgumentTypeError("not an absolute IRI: %r" % value)
    return value


def cmd_sign(args):
    key = load_private_key(args.key, args.key_format)
    nonce = {}
    if args.nonce is not None:
        # An empty nonce means no nonce at all.
        nonce["nonce"] = args.nonce or None
    expander = PyLdExpander()

    for path in args.input or ["-"]:
        document = _read_json(path)
        if not isinstance(document, dict):
            raise LdsError("%s: expected JSON object, got %s"
                           % (path, type(document).__name__))
        try:
            dataset = expander.expand(remote_document(document))
        except jsonld.JsonLdError as e:
            raise LdsError("%s: unable to expand input: %s" % (path, e)) from e
        signature = sign(dataset, key, args.creator, created=args.created,
                         domain=args.domain, **nonce)
        print(json.dumps(insert_signature(document, signature)))
    return 0


def cmd_verify(args):
    key = load_public_key(args.key, args.key_format)
    parser = DocumentParser()
    status = 0

    for path in args.input or ["-"]:
        try:
            document = _read_json(path)
            signed = asyncio.run(parser.parse(remote_document(document)))
            signed.verify(key)
        except (LdsError, ValueError) as e:
            logger.warning("%s: %s", path, e)
            print("%s: FAILED" % path)
            status = 1
        else:
            print("%s: OK" % path)
    return status


def make_parser():
    parser = argparse.ArgumentParser(
        prog="pyld-rsasig",
        description="Signs and verifies JSON-LD documents with the "
                    "RsaSignature2017 suite of Linked Data Signatures")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    subparsers = parser.add_subparsers(dest="command", required=True)

    sign_parser = subparsers.add_parser("sign", help="Signs JSON-LD documents")
    sign_parser.add_argument("-c", "--creator", required=True, type=_creator,
                             metavar="URI", help="URI of the key pair")
    sign_parser.add_argument("-k", "--key", required=True, metavar="PATH",
                             help="Private key to sign the documents with")
    sign_parser.add_argument("--key-format", choices=KEY_FORMATS,
                             default="auto", help="Format of the private key")
    sign_parser.add_argument("--created", metavar="DATETIME",
                             help="The date and time of the signature "
                                  "generation in the ISO 8601 format")
    sign_parser.add_argument("--domain", help="Operational domain")
    sign_parser.add_argument("--nonce",
                             help="Nonce value; empty to omit the nonce")
    sign_parser.add_argument("input", nargs="*", help="Documents to sign")
    sign_parser.set_defaults(func=cmd_sign)

    verify_parser = subparsers.add_parser(
        "verify", help="Verifies signed JSON-LD documents")
    verify_parser.add_argument("-k", "--key", required=True, metavar="PATH",
                               help="Public key to verify the documents with")
    verify_parser.add_argument("--key-format", choices=KEY_FORMATS,
                               default="auto", help="Format of the public key")
    verify_parser.add_argument("input", nargs="*", help="Documents to verify")
    verify_parser.set_defaults(func=cmd_verify)

    return parser


def main(argv=None):
    args = make_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose > 1
        else logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s")
    try:
        return args.func(args)
    except (LdsError, OSError, ValueError) as e:
        print("pyld-rsasig: %s" % e, file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
