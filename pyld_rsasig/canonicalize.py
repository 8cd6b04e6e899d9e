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
Canonicalization of datasets with pyld's URDNA2015 implementation.

URDNA2015 produces the same canonical N-Quads as RDFC-1.0 for the
datasets this library deals with.  Its N-degree hashing step is
exponential on degenerate, highly symmetric blank node structures, so the
canonicalizer below bounds the number of times that step may run and
reports a ToxicGraphError past the bound.
"""

import logging

from pyld import jsonld

from .dataset import IRI, BLANK_NODE
from .errors import DatasetError, ToxicGraphError, UnsupportedFeatureError

logger = logging.getLogger(__name__)

NQUADS = 'application/n-quads'

DEFAULT_MAX_DEEP_ITERATIONS = 4096


class _BoundedURDNA2015(jsonld.URDNA2015):
    def __init__(self, max_deep_iterations):
        super().__init__()
        self.max_deep_iterations = max_deep_iterations
        self.deep_iterations = 0

    def hash_n_degree_quads(self, id_, issuer):
        self.deep_iterations += 1
        if self.deep_iterations > self.max_deep_iterations:
            raise ToxicGraphError(
                "exceeded %d N-degree hash iterations"
                % self.max_deep_iterations)
        return super().hash_n_degree_quads(id_, issuer)


class Canonicalizer(object):
    """
    Turns a Dataset into its canonical serialization, as bytes.

    Implementations raise DatasetError, ToxicGraphError or
    UnsupportedFeatureError and nothing else.
    """
    def canonicalize(self, dataset):
        raise NotImplementedError()


class Urdna2015Canonicalizer(Canonicalizer):
    def __init__(self, max_deep_iterations=DEFAULT_MAX_DEEP_ITERATIONS):
        self.max_deep_iterations = max_deep_iterations

    def canonicalize(self, dataset):
        _check_strict_rdf(dataset)
        rdf_dataset = dataset.to_pyld()
        try:
            normalized = _BoundedURDNA2015(self.max_deep_iterations).main(
                rdf_dataset, {'algorithm': 'URDNA2015', 'format': NQUADS})
        except jsonld.JsonLdError as e:
            raise DatasetError("could not canonicalize dataset: %s" % e) from e
        logger.debug("canonicalized %d quads into %d bytes",
                     len(dataset), len(normalized))
        return normalized.encode('utf-8')


def _check_strict_rdf(dataset):
    # Generalized RDF has no canonical N-Quads serialization.
    for quad in dataset:
        if quad.subject.kind not in (IRI, BLANK_NODE):
            raise UnsupportedFeatureError(
                "literal in subject position: %r" % (quad.subject.value,))
        if quad.predicate.kind != IRI:
            raise UnsupportedFeatureError(
                "non-IRI predicate: %r" % (quad.predicate.value,))
        if quad.graph is not None and quad.graph.kind not in (IRI, BLANK_NODE):
            raise UnsupportedFeatureError(
                "literal graph name: %r" % (quad.graph.value,))


_default_canonicalizer = Urdna2015Canonicalizer()

def canonicalize(dataset, canonicalizer=None):
    return (canonicalizer or _default_canonicalizer).canonicalize(dataset)
